"""Top-level command dispatch: login, logout, clear, run and submit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .cache import ContentCache
from .client import AdventClient, SubmitResult
from .config import Command, RunConfig, apply_overrides, base_defaults, merge_defaults, resolve_config
from .config_dir import get_config_dir
from .config_store import ConfigStore
from .inputs import InputResolver
from .session_store import SessionStore
from .solution import invoke_solution, load_solution, transform_input

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RunRequest:
    """Normalized request produced by a front-end for ``run``/``submit``."""

    command: Command
    module_path: Union[str, Path]
    flags: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RunResult:
    config: RunConfig
    answer: str
    submit_result: Optional[SubmitResult] = None


class AocKit:
    """Wires the credential store, cache, resolver and client together."""

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        *,
        client: Optional[AdventClient] = None,
    ) -> None:
        self.root = get_config_dir(base_dir)
        if client is None:
            settings = ConfigStore(self.root)
            client = AdventClient(settings.base_url, timeout=settings.timeout)
        self.client = client
        self.cache = ContentCache(self.root)
        self.sessions = SessionStore(self.root, cache=self.cache)
        self.inputs = InputResolver(self.client, self.cache, self.sessions)

    # ------------------------------------------------------------------
    # Session commands
    # ------------------------------------------------------------------
    def login(self, token: str) -> None:
        self.sessions.save(token, self.client)
        LOGGER.debug("Session token stored in %s", self.sessions.file_path)

    def logout(self) -> None:
        self.sessions.remove()
        LOGGER.debug("Session token removed")

    def clear(self) -> None:
        self.cache.clear_all()
        LOGGER.debug("Removed data directory %s", self.root)

    # ------------------------------------------------------------------
    # Run / submit
    # ------------------------------------------------------------------
    def execute(self, request: RunRequest, *, now: Optional[datetime] = None) -> RunResult:
        command = Command(request.command)
        export = load_solution(request.module_path)

        values = merge_defaults(base_defaults(), export.defaults)
        values = apply_overrides(values, request.flags)
        config = resolve_config(values, command, export.defaults, now=now)

        text = self.inputs.resolve(config, command)
        LOGGER.info("Solution module loaded")

        data = transform_input(text, config.mode)
        submission = invoke_solution(export, data, config)
        LOGGER.debug("Captured answer %r", submission.value)

        if command is not Command.SUBMIT:
            return RunResult(config=config, answer=submission.value)

        token = self.sessions.load()
        result = self.client.submit_answer(
            config.year, config.day, config.part, submission.value, token
        )
        LOGGER.info("Answer submitted, outcome: %s", result.outcome.value)
        return RunResult(config=config, answer=submission.value, submit_result=result)
