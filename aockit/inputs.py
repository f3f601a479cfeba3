from __future__ import annotations

import logging
from pathlib import Path

from .cache import ContentCache
from .client import AdventClient
from .config import Command, RunConfig
from .errors import CustomInputNotFound, ReadError
from .session_store import SessionStore

LOGGER = logging.getLogger(__name__)


class InputResolver:
    """Picks the input source for a run: custom file, example, or real input."""

    def __init__(
        self,
        client: AdventClient,
        cache: ContentCache,
        sessions: SessionStore,
    ) -> None:
        self.client = client
        self.cache = cache
        self.sessions = sessions

    def resolve(self, config: RunConfig, command: Command = Command.RUN) -> str:
        if command is Command.SUBMIT:
            text = self.load_real(config)
        elif config.input:
            text = self.load_custom(config.input)
        elif config.example:
            text = self.load_example(config)
        else:
            text = self.load_real(config)
        return text.strip()

    def load_custom(self, path: str) -> str:
        fp = Path(path)
        if not fp.is_absolute():
            fp = Path.cwd() / fp
        if not fp.exists():
            raise CustomInputNotFound(f"Input file '{path}' doesn't exist")
        try:
            data = fp.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(f"Unable to read file '{path}'") from exc
        LOGGER.info("Input (custom) loaded from file '%s'", path)
        return data

    def load_example(self, config: RunConfig) -> str:
        cached = self.cache.get(config.year, config.day, True)
        if cached:
            LOGGER.info("Input (example) loaded from cache")
            return cached

        example = self.client.fetch_example(config.year, config.day)
        self.cache.put(config.year, config.day, True, example)
        LOGGER.info("Input (example) fetched from network")
        return example

    def load_real(self, config: RunConfig) -> str:
        cached = self.cache.get(config.year, config.day, False)
        if cached:
            LOGGER.info("Input loaded from cache")
            return cached

        token = self.sessions.load()
        data = self.client.fetch_input(config.year, config.day, token)
        self.cache.put(config.year, config.day, False, data)
        LOGGER.info("Input fetched from network")
        return data
