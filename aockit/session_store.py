"""Persistent storage for the Advent of Code session token."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .cache import ContentCache
from .config_dir import get_config_dir
from .errors import InvalidCredential, NotLoggedIn, PersistenceError

if TYPE_CHECKING:
    from .client import AdventClient

LOGGER = logging.getLogger(__name__)

SESSION_FILE_NAME = "session"
TOKEN_LENGTH = 128


class SessionStore:
    """Manages the single on-disk session token.

    Saving or removing a token also purges cached real inputs, since they
    belong to whichever account was logged in when they were fetched.
    """

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        *,
        cache: Optional[ContentCache] = None,
    ) -> None:
        self._file = get_config_dir(base_dir) / SESSION_FILE_NAME
        self._cache = cache or ContentCache(self._file.parent)

    @property
    def file_path(self) -> Path:
        """Path to the file storing the raw token."""
        return self._file

    def save(self, token: str, client: "AdventClient") -> None:
        token = token.strip()
        if len(token) != TOKEN_LENGTH:
            raise InvalidCredential("Invalid session token")

        client.validate_token(token)

        try:
            self._file.parent.mkdir(parents=True, exist_ok=True)
            self._file.write_text(token, encoding="utf-8")
            if os.name == "posix":
                os.chmod(self._file, 0o600)
        except OSError as exc:
            raise PersistenceError("Unable to save user configuration") from exc
        LOGGER.debug("Saved session token to %s", self._file)

        self._cache.clear_puzzle_content()

    def load(self) -> str:
        """Load the stored token."""
        try:
            token = self._file.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise NotLoggedIn(
                "You don't seem to be logged in\n"
                "(Run 'aoc-kit login [session_token]' to log in)"
            ) from exc
        if not token:
            raise NotLoggedIn()
        return token

    def remove(self) -> None:
        """Delete the stored token file."""
        if not self._file.exists():
            raise NotLoggedIn()
        try:
            self._file.unlink()
        except OSError as exc:
            raise PersistenceError("Unable to remove your session token") from exc

        self._cache.clear_puzzle_content()
