"""Filesystem-backed cache of puzzle inputs and example inputs."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import Optional

from .config_dir import get_config_dir
from .errors import PersistenceError

LOGGER = logging.getLogger(__name__)

EXAMPLE_SUFFIX = "e"
_REAL_ENTRY = re.compile(r"^\d+-\d+$")


class ContentCache:
    """Key -> text store addressed by ``(year, day, example)``.

    Every entry is one file in the data directory named ``<year>-<day>``, with
    an ``e`` suffix for example content.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._root = get_config_dir(base_dir)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, year: int, day: int, example: bool) -> Path:
        suffix = EXAMPLE_SUFFIX if example else ""
        return self._root / f"{year}-{day}{suffix}"

    def get(self, year: int, day: int, example: bool) -> Optional[str]:
        """Return the cached text, or None when there is nothing usable."""
        fp = self.path_for(year, day, example)
        try:
            data = fp.read_text(encoding="utf-8")
        except OSError:
            # missing and unreadable files are both a cache miss
            return None
        return data or None

    def put(self, year: int, day: int, example: bool, text: str) -> None:
        fp = self.path_for(year, day, example)
        try:
            fp.parent.mkdir(parents=True, exist_ok=True)
            fp.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Unable to write cache file '{fp}'") from exc
        LOGGER.debug("Cached %d characters at %s", len(text), fp)

    def clear_puzzle_content(self) -> None:
        """Remove cached real inputs; example entries and the session stay."""
        if not self._root.exists():
            return
        for fp in self._root.iterdir():
            if not fp.is_file() or not _REAL_ENTRY.match(fp.name):
                continue
            try:
                fp.unlink()
            except OSError as exc:
                raise PersistenceError(f"Unable to remove cache file '{fp}'") from exc
            LOGGER.debug("Removed cached input %s", fp.name)

    def clear_all(self) -> None:
        """Remove the whole data directory, credential included."""
        try:
            shutil.rmtree(self._root, ignore_errors=False)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise PersistenceError("Unable to clear the cache") from exc
