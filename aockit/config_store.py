from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

from .config_dir import get_config_dir
from .errors import InvalidConfig

CONFIG_FILE_NAME = "config.json"
DEFAULT_BASE_URL = "https://adventofcode.com"
DEFAULT_TIMEOUT = 10.0


class ConfigStore:
    """Simple JSON-backed settings store living in the aoc-kit data directory.

    The file contains the optional keys ``base_url`` and ``timeout``. Missing
    keys fall back to the public site and a 10 second timeout.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._path = get_config_dir(base_dir) / CONFIG_FILE_NAME

    @property
    def path(self) -> Path:
        return self._path

    def save(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        payload: Dict[str, object] = self.load() or {}
        if base_url is not None:
            if not base_url.strip():
                raise InvalidConfig("Base url must not be empty")
            payload["base_url"] = base_url.strip()
        if timeout is not None:
            payload["timeout"] = float(timeout)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        # try to restrict permissions on POSIX
        try:
            if os.name == "posix":
                os.chmod(self._path, 0o600)
        except OSError:
            # best-effort only
            pass

    def load(self) -> Optional[Dict[str, object]]:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        if not isinstance(data, dict):
            return None
        return data

    def delete(self) -> None:
        if self._path.exists():
            self._path.unlink()

    # ------------------------------------------------------------------
    # Resolved values
    # ------------------------------------------------------------------
    @property
    def base_url(self) -> str:
        data = self.load() or {}
        value = str(data.get("base_url") or "").strip()
        return value or DEFAULT_BASE_URL

    @property
    def timeout(self) -> float:
        data = self.load() or {}
        try:
            return float(data.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT
