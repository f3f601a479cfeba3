"""Core package for the aoc-kit puzzle runner."""

from .cache import ContentCache
from .client import AdventClient, SubmitOutcome, SubmitResult, classify_response
from .config import Command, Mode, RunConfig, latest_year
from .config_store import ConfigStore
from .errors import AocKitError
from .runner import AocKit, RunRequest, RunResult
from .session_store import SessionStore
from .solution import define_solution

__all__ = [
    "AdventClient",
    "AocKit",
    "AocKitError",
    "Command",
    "ConfigStore",
    "ContentCache",
    "Mode",
    "RunConfig",
    "RunRequest",
    "RunResult",
    "SessionStore",
    "SubmitOutcome",
    "SubmitResult",
    "classify_response",
    "define_solution",
    "latest_year",
]
