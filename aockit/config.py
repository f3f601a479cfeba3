"""Run configuration: defaults, module-declared values, flag overrides."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from zoneinfo import ZoneInfo

from .errors import ConfigTypeMismatch, InvalidConfig, InvalidFlagValue, UnknownFlag

AOC_TZ = ZoneInfo("America/New_York")
FIRST_YEAR = 2015

NUMERIC_FLAGS = ("year", "day", "part")
FLAG_NAMES = ("input", "year", "day", "part", "example")


class Mode(str, Enum):
    TEXT = "text"
    LINES = "lines"
    NUMBERS = "numbers"


class Command(str, Enum):
    RUN = "run"
    SUBMIT = "submit"


@dataclass(frozen=True, slots=True)
class RunConfig:
    year: int
    day: int
    part: int
    mode: Mode = Mode.TEXT
    example: bool = False
    input: Optional[str] = None
    # deprecated, mirrors ``mode is not Mode.TEXT``
    lines: bool = False


def base_defaults() -> Dict[str, Any]:
    return {
        "year": -1,
        "day": -1,
        "part": -1,
        "example": False,
        "lines": False,
        "mode": Mode.TEXT.value,
        "input": "",
    }


def latest_year(now: Optional[datetime] = None) -> int:
    """Most recent event year: puzzles unlock on December 1st, US Eastern."""
    if now is None:
        now = datetime.now(tz=AOC_TZ)
    elif now.tzinfo is not None:
        now = now.astimezone(AOC_TZ)
    return now.year if now.month == 12 else now.year - 1


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def merge_defaults(values: Mapping[str, Any], declared: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay module-declared defaults onto ``values``.

    Only keys already present in ``values`` are considered; a declared value
    must share the primitive kind of the value it replaces.
    """
    merged = dict(values)
    for key, current in values.items():
        if key not in declared:
            continue
        value = declared[key]
        if _kind(value) != _kind(current):
            raise ConfigTypeMismatch(key, value)
        merged[key] = value
    return merged


def apply_overrides(values: Mapping[str, Any], flags: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply command-line flag values keyed by their long name."""
    merged = dict(values)
    for name, raw in flags.items():
        if name not in FLAG_NAMES:
            raise UnknownFlag(f"--{name}" if not name.startswith("-") else name)
        if raw is None:
            continue
        if name in NUMERIC_FLAGS:
            if isinstance(raw, bool):
                raise InvalidFlagValue(f"--{name}", raw)
            try:
                merged[name] = int(raw)
            except (TypeError, ValueError) as exc:
                raise InvalidFlagValue(f"--{name}", raw) from exc
        elif name == "example":
            if raw:
                merged["example"] = True
        else:
            merged["input"] = str(raw)
    return merged


def resolve_config(
    values: Mapping[str, Any],
    command: Command,
    declared: Optional[Mapping[str, Any]] = None,
    *,
    now: Optional[datetime] = None,
) -> RunConfig:
    """Validate merged values and freeze them into a `RunConfig`."""
    declared = declared or {}
    custom_input = values.get("input") or None

    if command is Command.SUBMIT:
        if custom_input:
            raise InvalidConfig(
                "You cannot submit your answer while using a custom input file"
            )
        if values.get("example"):
            raise InvalidConfig(
                "You cannot submit your answer while using the example input"
            )

    day = values["day"]
    if day == -1:
        raise InvalidConfig("Day has not been specified")
    if day not in range(1, 26):
        raise InvalidConfig(f"Day {day} is invalid")

    part = values["part"]
    if part == -1:
        raise InvalidConfig("Part has not been specified")
    if part not in (1, 2):
        raise InvalidConfig(f"Part {part} is invalid")

    newest = latest_year(now)
    year = values["year"]
    if year == -1:
        year = newest
    if year not in range(FIRST_YEAR, newest + 1):
        raise InvalidConfig(f"Year {year} is not valid")

    mode_value = values.get("mode", Mode.TEXT.value)
    if "mode" not in declared and values.get("lines"):
        mode_value = Mode.LINES.value
    try:
        mode = Mode(mode_value)
    except ValueError:
        raise InvalidConfig(f"Unknown value '{mode_value}' of property 'mode'") from None

    return RunConfig(
        year=int(year),
        day=int(day),
        part=int(part),
        mode=mode,
        example=bool(values.get("example")),
        input=custom_input,
        lines=mode is not Mode.TEXT,
    )
