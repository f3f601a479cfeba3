"""Loading and invoking user-authored solution modules.

A solution module is a regular Python file exposing a ``solution`` attribute,
either a bare callable::

    def solution(data, solve, config):
        solve(sum(data))

or a pair of the callable and its declared defaults, usually built with
`define_solution`::

    solution = define_solution(main, day=1, part=2, mode="numbers")

The callable receives the transformed input, a ``solve`` callback that must be
called exactly once with the answer, and the resolved `RunConfig`. It may be
a coroutine function.
"""

from __future__ import annotations

import asyncio
import importlib.util
import inspect
import logging
import math
import sys
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from .config import Mode, RunConfig
from .errors import (
    DuplicateSolve,
    InvalidAnswerType,
    InvalidModuleExport,
    ModuleLoadError,
    ModuleNotFound,
    NoAnswerProduced,
    SolverExecutionError,
)

LOGGER = logging.getLogger(__name__)

EXPORT_NAME = "solution"

Solver = Callable[..., Any]
InputData = Union[str, List[str], List[float]]


def define_solution(fn: Solver, **defaults: Any) -> tuple:
    """Bundle a solver with its declared defaults (year, day, part, mode...)."""
    return (fn, dict(defaults))


@dataclass(frozen=True, slots=True)
class BareSolution:
    solver: Solver

    @property
    def defaults(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True, slots=True)
class SolutionWithDefaults:
    solver: Solver
    defaults: Dict[str, Any] = field(default_factory=dict)


SolutionExport = Union[BareSolution, SolutionWithDefaults]


def parse_export(value: Any) -> SolutionExport:
    if (
        isinstance(value, (tuple, list))
        and len(value) == 2
        and callable(value[0])
        and isinstance(value[1], Mapping)
    ):
        return SolutionWithDefaults(value[0], dict(value[1]))
    if callable(value):
        return BareSolution(value)
    raise InvalidModuleExport("Invalid export of the solution module")


def load_solution(path: Union[str, Path]) -> SolutionExport:
    """Import the file at ``path`` and return its parsed ``solution`` export."""
    fp = Path(path)
    if not fp.is_absolute():
        fp = Path.cwd() / fp
    if not fp.is_file():
        raise ModuleNotFound(f"Unable to find file '{fp}'")

    spec = importlib.util.spec_from_file_location(f"aockit_solution_{fp.stem}", fp)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(f"Module import failed: '{fp}'")
    module = importlib.util.module_from_spec(spec)
    # dataclasses and pickling inside the module look themselves up here
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(spec.name, None)
        raise ModuleLoadError(f"Module import failed: '{fp}'") from exc

    if not hasattr(module, EXPORT_NAME):
        raise InvalidModuleExport(f"Module '{fp.name}' does not define '{EXPORT_NAME}'")
    LOGGER.debug("Loaded solution module %s", fp)
    return parse_export(getattr(module, EXPORT_NAME))


# ----------------------------------------------------------------------
# Answer capture
# ----------------------------------------------------------------------
class Submission:
    """The single answer captured during one solver run."""

    def __init__(self) -> None:
        self.value = ""
        self.solved = False

    def solve(self, output: Any) -> None:
        if isinstance(output, bool) or not isinstance(output, (str, int, float)):
            raise InvalidAnswerType(
                f"Output of type '{type(output).__name__}' is not a valid answer"
            )
        if self.solved:
            raise DuplicateSolve("Cannot call the solve() method multiple times")
        if isinstance(output, float) and output.is_integer():
            output = int(output)
        self.value = str(output)
        self.solved = True


# ----------------------------------------------------------------------
# Invocation
# ----------------------------------------------------------------------
def _to_number(line: str) -> Union[int, float]:
    if not line.strip():
        return 0
    try:
        return int(line)
    except ValueError:
        pass
    try:
        return float(line)
    except ValueError:
        return math.nan


def transform_input(text: str, mode: Mode) -> InputData:
    if mode is Mode.TEXT:
        return text
    lines = text.split("\n")
    if mode is Mode.NUMBERS:
        return [_to_number(line) for line in lines]
    return lines


def _accepts_config(solver: Solver) -> bool:
    try:
        sig = inspect.signature(solver)
    except (TypeError, ValueError):
        return True
    try:
        sig.bind(None, None, None)
    except TypeError:
        return False
    return True


async def _await(result: Any) -> Any:
    return await result


def _run_awaitable(result: Any) -> None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(_await(result))
        return
    # a loop is already running in this thread (e.g. the MCP server), so the
    # solver gets a loop of its own in a worker thread
    with ThreadPoolExecutor(max_workers=1) as pool:
        pool.submit(asyncio.run, _await(result)).result()


def invoke_solution(export: SolutionExport, data: InputData, config: RunConfig) -> Submission:
    """Run the solver once and return its captured answer."""
    submission = Submission()
    args: tuple = (data, submission.solve)
    if _accepts_config(export.solver):
        args += (config,)

    try:
        result = export.solver(*args)
        if inspect.isawaitable(result):
            _run_awaitable(result)
    except (DuplicateSolve, InvalidAnswerType):
        raise
    except Exception as exc:
        raise SolverExecutionError(
            f"An error occurred within your module: {exc}"
        ) from exc

    if not submission.solved:
        raise NoAnswerProduced("Your module has to call the solve() method")
    return submission
