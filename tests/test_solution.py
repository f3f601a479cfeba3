from __future__ import annotations

import asyncio
import math
import sys
import textwrap
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so the local `aockit` package can be imported
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from aockit.config import Mode, RunConfig
from aockit.errors import (
    DuplicateSolve,
    InvalidAnswerType,
    InvalidModuleExport,
    ModuleLoadError,
    ModuleNotFound,
    NoAnswerProduced,
    SolverExecutionError,
)
from aockit.solution import (
    BareSolution,
    SolutionWithDefaults,
    Submission,
    define_solution,
    invoke_solution,
    load_solution,
    parse_export,
    transform_input,
)

CONFIG = RunConfig(year=2022, day=1, part=1)


def _write(tmp_path: Path, name: str, source: str) -> Path:
    fp = tmp_path / name
    fp.write_text(textwrap.dedent(source), encoding="utf-8")
    return fp


def test_load_bare_callable(tmp_path) -> None:
    fp = _write(
        tmp_path,
        "bare.py",
        """
        def solution(data, solve, config):
            solve(len(data))
        """,
    )
    export = load_solution(fp)
    assert isinstance(export, BareSolution)
    assert export.defaults == {}


def test_load_with_defaults(tmp_path) -> None:
    fp = _write(
        tmp_path,
        "paired.py",
        """
        from aockit import define_solution

        def main(data, solve):
            solve(data)

        solution = define_solution(main, day=3, part=2, mode="lines")
        """,
    )
    export = load_solution(fp)
    assert isinstance(export, SolutionWithDefaults)
    assert export.defaults == {"day": 3, "part": 2, "mode": "lines"}


def test_load_missing_file(tmp_path) -> None:
    with pytest.raises(ModuleNotFound):
        load_solution(tmp_path / "nope.py")


def test_load_broken_module(tmp_path) -> None:
    fp = _write(tmp_path, "broken.py", "raise RuntimeError('boom')\n")
    with pytest.raises(ModuleLoadError) as excinfo:
        load_solution(fp)
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_load_module_without_export(tmp_path) -> None:
    fp = _write(tmp_path, "empty.py", "x = 1\n")
    with pytest.raises(InvalidModuleExport):
        load_solution(fp)


@pytest.mark.parametrize("value", [42, "text", (print,), (print, {}, {}), ({}, print), None])
def test_parse_export_rejects_other_shapes(value) -> None:
    with pytest.raises(InvalidModuleExport):
        parse_export(value)


def test_define_solution_returns_pair() -> None:
    fn, defaults = define_solution(print, year=2020)
    assert fn is print
    assert defaults == {"year": 2020}


def test_transform_input_modes() -> None:
    assert transform_input("a\nb", Mode.TEXT) == "a\nb"
    assert transform_input("a\nb", Mode.LINES) == ["a", "b"]

    numbers = transform_input("1\n2.5\nx", Mode.NUMBERS)
    assert numbers[:2] == [1, 2.5]
    assert math.isnan(numbers[2])


def test_submission_is_single_shot() -> None:
    submission = Submission()
    submission.solve(12)
    assert submission.value == "12"
    assert submission.solved is True

    with pytest.raises(DuplicateSolve):
        submission.solve(13)
    assert submission.value == "12"


@pytest.mark.parametrize("value", [None, [1], {"a": 1}, True])
def test_submission_rejects_invalid_types(value) -> None:
    with pytest.raises(InvalidAnswerType):
        Submission().solve(value)


def test_submission_renders_integral_floats() -> None:
    submission = Submission()
    submission.solve(3.0)
    assert submission.value == "3"


def test_invoke_passes_config_when_accepted() -> None:
    seen = {}

    def solver(data, solve, config):
        seen["config"] = config
        solve(data.upper())

    submission = invoke_solution(BareSolution(solver), "abc", CONFIG)
    assert submission.value == "ABC"
    assert seen["config"] is CONFIG


def test_invoke_two_argument_solver() -> None:
    submission = invoke_solution(BareSolution(lambda data, solve: solve(sum(data))), [1, 2], CONFIG)
    assert submission.value == "3"


def test_invoke_async_solver() -> None:
    async def solver(data, solve, config):
        solve("done")

    assert invoke_solution(BareSolution(solver), "", CONFIG).value == "done"


def test_invoke_duplicate_solve() -> None:
    def solver(data, solve):
        solve(1)
        solve(2)

    with pytest.raises(DuplicateSolve):
        invoke_solution(BareSolution(solver), "", CONFIG)


def test_invoke_without_answer() -> None:
    with pytest.raises(NoAnswerProduced):
        invoke_solution(BareSolution(lambda data, solve: None), "", CONFIG)


def test_invoke_wraps_solver_errors() -> None:
    def solver(data, solve):
        raise KeyError("missing")

    with pytest.raises(SolverExecutionError) as excinfo:
        invoke_solution(BareSolution(solver), "", CONFIG)
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_invoke_async_solver_inside_running_loop() -> None:
    async def solver(data, solve, config):
        await asyncio.sleep(0)
        solve(len(data))

    async def caller():
        return invoke_solution(BareSolution(solver), "abcd", CONFIG)

    assert asyncio.run(caller()).value == "4"


def test_transform_numbers_blank_lines_are_zero() -> None:
    assert transform_input("1\n\n3", Mode.NUMBERS) == [1, 0, 3]
