from __future__ import annotations

import json
import sys
import textwrap
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so the local `main` module can be imported
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import main as cli
from aockit.client import SubmitResult, classify_response
from aockit.runner import AocKit

TOKEN = "d" * 128

SOLUTION = """
from aockit import define_solution


def main(data, solve):
    solve(sum(int(x) for x in data))


solution = define_solution(main, year=2022, day=4, part=1, lines=True)
"""


class FakeClient:
    def __init__(self, reply: str) -> None:
        self.reply = reply

    def validate_token(self, token: str) -> None:
        pass

    def fetch_input(self, year: int, day: int, token: str) -> str:
        return "5\n6\n"

    def submit_answer(self, year, day, part, answer, token) -> SubmitResult:
        return classify_response(self.reply)


@pytest.fixture
def data_dir(tmp_path, monkeypatch) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    monkeypatch.setenv("AOCKIT_DIR", str(root))
    return root


@pytest.fixture
def module_path(tmp_path) -> Path:
    fp = tmp_path / "day04.py"
    fp.write_text(textwrap.dedent(SOLUTION), encoding="utf-8")
    return fp


def test_run_with_custom_input(data_dir, module_path, tmp_path, capsys) -> None:
    custom = tmp_path / "input.txt"
    custom.write_text("1\n2\n3\n", encoding="utf-8")

    rc = cli.main(["run", "-i", str(custom), str(module_path)])

    assert rc == 0
    assert "Your answer: 6" in capsys.readouterr().out


def test_run_unknown_flag(data_dir, module_path, capsys) -> None:
    rc = cli.main(["run", "--fast", str(module_path)])

    assert rc == 1
    assert "Unknown flag '--fast'" in capsys.readouterr().err


def test_run_invalid_flag_value(data_dir, module_path, capsys) -> None:
    rc = cli.main(["run", "--day", "four", str(module_path)])

    assert rc == 1
    assert "Invalid argument value for flag '--day'" in capsys.readouterr().err


def test_logout_without_session(data_dir, capsys) -> None:
    rc = cli.main(["logout"])

    assert rc == 1
    assert "logged in" in capsys.readouterr().err


def test_login_rejects_short_token(data_dir, capsys) -> None:
    rc = cli.main(["login", "abc"])

    assert rc == 1
    assert "Invalid session token" in capsys.readouterr().err


def test_submit_reports_rate_limit(data_dir, module_path, monkeypatch, capsys) -> None:
    client = FakeClient("You gave an answer too recently. You have 30s left to wait.")
    kit = AocKit(data_dir, client=client)
    kit.login(TOKEN)
    monkeypatch.setattr(cli, "AocKit", lambda: kit)

    rc = cli.main(["submit", str(module_path)])

    out = capsys.readouterr().out
    assert rc == 0
    assert "Your answer: 11" in out
    assert "You submitted an answer too recently" in out
    assert "(Wait 30s before resubmitting)" in out


def test_submit_reports_correct(data_dir, module_path, monkeypatch, capsys) -> None:
    kit = AocKit(data_dir, client=FakeClient("You are one gold star closer."))
    kit.login(TOKEN)
    monkeypatch.setattr(cli, "AocKit", lambda: kit)

    rc = cli.main(["submit", "-p", "2", str(module_path)])

    out = capsys.readouterr().out
    assert rc == 0
    assert "Your answer was CORRECT" in out
    assert "DAY 4 (Part 2) OF 2022 COMPLETED" in out


def test_config_set_and_show(data_dir, capsys) -> None:
    assert cli.main(["config", "set", "--base-url", "https://aoc.example.test", "--timeout", "5"]) == 0
    capsys.readouterr()

    assert cli.main(["config", "show"]) == 0
    shown = json.loads(capsys.readouterr().out)
    assert shown == {"base_url": "https://aoc.example.test", "timeout": 5.0}


def test_clear_removes_data_dir(data_dir, capsys) -> None:
    (data_dir / "2022-1").write_text("x", encoding="utf-8")

    assert cli.main(["clear"]) == 0
    assert not data_dir.exists()


def test_blank_stored_base_url_falls_back(data_dir, capsys) -> None:
    (data_dir / "config.json").write_text(json.dumps({"base_url": " "}), encoding="utf-8")

    rc = cli.main(["logout"])

    assert rc == 1
    assert "logged in" in capsys.readouterr().err


def test_config_set_rejects_blank_base_url(data_dir, capsys) -> None:
    rc = cli.main(["config", "set", "--base-url", "  "])

    assert rc == 1
    assert "Base url must not be empty" in capsys.readouterr().err
    assert not (data_dir / "config.json").exists()


def test_unexpected_errors_are_reported(data_dir, monkeypatch, capsys) -> None:
    def broken():
        raise PermissionError("data directory is read-only")

    monkeypatch.setattr(cli, "AocKit", broken)

    rc = cli.main(["clear"])

    assert rc == 1
    assert "data directory is read-only" in capsys.readouterr().err
