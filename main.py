from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, List

from termcolor import colored

from aockit import AocKit, AocKitError, Command, ConfigStore, RunRequest, SubmitOutcome
from aockit.client import SubmitResult
from aockit.errors import SolverExecutionError, UnknownFlag

LOGGER = logging.getLogger("aockit.cli")

EM_X = colored("X", "red", attrs=["bold"])
EM_TICK = colored("√", "green", attrs=["bold"])
EM_ARROW = colored("►", "blue", attrs=["bold"])
EM_STAR = colored("✶", "yellow", attrs=["bold"])


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _fail(message: object) -> int:
    print(EM_X, message, file=sys.stderr)
    return 1


def _ok(message: str) -> None:
    print(EM_TICK, message)


def _cmd_login(args: argparse.Namespace) -> int:
    AocKit().login(args.token)
    _ok("User successfully logged in")
    return 0


def _cmd_logout(args: argparse.Namespace) -> int:
    AocKit().logout()
    _ok("User successfully logged out")
    return 0


def _cmd_clear(args: argparse.Namespace) -> int:
    AocKit().clear()
    _ok("All aoc-kit data cleared")
    return 0


def _flags_from_args(args: argparse.Namespace, extras: List[str]) -> Dict[str, object]:
    flags: Dict[str, object] = {
        "input": args.input,
        "year": args.year,
        "day": args.day,
        "part": args.part,
        "example": args.example or None,
    }
    for extra in extras:
        if extra.startswith("-"):
            raise UnknownFlag(extra)
        raise AocKitError(f"Unexpected argument '{extra}'")
    return flags


def _print_submit_result(result: SubmitResult, year: int, day: int, part: int) -> None:
    print("------------------------------------------")
    outcome = result.outcome
    if outcome is SubmitOutcome.CORRECT:
        _ok("Answer successfully submitted")
        _ok("Your answer was CORRECT\n")
        print(EM_STAR, f"DAY {day} (Part {part}) OF {year} COMPLETED", EM_STAR)
    elif outcome is SubmitOutcome.ALREADY_SOLVED_OR_LOCKED:
        print(EM_X, "Either you have already completed this task or you haven't unlocked it yet")
    elif outcome is SubmitOutcome.INCORRECT_TOO_LOW:
        _ok("Answer successfully submitted")
        print(EM_X, "Your answer was INCORRECT (too low)")
    elif outcome is SubmitOutcome.INCORRECT_TOO_HIGH:
        _ok("Answer successfully submitted")
        print(EM_X, "Your answer was INCORRECT (too high)")
    elif outcome is SubmitOutcome.INCORRECT_OTHER:
        _ok("Answer successfully submitted")
        print(EM_X, "Your answer was INCORRECT")
    elif outcome is SubmitOutcome.RATE_LIMITED:
        print(EM_X, "You submitted an answer too recently")
        if result.wait_seconds is not None:
            print(f"(Wait {result.wait_seconds}s before resubmitting)")
    else:
        _ok("Answer successfully submitted")
        print(EM_X, "Unable to parse the server's response", file=sys.stderr)


def _cmd_execute(args: argparse.Namespace, extras: List[str]) -> int:
    request = RunRequest(
        command=Command(args.command),
        module_path=args.module,
        flags=_flags_from_args(args, extras),
    )
    result = AocKit().execute(request)
    print(EM_ARROW, f"Your answer: {result.answer}")
    if result.submit_result is not None:
        cfg = result.config
        _print_submit_result(result.submit_result, cfg.year, cfg.day, cfg.part)
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    cfg = ConfigStore()
    if args.action == "show":
        data = cfg.load()
        if not data:
            print("No settings found. Use 'config set' to store base url / timeout")
            return 0
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    if args.action == "delete":
        cfg.delete()
        print(f"Deleted settings file: {cfg.path}")
        return 0

    cfg.save(base_url=args.base_url, timeout=args.timeout)
    print(f"Saved settings to {cfg.path}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aoc-kit", description="Run and submit Advent of Code solutions"
    )
    parser.add_argument("--verbose", action="store_true", help="show debug logs")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # year/day/part stay strings here, the core reports bad values itself
    run_flags = argparse.ArgumentParser(add_help=False)
    run_flags.add_argument("-i", "--input", help="custom input file")
    run_flags.add_argument("-y", "--year", help="puzzle year (defaults to the latest event)")
    run_flags.add_argument("-d", "--day", help="puzzle day (1-25)")
    run_flags.add_argument("-p", "--part", help="puzzle part (1 or 2)")
    run_flags.add_argument(
        "-e", "--example", action="store_true", help="use the example input from the puzzle page"
    )
    run_flags.add_argument("module", help="path to the solution module")

    subparsers.add_parser(
        "run", parents=[run_flags], help="run a solution and print its answer"
    )
    subparsers.add_parser(
        "submit", parents=[run_flags], help="run a solution and submit its answer"
    )

    login_parser = subparsers.add_parser("login", help="validate and store a session token")
    login_parser.add_argument("token", help="128 character session cookie value")
    login_parser.set_defaults(func=_cmd_login)

    logout_parser = subparsers.add_parser("logout", help="forget the stored session token")
    logout_parser.set_defaults(func=_cmd_logout)

    clear_parser = subparsers.add_parser("clear", help="remove all aoc-kit data")
    clear_parser.set_defaults(func=_cmd_clear)

    config_parser = subparsers.add_parser("config", help="manage local settings")
    config_parser.add_argument("action", choices=["set", "show", "delete"])
    config_parser.add_argument("--base-url", dest="base_url", help="site base url (set)")
    config_parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds (set)")
    config_parser.set_defaults(func=_cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args, extras = parser.parse_known_args(argv)
    _configure_logging(args.verbose)
    try:
        if args.command in (Command.RUN.value, Command.SUBMIT.value):
            return _cmd_execute(args, extras)
        if extras:
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        return args.func(args)
    except SolverExecutionError as exc:
        LOGGER.error("Traceback from your module:", exc_info=exc.__cause__)
        return _fail(exc)
    except AocKitError as exc:
        return _fail(exc)
    except Exception as exc:
        LOGGER.debug("Unexpected failure", exc_info=exc)
        return _fail(exc)


if __name__ == "__main__":
    sys.exit(main())
