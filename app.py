"""MCP adapter using the Model Context Protocol Python SDK (FastMCP).

This module registers tools exposing the aoc-kit commands (login, logout,
clear, run, submit) and settings management so MCP-aware clients can drive
puzzle runs.

Usage:
    python app.py

Note: requires the `mcp` package to be installed in the environment.
"""

from __future__ import annotations

import os
from typing import Optional

from mcp.server.fastmcp import FastMCP

from aockit import AocKit, AocKitError, Command, ConfigStore, RunRequest
from aockit.runner import RunResult

mcp = FastMCP("aoc-kit")


def _result_payload(result: RunResult) -> dict:
    payload = {
        "ok": True,
        "answer": result.answer,
        "year": result.config.year,
        "day": result.config.day,
        "part": result.config.part,
    }
    if result.submit_result is not None:
        payload["outcome"] = result.submit_result.outcome.value
        payload["message"] = result.submit_result.message
        payload["wait_seconds"] = result.submit_result.wait_seconds
    return payload


def _execute(
    command: Command,
    module_path: str,
    year: Optional[int],
    day: Optional[int],
    part: Optional[int],
    example: bool = False,
    input_path: Optional[str] = None,
) -> dict:
    request = RunRequest(
        command=command,
        module_path=module_path,
        flags={
            "input": input_path,
            "year": year,
            "day": day,
            "part": part,
            "example": example or None,
        },
    )
    try:
        return _result_payload(AocKit().execute(request))
    except AocKitError as exc:
        return {"ok": False, "error": str(exc)}


@mcp.tool()
def login(token: str) -> dict:
    """Validate and store an Advent of Code session token."""
    try:
        AocKit().login(token)
    except AocKitError as exc:
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


@mcp.tool()
def logout() -> dict:
    """Forget the stored session token and purge cached inputs."""
    try:
        AocKit().logout()
    except AocKitError as exc:
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


@mcp.tool()
def clear() -> dict:
    """Remove all aoc-kit data, session token included."""
    try:
        AocKit().clear()
    except AocKitError as exc:
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


@mcp.tool()
def run(
    module_path: str,
    year: Optional[int] = None,
    day: Optional[int] = None,
    part: Optional[int] = None,
    example: bool = False,
    input_path: Optional[str] = None,
) -> dict:
    """Run a solution module and return its answer.

    module_path: absolute path of the solution file
    """
    return _execute(Command.RUN, module_path, year, day, part, example, input_path)


@mcp.tool()
def submit(
    module_path: str,
    year: Optional[int] = None,
    day: Optional[int] = None,
    part: Optional[int] = None,
) -> dict:
    """Run a solution module on the real input and submit its answer."""
    return _execute(Command.SUBMIT, module_path, year, day, part)


@mcp.tool()
def config_show() -> dict:
    """Show the stored settings (base url, timeout)."""
    cfg = ConfigStore()
    return {"ok": True, "config": cfg.load() or {}}


@mcp.tool()
def config_set(base_url: Optional[str] = None, timeout: Optional[float] = None) -> dict:
    """Store the site base url and/or HTTP timeout."""
    cfg = ConfigStore()
    try:
        cfg.save(base_url=base_url, timeout=timeout)
    except AocKitError as exc:
        return {"ok": False, "error": str(exc)}
    return {"ok": True, "path": str(cfg.path)}


def main():
    # stdio by default so MCP clients can spawn the server directly.
    # HTTP mode: MCP_TRANSPORT=http (optionally MCP_PORT / MCP_HOST)
    transport = os.getenv("MCP_TRANSPORT", "stdio").lower()
    if transport in {"http", "streamable-http"}:
        mcp.settings.host = os.getenv("MCP_HOST", "127.0.0.1")
        port_str = os.getenv("MCP_PORT", "8001")
        try:
            mcp.settings.port = int(port_str)
        except ValueError:
            mcp.settings.port = 8001
        mcp.run(transport="streamable-http")
    else:
        mcp.run()


if __name__ == "__main__":
    main()
