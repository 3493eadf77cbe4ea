#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import IO

from ..core.errors import MissingToolsError

RETURNCODE_TIMEOUT = 124
RETURNCODE_NOT_FOUND = 127


@dataclass(frozen=True)
class ToolResult:
    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def timed_out(self) -> bool:
        return self.returncode == RETURNCODE_TIMEOUT

    def describe(self, tool: str) -> str:
        if self.returncode == RETURNCODE_NOT_FOUND:
            return f"{tool} not found"
        if self.timed_out:
            return f"{tool} timed out"
        detail = self.stderr.strip().splitlines()
        if detail:
            return f"{tool} exited with status {self.returncode}: {detail[-1]}"
        return f"{tool} exited with status {self.returncode}"


def run_tool(
    cmd: Sequence[str],
    *,
    timeout: float | None,
    stdout: IO[bytes] | None = None,
) -> ToolResult:
    """Run an external tool and fold every failure mode into a ``ToolResult``.

    Output goes to ``stdout`` when given (dumps are streamed straight to disk),
    otherwise it is discarded. Stderr is captured for error messages.
    """
    try:
        result = subprocess.run(
            list(cmd),
            stdout=stdout if stdout is not None else subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        return ToolResult(RETURNCODE_NOT_FOUND, f"command not found: {cmd[0]}")
    except subprocess.TimeoutExpired:
        return ToolResult(RETURNCODE_TIMEOUT, f"timeout after {timeout}s")
    stderr = result.stderr.decode("utf-8", errors="replace") if result.stderr else ""
    return ToolResult(result.returncode, stderr)


def missing_tools(tools: Iterable[str]) -> tuple[str, ...]:
    return tuple(tool for tool in tools if shutil.which(tool) is None)


def ensure_tools(tools: Iterable[str]) -> None:
    missing = missing_tools(tools)
    if missing:
        raise MissingToolsError(missing)
