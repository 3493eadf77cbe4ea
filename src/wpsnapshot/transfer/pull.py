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

import os
import re
from dataclasses import dataclass
from pathlib import Path

from ..backup.process import ToolResult, run_tool

REMOTE_DIR_ENV = "REMOTE_DIR"
DEFAULT_REMOTE_DIR = "~/wp_backups"
DEFAULT_TRANSFER_TIMEOUT = 3600

_ENDPOINT_RE = re.compile(r"^[^@\s:/]+@[^@\s:/]+$")


@dataclass(frozen=True)
class PullRequest:
    endpoint: str
    remote_dir: str
    destination: Path

    @property
    def source(self) -> str:
        return f"{self.endpoint}:{self.remote_dir.rstrip('/')}/*"


def validate_endpoint(value: str) -> str:
    endpoint = value.strip()
    if not _ENDPOINT_RE.match(endpoint):
        raise ValueError(f"endpoint must look like user@host, got {value!r}")
    return endpoint


def resolve_remote_dir(explicit: str | None, configured: str | None = None) -> str:
    for candidate in (explicit, os.environ.get(REMOTE_DIR_ENV), configured):
        if candidate and candidate.strip():
            return candidate.strip()
    return DEFAULT_REMOTE_DIR


def build_scp_command(request: PullRequest, *, scp: str = "scp") -> list[str]:
    return [scp, "-r", request.source, str(request.destination)]


def pull_backups(
    request: PullRequest,
    *,
    scp: str = "scp",
    timeout: float | None = DEFAULT_TRANSFER_TIMEOUT,
) -> ToolResult:
    return run_tool(build_scp_command(request, scp=scp), timeout=timeout)
