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

from .app import app as app, main as main
from .core.types import BackupArgs as BackupArgs, PullArgs as PullArgs
from .flows.backup import (
    build_orchestrator as build_orchestrator,
    run_backup as run_backup,
    run_backup_command as run_backup_command,
)
from .flows.pull import run_pull_command as run_pull_command
from .flows.select import (
    classify_selection as classify_selection,
    resolve_selection as resolve_selection,
)

__all__ = [
    "BackupArgs",
    "PullArgs",
    "app",
    "build_orchestrator",
    "classify_selection",
    "main",
    "resolve_selection",
    "run_backup",
    "run_backup_command",
    "run_pull_command",
]
