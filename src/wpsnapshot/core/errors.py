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

from dataclasses import dataclass
from pathlib import Path

EXIT_MISSING_TOOLS = 3
EXIT_NO_SITES = 4


class BackupError(RuntimeError):
    """Base class for backup errors."""


@dataclass
class MissingToolsError(BackupError):
    tools: tuple[str, ...]

    exit_code = EXIT_MISSING_TOOLS

    def __str__(self) -> str:
        names = ", ".join(self.tools) or "unknown"
        return f"required tools not found on PATH: {names}"


@dataclass
class NoSitesFound(BackupError):
    root: Path
    marker: str = "wp-config.php"

    exit_code = EXIT_NO_SITES

    def __str__(self) -> str:
        return f"no WordPress installations found in {self.root}"


@dataclass
class ConfigMissing(BackupError):
    path: Path | None

    def __str__(self) -> str:
        if self.path is None:
            return "configuration file not found"
        return f"configuration file not found: {self.path}"


@dataclass
class CredentialsIncomplete(BackupError):
    path: Path
    missing: tuple[str, ...]

    def __str__(self) -> str:
        return f"incomplete database credentials in {self.path}: missing {', '.join(self.missing)}"
