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

from datetime import datetime
from pathlib import Path

from ..core.models import ArtifactKind, BackupArtifact

TIMESTAMP_FORMAT = "%d-%m-%Y_%H-%M-%S"

_NAME_PATTERNS = {
    ArtifactKind.ARCHIVE: ("{site}_{timestamp}", ".tar.gz"),
    ArtifactKind.DATABASE_DUMP: ("db_{site}_{timestamp}", ".sql"),
    ArtifactKind.CONFIG_SNAPSHOT: ("nginx_{site}_{timestamp}", ".txt"),
}


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def artifact_path(destination: Path, kind: ArtifactKind, site: str, timestamp: str) -> Path:
    """Return a fresh artifact path that does not clash with an existing file.

    Existing backups are never overwritten: when the name is taken (two runs in
    the same second) a ``-1``, ``-2``, ... suffix is added before the extension.
    """
    stem_pattern, suffix = _NAME_PATTERNS[kind]
    stem = stem_pattern.format(site=site, timestamp=timestamp)
    candidate = destination / f"{stem}{suffix}"
    counter = 1
    while _taken(candidate, kind):
        candidate = destination / f"{stem}-{counter}{suffix}"
        counter += 1
    return candidate


def _taken(path: Path, kind: ArtifactKind) -> bool:
    if path.exists():
        return True
    # dumps are renamed to .sql.gz after compression
    if kind is ArtifactKind.DATABASE_DUMP:
        return path.with_name(path.name + ".gz").exists()
    return False


def build_artifact(path: Path, kind: ArtifactKind, timestamp: str) -> BackupArtifact:
    return BackupArtifact(path=path, kind=kind, timestamp=timestamp, size=path.stat().st_size)


def format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "K", "M", "G"):
        if value < 1024:
            return f"{int(value)}B" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1024
    return f"{value:.1f}T"


def remove_partial(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        pass
