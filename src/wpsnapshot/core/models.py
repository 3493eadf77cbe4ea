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

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class ArtifactKind(str, Enum):
    ARCHIVE = "archive"
    DATABASE_DUMP = "database-dump"
    CONFIG_SNAPSHOT = "config-snapshot"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    ArtifactKind.ARCHIVE: "Files",
    ArtifactKind.DATABASE_DUMP: "Database",
    ArtifactKind.CONFIG_SNAPSHOT: "Nginx config",
}


class StageStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class AggregateStatus(str, Enum):
    COMPLETE = "complete"
    FILES_ONLY = "files-only"
    DATABASE_ONLY = "database-only"
    TOTAL_FAILURE = "total-failure"

    @property
    def description(self) -> str:
        return _AGGREGATE_DESCRIPTIONS[self]


_AGGREGATE_DESCRIPTIONS = {
    AggregateStatus.COMPLETE: "complete success",
    AggregateStatus.FILES_ONLY: "partial: files ok, database/config failed",
    AggregateStatus.DATABASE_ONLY: "partial: database ok, files failed",
    AggregateStatus.TOTAL_FAILURE: "total failure",
}


@dataclass(frozen=True)
class Site:
    name: str
    path: Path
    config_path: Path | None = None


@dataclass(frozen=True)
class DatabaseCredentials:
    name: str
    user: str
    password: str = field(default="", repr=False)
    host: str = ""

    @property
    def resolved_host(self) -> str:
        return self.host or "localhost"


@dataclass(frozen=True)
class BackupArtifact:
    path: Path
    kind: ArtifactKind
    timestamp: str
    size: int = 0


@dataclass(frozen=True)
class StageOutcome:
    stage: ArtifactKind
    status: StageStatus
    message: str
    artifact: BackupArtifact | None = None

    @property
    def ok(self) -> bool:
        return self.status is StageStatus.SUCCESS

    @classmethod
    def success(
        cls,
        stage: ArtifactKind,
        message: str,
        artifact: BackupArtifact | None = None,
    ) -> StageOutcome:
        return cls(stage=stage, status=StageStatus.SUCCESS, message=message, artifact=artifact)

    @classmethod
    def failure(cls, stage: ArtifactKind, message: str) -> StageOutcome:
        return cls(stage=stage, status=StageStatus.FAILURE, message=message)


@dataclass(frozen=True)
class SiteBackupResult:
    site: Site
    archive: StageOutcome
    database: StageOutcome
    config_snapshot: StageOutcome
    status: AggregateStatus
    started_at: datetime | None = None

    @property
    def outcomes(self) -> tuple[StageOutcome, StageOutcome, StageOutcome]:
        return (self.archive, self.database, self.config_snapshot)

    @property
    def artifacts(self) -> tuple[BackupArtifact, ...]:
        return tuple(
            outcome.artifact for outcome in self.outcomes if outcome.artifact is not None
        )


@dataclass(frozen=True)
class Selection:
    """Sites chosen at the prompt; ``cancelled`` is set when the operator quits."""

    sites: tuple[Site, ...] = ()
    cancelled: bool = False
