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

from collections.abc import Callable, Iterable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Protocol

from ..core.models import (
    AggregateStatus,
    ArtifactKind,
    Site,
    SiteBackupResult,
    StageOutcome,
)
from .artifacts import format_timestamp


class BackupStage(Protocol):
    kind: ArtifactKind

    def run(self, site: Site, destination: Path, timestamp: str) -> StageOutcome: ...


class BackupReporter(Protocol):
    def destination_created(self, destination: Path) -> None: ...

    def site_started(self, site: Site) -> None: ...

    def stage_started(self, site: Site, kind: ArtifactKind) -> None: ...

    def stage_finished(self, site: Site, outcome: StageOutcome) -> None: ...

    def site_finished(self, result: SiteBackupResult) -> None: ...


def classify(
    archive: StageOutcome,
    database: StageOutcome,
    config_snapshot: StageOutcome,
) -> AggregateStatus:
    if archive.ok and database.ok and config_snapshot.ok:
        return AggregateStatus.COMPLETE
    if archive.ok and not database.ok:
        return AggregateStatus.FILES_ONLY
    if database.ok and not archive.ok:
        return AggregateStatus.DATABASE_ONLY
    return AggregateStatus.TOTAL_FAILURE


def ensure_destination(destination: Path) -> bool:
    """Create the backup directory if needed; return True when it was created."""
    if destination.is_dir():
        return False
    destination.mkdir(parents=True, exist_ok=True)
    return True


class BackupOrchestrator:
    """Run the archive, database and nginx stages for each selected site.

    Stages always run in that order and every stage is attempted even when an
    earlier one failed. Nothing raised inside a stage escapes the site it
    belongs to.
    """

    def __init__(
        self,
        archive: BackupStage,
        database: BackupStage,
        config_snapshot: BackupStage,
        *,
        reporter: BackupReporter | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.stages = (archive, database, config_snapshot)
        self.reporter = reporter
        self.clock = clock

    def run(self, sites: Iterable[Site], destination: Path) -> list[SiteBackupResult]:
        return list(self.iter_run(sites, destination))

    def iter_run(self, sites: Iterable[Site], destination: Path) -> Iterator[SiteBackupResult]:
        destination = Path(destination)
        if ensure_destination(destination) and self.reporter is not None:
            self.reporter.destination_created(destination)
        for site in sites:
            yield self.backup_site(site, destination)

    def backup_site(self, site: Site, destination: Path) -> SiteBackupResult:
        started_at = self.clock()
        timestamp = format_timestamp(started_at)
        if self.reporter is not None:
            self.reporter.site_started(site)
        archive, database, config_snapshot = (
            self._run_stage(stage, site, destination, timestamp) for stage in self.stages
        )
        result = SiteBackupResult(
            site=site,
            archive=archive,
            database=database,
            config_snapshot=config_snapshot,
            status=classify(archive, database, config_snapshot),
            started_at=started_at,
        )
        if self.reporter is not None:
            self.reporter.site_finished(result)
        return result

    def _run_stage(
        self,
        stage: BackupStage,
        site: Site,
        destination: Path,
        timestamp: str,
    ) -> StageOutcome:
        if self.reporter is not None:
            self.reporter.stage_started(site, stage.kind)
        try:
            outcome = stage.run(site, destination, timestamp)
        except (OSError, RuntimeError, ValueError) as exc:
            outcome = StageOutcome.failure(stage.kind, f"{stage.kind.label} backup error: {exc}")
        if self.reporter is not None:
            self.reporter.stage_finished(site, outcome)
        return outcome
