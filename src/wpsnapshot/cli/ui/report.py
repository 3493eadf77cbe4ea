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

from pathlib import Path

from rich.markup import escape
from rich.rule import Rule
from rich.text import Text

from ...core.models import AggregateStatus, ArtifactKind, Site, SiteBackupResult, StageOutcome
from .state import UIContext, get_context, status_style


class ConsoleReporter:
    """Print one line per stage event and one aggregate line per site.

    Informational lines respect ``quiet``; stage errors always reach stderr.
    """

    def __init__(self, *, quiet: bool, context: UIContext | None = None) -> None:
        self.quiet = quiet
        self.context = context or get_context()

    def destination_created(self, destination: Path) -> None:
        if self.quiet:
            return
        self.context.console.print(
            f"Created backup directory: [accent]{escape(str(destination))}[/accent]"
        )

    def site_started(self, site: Site) -> None:
        if self.quiet:
            return
        self.context.console.print(
            Rule(Text(f"Backing up {site.name}", style="title"), style="rule", align="left")
        )

    def stage_started(self, site: Site, kind: ArtifactKind) -> None:
        if self.quiet:
            return
        self.context.console.print(
            f"[subtitle]Starting {kind.label.lower()} backup for {escape(site.name)}...[/subtitle]"
        )

    def stage_finished(self, site: Site, outcome: StageOutcome) -> None:
        if outcome.ok:
            if not self.quiet:
                self.context.console.print(f"[success]✓[/success] {escape(outcome.message)}")
            return
        if outcome.stage is ArtifactKind.CONFIG_SNAPSHOT:
            if not self.quiet:
                self.context.console_err.print(
                    f"[warning]Warning:[/warning] {escape(outcome.message)}"
                )
            return
        self.context.console_err.print(f"[error]Error:[/error] {escape(outcome.message)}")

    def site_finished(self, result: SiteBackupResult) -> None:
        style = status_style(result.status)
        line = f"[{style}]{escape(result.site.name)}: {result.status.description}[/{style}]"
        if result.status is AggregateStatus.COMPLETE:
            if not self.quiet:
                self.context.console.print(line)
            return
        self.context.console_err.print(line)

    def warn(self, message: str) -> None:
        if self.quiet:
            return
        self.context.console_err.print(f"[warning]Warning:[/warning] {escape(message)}")
