#!/usr/bin/env python3
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich import box
from rich.table import Table

from ...backup.artifacts import format_size
from ...core.models import AggregateStatus, SiteBackupResult
from . import build_artifacts_tree, build_kv_table, console, panel
from .state import status_style


def build_results_table(results: Sequence[SiteBackupResult]) -> Table:
    table = Table(box=box.SIMPLE, show_lines=False)
    table.add_column("Site", style="site", no_wrap=True)
    table.add_column("Files")
    table.add_column("Database")
    table.add_column("Nginx")
    table.add_column("Result")
    for result in results:
        style = status_style(result.status)
        table.add_row(
            result.site.name,
            *(_mark(outcome.ok) for outcome in result.outcomes),
            f"[{style}]{result.status.description}[/{style}]",
        )
    return table


def print_backup_summary(
    results: Sequence[SiteBackupResult],
    destination: Path,
    *,
    quiet: bool,
) -> None:
    if quiet:
        return
    artifacts = [artifact for result in results for artifact in result.artifacts]
    total_size = sum(artifact.size for artifact in artifacts)
    complete = sum(1 for result in results if result.status is AggregateStatus.COMPLETE)
    rows = [
        ("Destination", str(destination)),
        ("Sites", f"{complete}/{len(results)} complete"),
        ("Artifacts", f"{len(artifacts)} ({format_size(total_size)})"),
    ]
    console.print()
    console.print(panel("Backup summary", build_kv_table(rows)))
    if results:
        console.print(build_results_table(results))
    if artifacts:
        console.print(panel("Artifacts", build_artifacts_tree(str(destination), artifacts)))


def _mark(ok: bool) -> str:
    return "[success]ok[/success]" if ok else "[error]failed[/error]"
