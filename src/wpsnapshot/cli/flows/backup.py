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

from collections.abc import Sequence
from pathlib import Path

from ...backup.archive import ArchiveStage
from ...backup.database import DatabaseDumpStage
from ...backup.discovery import discover_sites
from ...backup.orchestrator import BackupOrchestrator
from ...backup.process import ensure_tools
from ...backup.snapshot import ConfigSnapshotStage
from ...config import AppConfig, load_app_config
from ...core.models import Site, SiteBackupResult
from ..api import apply_ui_defaults, console, status
from ..core.log import _warn
from ..core.types import BackupArgs
from ..ui.report import ConsoleReporter
from ..ui.summary import print_backup_summary
from .select import prompt_site_selection


def run_backup_command(args: BackupArgs) -> int:
    config = load_app_config(args.config)
    quiet = args.quiet or config.ui.quiet
    apply_ui_defaults(no_color=config.ui.no_color, no_animations=config.ui.no_animations)
    destination = _resolve_destination(args, config)
    root = Path(args.root).expanduser() if args.root else config.paths.sites_root

    ensure_tools(config.tools.backup_tools)
    if not config.paths.vhost_dir.is_dir():
        _warn(
            f"nginx config directory {config.paths.vhost_dir} not found; "
            "config snapshots will fail",
            quiet=quiet,
        )
    with status(f"Scanning {root} for WordPress sites...", quiet=quiet):
        sites = discover_sites(root, config_marker=config.config_marker)

    selection = prompt_site_selection(sites, root=str(root), quiet=quiet)
    if selection.cancelled:
        return 0

    results = run_backup(selection.sites, destination, config=config, quiet=quiet)
    print_backup_summary(results, destination, quiet=quiet)
    return 0


def run_backup(
    sites: Sequence[Site],
    destination: Path,
    *,
    config: AppConfig,
    quiet: bool,
) -> list[SiteBackupResult]:
    reporter = ConsoleReporter(quiet=quiet)
    orchestrator = build_orchestrator(config, reporter=reporter)
    if not quiet:
        console.print(f"Writing backups to [accent]{destination}[/accent]")
    return orchestrator.run(sites, destination)


def build_orchestrator(config: AppConfig, *, reporter: ConsoleReporter) -> BackupOrchestrator:
    tools = config.tools
    timeouts = config.timeouts
    return BackupOrchestrator(
        ArchiveStage(tar=tools.tar, timeout=timeouts.archive),
        DatabaseDumpStage(
            mysqldump=tools.mysqldump,
            gzip=tools.gzip,
            dump_timeout=timeouts.dump,
            compress_timeout=timeouts.compress,
            warn=reporter.warn,
        ),
        ConfigSnapshotStage(vhost_dir=config.paths.vhost_dir),
        reporter=reporter,
    )


def _resolve_destination(args: BackupArgs, config: AppConfig) -> Path:
    if args.destination:
        return Path(args.destination).expanduser()
    return config.paths.backup_dir
