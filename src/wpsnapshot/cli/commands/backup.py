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

import functools

import typer

from ..core.common import _ctx_value, _run_cli
from ..core.types import BackupArgs
from ..flows.backup import run_backup_command

_BACKUP_HELP = (
    "Back up WordPress sites found under the sites root.\n\n"
    "Each selected site gets a files archive, a database dump and a copy of its nginx\n"
    "virtual-host file, written to DESTINATION (default from config: /backups).\n\n"
    "Examples:\n"
    "  wpsnapshot backup\n"
    "  wpsnapshot backup /mnt/backups\n"
    "  wpsnapshot backup --root /srv/www\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_BACKUP_HELP)(backup)


def backup(
    ctx: typer.Context,
    destination: str | None = typer.Argument(
        None,
        help="Directory to write backups into (created if missing).",
        show_default=False,
    ),
    root: str | None = typer.Option(
        None,
        "--root",
        "-r",
        help="Directory containing the WordPress installations.",
        rich_help_panel="Inputs",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this config file.",
        rich_help_panel="Config",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show tracebacks for unexpected errors.",
        rich_help_panel="Debug",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Behavior",
    ),
) -> None:
    debug_value = debug or bool(_ctx_value(ctx, "debug"))
    args = BackupArgs(
        destination=destination,
        root=root,
        config=config or _ctx_value(ctx, "config"),
        debug=debug_value,
        quiet=quiet or bool(_ctx_value(ctx, "quiet")),
    )
    _run_cli(functools.partial(run_backup_command, args), debug=debug_value)
