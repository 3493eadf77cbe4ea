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
from ..core.types import PullArgs
from ..flows.pull import run_pull_command

_PULL_HELP = (
    "Copy backups from a remote host with scp.\n\n"
    "The remote directory is --remote-dir, else $REMOTE_DIR, else the config value,\n"
    "else ~/wp_backups. Files land in the current directory unless --dest is given.\n\n"
    "Examples:\n"
    "  wpsnapshot pull admin@203.0.113.10\n"
    "  REMOTE_DIR=/backups wpsnapshot pull admin@vps\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PULL_HELP)(pull)


def pull(
    ctx: typer.Context,
    endpoint: str | None = typer.Argument(
        None,
        help="Remote host as user@host (prompted for when omitted).",
        show_default=False,
    ),
    remote_dir: str | None = typer.Option(
        None,
        "--remote-dir",
        help="Directory on the remote host holding the backups.",
        rich_help_panel="Inputs",
    ),
    dest: str | None = typer.Option(
        None,
        "--dest",
        "-d",
        help="Local directory to copy into (default: current directory).",
        rich_help_panel="Outputs",
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
    args = PullArgs(
        endpoint=endpoint,
        remote_dir=remote_dir,
        destination=dest,
        config=config or _ctx_value(ctx, "config"),
        debug=debug_value,
        quiet=quiet or bool(_ctx_value(ctx, "quiet")),
    )
    _run_cli(functools.partial(run_pull_command, args), debug=debug_value)
