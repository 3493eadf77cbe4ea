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

import sys

import typer

from . import command_registry
from .api import console, console_err, prompt_home_action
from .core.common import _get_version, _run_cli
from .core.types import BackupArgs, PullArgs
from .flows.backup import run_backup_command
from .flows.pull import run_pull_command
from .startup import run_startup

app = typer.Typer(add_completion=False, help="Back up WordPress sites and pull backups.")


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"wpsnapshot {_get_version()}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this TOML config file.",
        rich_help_panel="Global",
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
        rich_help_panel="Global",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output.",
        rich_help_panel="Accessibility",
    ),
    no_animations: bool = typer.Option(
        False,
        "--no-animations",
        help="Reduce motion by disabling spinners.",
        rich_help_panel="Accessibility",
    ),
    init_config: bool = typer.Option(
        False,
        "--init-config",
        help="Copy defaults to the user config directory and exit.",
        is_eager=True,
        rich_help_panel="Config",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
        rich_help_panel="Info",
    ),
) -> None:
    _ = version
    try:
        should_exit = run_startup(
            quiet=quiet,
            no_color=no_color,
            no_animations=no_animations,
            debug=debug,
            init_config=init_config,
        )
    except (OSError, RuntimeError, ValueError) as exc:
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if should_exit:
        raise typer.Exit()
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "debug": debug,
            "quiet": quiet,
            "no_color": no_color,
            "no_animations": no_animations,
        }
    )
    if ctx.invoked_subcommand is None:
        if not _stdin_is_tty():
            console_err.print(
                "[red]Error:[/red] No subcommand provided. "
                "Run `wpsnapshot --help` for available commands."
            )
            raise typer.Exit(code=2)
        action = prompt_home_action(quiet=quiet)
        if action == "pull":
            pull_args = PullArgs(config=config, debug=debug, quiet=quiet)
            _run_cli(lambda: run_pull_command(pull_args), debug=debug)
        else:
            backup_args = BackupArgs(config=config, debug=debug, quiet=quiet)
            _run_cli(lambda: run_backup_command(backup_args), debug=debug)


command_registry.register(app)


def main() -> None:
    app()
