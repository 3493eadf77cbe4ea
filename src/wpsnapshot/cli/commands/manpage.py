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

import datetime
from pathlib import Path

import click
import typer

from ..api import console


def register(app: typer.Typer) -> None:
    app.command(help="Generate a manpage for the CLI.")(manpage)


def manpage(
    ctx: typer.Context,
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the manpage to a file (default: stdout).",
    ),
) -> None:
    man = render_manpage(ctx.find_root().command)
    if output:
        output.write_text(man, encoding="utf-8")
    else:
        console.print(man, markup=False, highlight=False)


def render_manpage(command: click.Command) -> str:
    sections = [
        f'.TH WPSNAPSHOT 1 "{_today()}" "wpsnapshot" "User Commands"',
        ".SH NAME",
        "wpsnapshot \\- WordPress file, database and nginx config backups",
        ".SH SYNOPSIS",
        ".nf",
        _plain_help(command, "wpsnapshot"),
        ".fi",
    ]
    if isinstance(command, click.Group):
        sections.append(".SH COMMANDS")
        for name in sorted(command.commands):
            sub = command.commands[name]
            sections.extend([f".SS {name}", ".nf", _plain_help(sub, f"wpsnapshot {name}"), ".fi"])
    return "\n".join(sections) + "\n"


def _plain_help(command: click.Command, name: str) -> str:
    # Typer's help formatting prints to the terminal; build plain text from the params.
    with click.Context(command, info_name=name, terminal_width=80) as ctx:
        formatter = ctx.make_formatter()
        formatter.write_usage(ctx.command_path, " ".join(command.collect_usage_pieces(ctx)))
        if command.help:
            formatter.write_paragraph()
            with formatter.indentation():
                formatter.write_text(command.help)
        records = []
        for param in command.get_params(ctx):
            record = param.get_help_record(ctx)
            if record is not None:
                records.append(record)
        if records:
            with formatter.section("Options"):
                formatter.write_dl(records)
        if isinstance(command, click.Group):
            rows = []
            for sub_name in command.list_commands(ctx):
                sub = command.get_command(ctx, sub_name)
                if sub is not None and not sub.hidden:
                    rows.append((sub_name, sub.get_short_help_str(limit=60)))
            if rows:
                with formatter.section("Commands"):
                    formatter.write_dl(rows)
        return formatter.getvalue().rstrip("\n")


def _today() -> str:
    return datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d")
