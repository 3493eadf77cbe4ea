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

from ...backup.process import ensure_tools
from ...config import load_app_config
from ...transfer.pull import PullRequest, pull_backups, resolve_remote_dir, validate_endpoint
from ..api import (
    apply_ui_defaults,
    console,
    console_err,
    print_completion_panel,
    prompt_required,
    status,
)
from ..core.types import PullArgs

EXIT_TRANSFER_FAILED = 1


def run_pull_command(args: PullArgs) -> int:
    config = load_app_config(args.config)
    quiet = args.quiet or config.ui.quiet
    apply_ui_defaults(no_color=config.ui.no_color, no_animations=config.ui.no_animations)
    ensure_tools([config.tools.scp])

    endpoint = args.endpoint
    if not endpoint:
        endpoint = prompt_required(
            "Remote host (user@host):",
            help_text="Backups are copied from this host over scp.",
        )
    request = PullRequest(
        endpoint=validate_endpoint(endpoint),
        remote_dir=resolve_remote_dir(args.remote_dir, config.pull.remote_dir),
        destination=Path(args.destination).expanduser() if args.destination else Path.cwd(),
    )

    if not quiet:
        console.print(
            f"Copying backups from [accent]{escape(request.source)}[/accent] "
            f"to [accent]{escape(str(request.destination))}[/accent]"
        )
    with status("Transferring backups...", quiet=quiet):
        result = pull_backups(request, scp=config.tools.scp, timeout=config.timeouts.transfer)

    if result.ok:
        print_completion_panel(
            "Success",
            [f"Copied {request.source}", f"Saved to {request.destination}"],
            quiet=quiet,
        )
        return 0
    console_err.print(f"[error]Failed:[/error] {escape(result.describe('scp'))}")
    return EXIT_TRANSFER_FAILED
