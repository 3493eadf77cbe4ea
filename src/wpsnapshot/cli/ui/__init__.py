#!/usr/bin/env python3
from __future__ import annotations

from collections.abc import Sequence
from contextlib import contextmanager

from rich import box
from rich.align import Align
from rich.live import Live
from rich.panel import Panel
from rich.rule import Rule
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ...core.models import BackupArtifact, Site
from .prompts import (
    print_prompt_header,
    prompt_choice,
    prompt_required,
    prompt_text,
)
from .state import UIContext, format_hint, get_context

DEFAULT_CONTEXT = get_context()
THEME = DEFAULT_CONTEXT.theme
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


HOME_BANNER = r"""
                                          _           _
__      ___ __  ___ _ __   __ _ _ __  ___| |__   ___ | |_
\ \ /\ / / '_ \/ __| '_ \ / _` | '_ \/ __| '_ \ / _ \| __|
 \ V  V /| |_) \__ \ | | | (_| | |_) \__ \ | | | (_) | |_
  \_/\_/ | .__/|___/_| |_|\__,_| .__/|___/_| |_|\___/ \__|
         |_|                   |_|
"""


def configure_ui(
    *,
    no_color: bool,
    no_animations: bool,
    context: UIContext | None = None,
) -> None:
    context = _resolve_context(context)
    context.animations_enabled = not no_animations
    context.console.no_color = no_color
    context.console_err.no_color = no_color


def apply_ui_defaults(
    *,
    no_color: bool,
    no_animations: bool,
    context: UIContext | None = None,
) -> None:
    """Apply config-file UI settings on top of the command-line flags."""
    context = _resolve_context(context)
    if no_animations:
        context.animations_enabled = False
    if no_color:
        context.console.no_color = True
        context.console_err.no_color = True


@contextmanager
def status(message: str, *, quiet: bool, context: UIContext | None = None):
    context = _resolve_context(context)
    if quiet:
        yield None
        return
    if not context.animations_enabled or not context.console.is_terminal:
        context.console.print(f"[subtitle]{message}[/subtitle]")
        yield None
        return
    spinner = Spinner("dots", text=Text(message, style="subtitle"))
    with Live(
        spinner,
        console=context.console,
        transient=True,
        refresh_per_second=12,
    ) as live:
        yield live


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def build_site_table(sites: Sequence[Site]) -> Table:
    table = Table(show_header=False, box=box.MINIMAL, show_lines=False, pad_edge=False)
    table.add_column("Key", style="accent", no_wrap=True, justify="right")
    table.add_column("Site", style="site")
    table.add_column("Path", style="muted")
    for index, site in enumerate(sites, start=1):
        config_note = "" if site.config_path is not None else " (no wp-config.php)"
        table.add_row(f"{index})", site.name, f"{site.path}{config_note}")
    table.add_row("a)", "All sites", "")
    table.add_row("q)", "Quit", "")
    return table


def build_action_list(items: Sequence[str]) -> Table:
    table = Table.grid(padding=(0, 1))
    table.add_column(no_wrap=True)
    table.add_column()
    for item in items:
        table.add_row("-", Text(item))
    return table


def build_artifacts_tree(title: str, artifacts: Sequence[BackupArtifact]) -> Tree:
    tree = Tree(title, guide_style="muted")
    if not artifacts:
        tree.add("[muted]no artifacts[/muted]")
        return tree
    for artifact in artifacts:
        tree.add(f"[accent]{artifact.kind.label}[/accent] {artifact.path}")
    return tree


def panel(title: str, renderable, *, style: str = "panel") -> Panel:
    return Panel(
        renderable,
        title=title,
        title_align="left",
        border_style=style,
        box=box.ROUNDED,
        padding=(1, 2),
    )


def print_completion_panel(
    title: str,
    items: Sequence[str],
    *,
    quiet: bool,
    style: str = "success",
    use_err: bool = False,
) -> None:
    if quiet:
        return
    output = console_err if use_err else console
    output.print(panel(title, build_action_list(items), style=style))


def prompt_home_action(*, quiet: bool) -> str:
    if not quiet:
        banner = Align.center(HOME_BANNER.rstrip("\n"))
        subtitle = Align.center("[subtitle]WordPress file and database snapshots[/subtitle]")
        console.print(panel("wpsnapshot", banner, style="accent"))
        console.print(subtitle)
        console.print(Rule(style="rule"))
    return prompt_choice(
        "What would you like to do?",
        {
            "backup": "Back up WordPress sites on this host.",
            "pull": "Copy backups from a remote host to this directory.",
        },
        default="backup",
        help_text="You can also run `wpsnapshot backup` or `wpsnapshot pull` directly.",
    )


__all__ = [
    "HOME_BANNER",
    "THEME",
    "apply_ui_defaults",
    "build_action_list",
    "build_artifacts_tree",
    "build_kv_table",
    "build_site_table",
    "configure_ui",
    "console",
    "console_err",
    "format_hint",
    "panel",
    "print_completion_panel",
    "print_prompt_header",
    "prompt_choice",
    "prompt_home_action",
    "prompt_required",
    "prompt_text",
    "status",
]
