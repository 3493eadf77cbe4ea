#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from ...core.models import AggregateStatus

THEME = Theme(
    {
        "title": "bold cyan",
        "subtitle": "dim",
        "accent": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "rule": "blue",
        "panel": "cyan",
        "muted": "dim",
        "site": "bold magenta",
        "status.complete": "bold green",
        "status.files_only": "yellow",
        "status.database_only": "yellow",
        "status.total_failure": "bold red",
    }
)


@dataclass
class UIContext:
    """Consoles and switches shared by every renderer in one CLI run."""

    theme: Theme
    console: Console
    console_err: Console
    animations_enabled: bool = True


def status_style(status: AggregateStatus) -> str:
    return f"status.{status.name.lower()}"


def create_default_context() -> UIContext:
    # Consoles look up sys.stdout/sys.stderr on each write, so redirection is honoured.
    return UIContext(
        theme=THEME,
        console=Console(theme=THEME),
        console_err=Console(stderr=True, theme=THEME),
    )


DEFAULT_CONTEXT = create_default_context()


def get_context() -> UIContext:
    return DEFAULT_CONTEXT


def format_hint(help_text: str) -> Text:
    hint = Text("Hint: ", style="muted")
    hint.append(help_text, style="subtitle")
    return hint
