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

import questionary
from prompt_toolkit.completion import WordCompleter
from rich.padding import Padding
from rich.rule import Rule

from .state import UIContext, format_hint, get_context

QUESTIONARY_STYLE = questionary.Style(
    [
        ("question", "bold"),
        ("answer", "bold"),
        ("pointer", "bold"),
        ("highlighted", "reverse"),
        ("selected", "fg:ansibrightblack"),
        ("text", "fg:default bg:default noreverse"),
        ("instruction", "fg:ansibrightblack"),
        ("separator", "fg:ansibrightblack"),
    ]
)

DEFAULT_CONTEXT = get_context()
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def print_prompt_header(
    prompt: str,
    help_text: str | None,
    *,
    context: UIContext | None = None,
) -> None:
    context = _resolve_context(context)
    output = context.console
    output.print(Rule(style="rule"))
    if help_text:
        output.print(Padding(format_hint(help_text), (0, 0, 0, 1)))


def prompt_text(prompt: str, *, completions: Sequence[str] | None = None) -> str:
    """Ask for one raw line of input; Ctrl-C or EOF raises ``KeyboardInterrupt``."""
    completer = WordCompleter(list(completions), ignore_case=True) if completions else None
    value = questionary.text(
        prompt,
        qmark="",
        style=QUESTIONARY_STYLE,
        completer=completer,
    ).ask()
    if value is None:
        raise KeyboardInterrupt
    return value


def prompt_required(
    prompt: str,
    *,
    help_text: str | None = None,
    context: UIContext | None = None,
) -> str:
    context = _resolve_context(context)
    print_prompt_header(prompt, help_text, context=context)
    while True:
        value = questionary.text(prompt, qmark="", style=QUESTIONARY_STYLE).ask()
        if value is None:
            raise KeyboardInterrupt
        if value.strip():
            return value.strip()
        context.console_err.print("[red]This value is required.[/red]")


def prompt_choice(
    prompt: str,
    choices: dict[str, str],
    *,
    default: str | None = None,
    help_text: str | None = None,
    context: UIContext | None = None,
) -> str:
    context = _resolve_context(context)
    if help_text:
        context.console.print(Padding(format_hint(help_text), (0, 0, 0, 1)))
    items = [questionary.Choice(title=label, value=key) for key, label in choices.items()]
    value = questionary.select(
        prompt,
        choices=items,
        default=default,
        qmark="",
        pointer=">",
        style=QUESTIONARY_STYLE,
    ).ask()
    if value is None:
        raise KeyboardInterrupt
    return value
