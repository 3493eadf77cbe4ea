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

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rich.markup import escape

from ...core.models import Selection, Site
from ..api import build_site_table, console, console_err, print_prompt_header, prompt_text

ALL_TOKENS = frozenset({"a", "all"})
QUIT_TOKENS = frozenset({"q", "quit"})
SELECT_PROMPT = "Select site to backup (number/a/q):"


@dataclass(frozen=True)
class IndexChoice:
    index: int


@dataclass(frozen=True)
class AllChoice:
    pass


@dataclass(frozen=True)
class QuitChoice:
    pass


@dataclass(frozen=True)
class InvalidChoice:
    reason: str


SelectionChoice = IndexChoice | AllChoice | QuitChoice | InvalidChoice


def classify_selection(raw: str, count: int) -> SelectionChoice:
    token = raw.strip().lower()
    if not token:
        return InvalidChoice("no option entered")
    if token in ALL_TOKENS:
        return AllChoice()
    if token in QUIT_TOKENS:
        return QuitChoice()
    if token.isdecimal():
        value = int(token)
        if 1 <= value <= count:
            return IndexChoice(value - 1)
        return InvalidChoice(f"{token} is out of range (1-{count})")
    return InvalidChoice(f"{raw.strip()!r} is not a site number, 'a' or 'q'")


def resolve_selection(
    sites: Sequence[Site],
    *,
    ask: Callable[[], str],
    on_invalid: Callable[[InvalidChoice], None] | None = None,
) -> Selection:
    """Ask until the answer is a site number, ``a`` or ``q``.

    Invalid answers never end the loop; ``ask`` is called again after
    ``on_invalid`` has been told why.
    """
    sites = tuple(sites)
    while True:
        choice = classify_selection(ask(), len(sites))
        if isinstance(choice, IndexChoice):
            return Selection(sites=(sites[choice.index],))
        if isinstance(choice, AllChoice):
            return Selection(sites=sites)
        if isinstance(choice, QuitChoice):
            return Selection(cancelled=True)
        if on_invalid is not None:
            on_invalid(choice)


def prompt_site_selection(sites: Sequence[Site], *, root: str, quiet: bool) -> Selection:
    console.print(f"Available WordPress sites in [accent]{escape(root)}[/accent]:")
    console.print(build_site_table(sites))
    print_prompt_header(SELECT_PROMPT, "Enter a number, 'a' for all sites or 'q' to quit.")

    def _on_invalid(choice: InvalidChoice) -> None:
        console_err.print(
            f"[error]Invalid: {escape(choice.reason)}. Please select a valid option.[/error]"
        )

    completions = [str(index) for index in range(1, len(sites) + 1)] + ["a", "q"]
    selection = resolve_selection(
        sites,
        ask=lambda: prompt_text(SELECT_PROMPT, completions=completions),
        on_invalid=_on_invalid,
    )
    if not quiet:
        if selection.cancelled:
            console.print("[muted]Exiting.[/muted]")
        elif len(selection.sites) == len(sites) and len(sites) > 1:
            console.print("Selected: [site]All sites[/site]")
        else:
            names = ", ".join(site.name for site in selection.sites)
            console.print(f"Selected: [site]{escape(names)}[/site]")
    return selection
