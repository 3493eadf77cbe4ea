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

from collections.abc import Iterator, Sequence
from pathlib import Path

from ..core.errors import NoSitesFound
from ..core.models import Site

DEFAULT_CONFIG_MARKER = "wp-config.php"
CORE_MARKERS = ("wp-load.php", "wp-includes/version.php")


class SiteScan:
    """Restartable view over the installations below ``root``.

    Every iteration re-reads the directory, so a scan object can be reused
    after sites were added or removed.
    """

    def __init__(
        self,
        root: Path,
        *,
        config_marker: str = DEFAULT_CONFIG_MARKER,
        core_markers: Sequence[str] = CORE_MARKERS,
    ) -> None:
        self.root = Path(root)
        self.config_marker = config_marker
        self.core_markers = tuple(core_markers)

    def __iter__(self) -> Iterator[Site]:
        if not self.root.is_dir():
            return
        for entry in sorted(self.root.iterdir(), key=lambda item: item.name):
            if entry.name.startswith(".") or not entry.is_dir():
                continue
            site = self._site_for(entry)
            if site is not None:
                yield site

    def _site_for(self, directory: Path) -> Site | None:
        path = directory.resolve()
        config_path = path / self.config_marker
        if config_path.is_file():
            return Site(name=directory.name, path=path, config_path=config_path)
        if any((path / marker).is_file() for marker in self.core_markers):
            return Site(name=directory.name, path=path, config_path=None)
        return None


def discover_sites(
    root: Path,
    *,
    config_marker: str = DEFAULT_CONFIG_MARKER,
) -> list[Site]:
    sites = list(SiteScan(root, config_marker=config_marker))
    if not sites:
        raise NoSitesFound(Path(root), config_marker)
    return sites
