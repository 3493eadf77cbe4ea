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

import shutil
from pathlib import Path

from ..core.models import ArtifactKind, Site, StageOutcome
from .artifacts import artifact_path, build_artifact, format_size, remove_partial

DEFAULT_VHOST_DIR = Path("/etc/nginx/sites-available")
VHOST_SUFFIXES = ("", ".conf")


class ConfigSnapshotStage:
    kind = ArtifactKind.CONFIG_SNAPSHOT

    def __init__(self, *, vhost_dir: Path = DEFAULT_VHOST_DIR) -> None:
        self.vhost_dir = Path(vhost_dir)

    def find_vhost(self, site: Site) -> Path | None:
        for suffix in VHOST_SUFFIXES:
            candidate = self.vhost_dir / f"{site.name}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def run(self, site: Site, destination: Path, timestamp: str) -> StageOutcome:
        source = self.find_vhost(site)
        if source is None:
            return StageOutcome.failure(
                self.kind,
                f"no nginx config for {site.name} in {self.vhost_dir}",
            )
        target = artifact_path(destination, self.kind, site.name, timestamp)
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            remove_partial(target)
            return StageOutcome.failure(self.kind, f"unable to copy {source}: {exc}")
        artifact = build_artifact(target, self.kind, timestamp)
        return StageOutcome.success(
            self.kind,
            f"nginx config saved: {target} ({format_size(artifact.size)})",
            artifact,
        )
