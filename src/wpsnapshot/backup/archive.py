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

import re
from pathlib import Path

from ..core.models import ArtifactKind, Site, StageOutcome
from .artifacts import artifact_path, build_artifact, format_size, remove_partial
from .process import run_tool

DEFAULT_ARCHIVE_TIMEOUT = 3600

_BRE_SPECIALS = re.compile(r"[.\[\]*^$\\,]")
_REPLACEMENT_SPECIALS = re.compile(r"[\\&,]")


class ArchiveStage:
    kind = ArtifactKind.ARCHIVE

    def __init__(self, *, tar: str = "tar", timeout: float | None = DEFAULT_ARCHIVE_TIMEOUT):
        self.tar = tar
        self.timeout = timeout

    def run(self, site: Site, destination: Path, timestamp: str) -> StageOutcome:
        source = site.path
        if not source.is_dir():
            return StageOutcome.failure(self.kind, f"directory {source} not found")
        if site.config_path is None or not site.config_path.is_file():
            return StageOutcome.failure(
                self.kind,
                f"{source} has no configuration file; refusing to archive an incomplete install",
            )

        target = artifact_path(destination, self.kind, site.name, timestamp)
        result = run_tool(build_tar_command(self.tar, target, site), timeout=self.timeout)
        if not result.ok or not target.is_file():
            remove_partial(target)
            return StageOutcome.failure(
                self.kind,
                f"archive failed for {source}: {result.describe(self.tar)}",
            )

        artifact = build_artifact(target, self.kind, timestamp)
        return StageOutcome.success(
            self.kind,
            f"files archived: {target} ({format_size(artifact.size)})",
            artifact,
        )


def build_tar_command(tar: str, target: Path, site: Site) -> list[str]:
    """Archive ``site.path`` so that extraction recreates ``site.name``.

    A site reached through a symlink (``blog -> releases/v42``) is archived
    from its real location, with members renamed from ``v42/`` to ``blog/``.
    """
    source = site.path
    cmd = [tar, "-czf", str(target), "-C", str(source.parent)]
    if source.name != site.name:
        pattern = _BRE_SPECIALS.sub(r"\\\g<0>", source.name)
        replacement = _REPLACEMENT_SPECIALS.sub(r"\\\g<0>", site.name)
        # S keeps symlink targets inside the site untouched.
        cmd.append(f"--transform=s,^{pattern},{replacement},S")
    cmd.append(source.name)
    return cmd
