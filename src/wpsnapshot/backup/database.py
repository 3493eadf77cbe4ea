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

import os
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from ..core.errors import ConfigMissing, CredentialsIncomplete
from ..core.models import ArtifactKind, DatabaseCredentials, Site, StageOutcome
from .artifacts import artifact_path, build_artifact, format_size, remove_partial
from .credentials import CredentialsExtractor, LineCredentialsExtractor
from .process import run_tool

DEFAULT_DUMP_TIMEOUT = 3600
DEFAULT_COMPRESS_TIMEOUT = 600
DUMP_OPTIONS = ("--single-transaction", "--quick", "--no-tablespaces")

WarningCallback = Callable[[str], None]


class DatabaseDumpStage:
    """Dump one site's database with ``mysqldump`` and gzip the result.

    Credentials are read from the site's ``wp-config.php`` for each call and
    handed to ``mysqldump`` through a private option file that is removed as
    soon as the dump finishes.
    """

    kind = ArtifactKind.DATABASE_DUMP

    def __init__(
        self,
        *,
        mysqldump: str = "mysqldump",
        gzip: str = "gzip",
        dump_timeout: float | None = DEFAULT_DUMP_TIMEOUT,
        compress_timeout: float | None = DEFAULT_COMPRESS_TIMEOUT,
        extractor: CredentialsExtractor | None = None,
        warn: WarningCallback | None = None,
    ) -> None:
        self.mysqldump = mysqldump
        self.gzip = gzip
        self.dump_timeout = dump_timeout
        self.compress_timeout = compress_timeout
        self.extractor = extractor or LineCredentialsExtractor()
        self.warn = warn

    def run(self, site: Site, destination: Path, timestamp: str) -> StageOutcome:
        try:
            credentials = self.extractor.extract(site.config_path)
        except (ConfigMissing, CredentialsIncomplete) as exc:
            return StageOutcome.failure(self.kind, str(exc))

        target = artifact_path(destination, self.kind, site.name, timestamp)
        with _option_file(credentials) as option_file:
            cmd = [
                self.mysqldump,
                f"--defaults-extra-file={option_file}",
                *DUMP_OPTIONS,
                credentials.name,
            ]
            with target.open("wb") as handle:
                result = run_tool(cmd, timeout=self.dump_timeout, stdout=handle)

        if not result.ok:
            remove_partial(target)
            return StageOutcome.failure(
                self.kind,
                f"database dump failed for {credentials.name}: {result.describe(self.mysqldump)}",
            )
        if target.stat().st_size == 0:
            remove_partial(target)
            return StageOutcome.failure(
                self.kind,
                f"database dump for {credentials.name} is empty "
                "(check credentials and database host)",
            )

        final_path = self._compress(target)
        artifact = build_artifact(final_path, self.kind, timestamp)
        return StageOutcome.success(
            self.kind,
            f"database dumped: {final_path} ({format_size(artifact.size)})",
            artifact,
        )

    def _compress(self, dump_path: Path) -> Path:
        compressed = dump_path.with_name(dump_path.name + ".gz")
        result = run_tool([self.gzip, "-f", str(dump_path)], timeout=self.compress_timeout)
        if result.ok and compressed.is_file():
            return compressed
        if self.warn is not None:
            self.warn(
                f"compression failed, keeping uncompressed dump {dump_path}: "
                f"{result.describe(self.gzip)}"
            )
        if dump_path.is_file():
            remove_partial(compressed)
            return dump_path
        return compressed


def build_option_file_text(credentials: DatabaseCredentials) -> str:
    lines = ["[client]", f"user={_quote_option(credentials.user)}"]
    if credentials.password:
        lines.append(f"password={_quote_option(credentials.password)}")
    host, port, socket = split_host(credentials.resolved_host)
    lines.append(f"host={_quote_option(host)}")
    if port is not None:
        lines.append(f"port={port}")
    if socket is not None:
        lines.append(f"socket={_quote_option(socket)}")
    return "\n".join(lines) + "\n"


def split_host(value: str) -> tuple[str, int | None, str | None]:
    """Split a WordPress ``DB_HOST`` into host, port and socket parts."""
    host = value.strip() or "localhost"
    if ":" not in host or (host.count(":") > 1 and not host.startswith("[")):
        # bare IPv6 addresses carry several colons and no port
        return host, None, None
    name, _, rest = host.rpartition(":")
    name = name.strip("[]") or "localhost"
    if rest.isdigit():
        return name, int(rest), None
    if rest.startswith("/"):
        return name, None, rest
    return host, None, None


def _quote_option(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@contextmanager
def _option_file(credentials: DatabaseCredentials) -> Iterator[str]:
    fd, path = tempfile.mkstemp(prefix="wpsnapshot-", suffix=".cnf")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(build_option_file_text(credentials))
        yield path
    finally:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
