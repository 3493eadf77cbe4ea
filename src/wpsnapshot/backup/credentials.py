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

"""Database credential extraction from ``wp-config.php``.

The extractor is line based: for every key the first line that mentions it is
taken and the last quoted literal on that line (other than the key itself) is
the value. It does not understand PHP, so a comment such as
``// DB_NAME was 'old'`` placed before the real ``define`` wins. Callers depend
only on :class:`CredentialsExtractor`, so a stricter parser can replace it.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from ..core.errors import ConfigMissing, CredentialsIncomplete
from ..core.models import DatabaseCredentials

CREDENTIAL_KEYS = {
    "name": "DB_NAME",
    "user": "DB_USER",
    "password": "DB_PASSWORD",
    "host": "DB_HOST",
}
REQUIRED_FIELDS = ("name", "user")

_QUOTED_RE = re.compile(r"""(['"])(.*?)\1""")


class CredentialsExtractor(Protocol):
    def extract(self, path: Path | None) -> DatabaseCredentials: ...


class LineCredentialsExtractor:
    def __init__(self, keys: dict[str, str] | None = None) -> None:
        self._keys = dict(keys or CREDENTIAL_KEYS)

    def extract(self, path: Path | None) -> DatabaseCredentials:
        if path is None or not path.is_file():
            raise ConfigMissing(path)
        text = path.read_text(encoding="utf-8", errors="replace")
        values = {field: _scan_value(text, key) for field, key in self._keys.items()}
        missing = tuple(
            self._keys[field] for field in REQUIRED_FIELDS if not values.get(field)
        )
        if missing:
            raise CredentialsIncomplete(path, missing)
        return DatabaseCredentials(
            name=values["name"],
            user=values["user"],
            password=values.get("password", ""),
            host=values.get("host", ""),
        )


def extract_credentials(path: Path | None) -> DatabaseCredentials:
    return LineCredentialsExtractor().extract(path)


def _scan_value(text: str, key: str) -> str:
    for line in text.splitlines():
        if key not in line:
            continue
        literals = [value for _quote, value in _QUOTED_RE.findall(line) if value != key]
        if literals:
            return literals[-1]
        return ""
    return ""
