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
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .installer import resolve_config_path

DEFAULT_SITES_ROOT = Path("/var/www")
DEFAULT_BACKUP_DIR = Path("/backups")
DEFAULT_VHOST_DIR = Path("/etc/nginx/sites-available")
DEFAULT_CONFIG_MARKER = "wp-config.php"


@dataclass(frozen=True)
class PathsConfig:
    sites_root: Path = DEFAULT_SITES_ROOT
    backup_dir: Path = DEFAULT_BACKUP_DIR
    vhost_dir: Path = DEFAULT_VHOST_DIR


@dataclass(frozen=True)
class ToolsConfig:
    tar: str = "tar"
    mysqldump: str = "mysqldump"
    gzip: str = "gzip"
    scp: str = "scp"

    @property
    def backup_tools(self) -> tuple[str, ...]:
        return (self.tar, self.mysqldump, self.gzip)


@dataclass(frozen=True)
class TimeoutsConfig:
    archive: int | None = 3600
    dump: int | None = 3600
    compress: int | None = 600
    transfer: int | None = 3600


@dataclass(frozen=True)
class PullConfig:
    remote_dir: str | None = None


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False
    no_animations: bool = False


@dataclass(frozen=True)
class AppConfig:
    path: Path | None = None
    paths: PathsConfig = field(default_factory=PathsConfig)
    config_marker: str = DEFAULT_CONFIG_MARKER
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    timeouts: TimeoutsConfig = field(default_factory=TimeoutsConfig)
    pull: PullConfig = field(default_factory=PullConfig)
    ui: UiDefaults = field(default_factory=UiDefaults)


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")
    data = _load_toml(config_path)
    discovery = _get_dict(data, "discovery")
    return AppConfig(
        path=config_path,
        paths=_parse_paths(_get_dict(data, "paths")),
        config_marker=_parse_str(
            discovery.get("config_marker"),
            field="discovery.config_marker",
            default=DEFAULT_CONFIG_MARKER,
        ),
        tools=_parse_tools(_get_dict(data, "tools")),
        timeouts=_parse_timeouts(_get_dict(data, "timeouts")),
        pull=PullConfig(
            remote_dir=_parse_optional_unset_str(
                _get_dict(data, "pull").get("remote_dir"), field="pull.remote_dir"
            )
        ),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
    )


def _parse_paths(cfg: dict[str, object]) -> PathsConfig:
    return PathsConfig(
        sites_root=_parse_path(
            cfg.get("sites_root"), field="paths.sites_root", default=DEFAULT_SITES_ROOT
        ),
        backup_dir=_parse_path(
            cfg.get("backup_dir"), field="paths.backup_dir", default=DEFAULT_BACKUP_DIR
        ),
        vhost_dir=_parse_path(
            cfg.get("vhost_dir"), field="paths.vhost_dir", default=DEFAULT_VHOST_DIR
        ),
    )


def _parse_tools(cfg: dict[str, object]) -> ToolsConfig:
    defaults = ToolsConfig()
    return ToolsConfig(
        tar=_parse_str(cfg.get("tar"), field="tools.tar", default=defaults.tar),
        mysqldump=_parse_str(
            cfg.get("mysqldump"), field="tools.mysqldump", default=defaults.mysqldump
        ),
        gzip=_parse_str(cfg.get("gzip"), field="tools.gzip", default=defaults.gzip),
        scp=_parse_str(cfg.get("scp"), field="tools.scp", default=defaults.scp),
    )


def _parse_timeouts(cfg: dict[str, object]) -> TimeoutsConfig:
    defaults = TimeoutsConfig()
    return TimeoutsConfig(
        archive=_parse_timeout(
            cfg.get("archive"), field="timeouts.archive", default=defaults.archive
        ),
        dump=_parse_timeout(cfg.get("dump"), field="timeouts.dump", default=defaults.dump),
        compress=_parse_timeout(
            cfg.get("compress"), field="timeouts.compress", default=defaults.compress
        ),
        transfer=_parse_timeout(
            cfg.get("transfer"), field="timeouts.transfer", default=defaults.transfer
        ),
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
        no_animations=_parse_bool(
            cfg.get("no_animations"),
            field="ui.no_animations",
            default=False,
        ),
    )


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_str(value: object, *, field: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field} must be a non-empty string")
    return normalized


def _parse_optional_unset_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_path(value: object, *, field: str, default: Path) -> Path:
    if value is None:
        return default
    text = _parse_str(value, field=field, default=str(default))
    return Path(os.path.expandvars(text)).expanduser()


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_timeout(value: object, *, field: str, default: int | None) -> int | None:
    if value is None:
        return default
    parsed = _parse_int_strict(value, field=field)
    if parsed == 0:
        return None
    if parsed < 0:
        raise ValueError(f"{field} must be a positive integer or 0")
    return parsed


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
