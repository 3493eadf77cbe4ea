#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    backup as backup_command,
    config as config_command,
    manpage as manpage_command,
    pull as pull_command,
)


def register(app: typer.Typer) -> None:
    backup_command.register(app)
    pull_command.register(app)
    config_command.register(app)
    manpage_command.register(app)
