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

from .ui import (
    HOME_BANNER,
    THEME,
    apply_ui_defaults,
    build_action_list,
    build_artifacts_tree,
    build_kv_table,
    build_site_table,
    configure_ui,
    console,
    console_err,
    format_hint,
    panel,
    print_completion_panel,
    print_prompt_header,
    prompt_choice,
    prompt_home_action,
    prompt_required,
    prompt_text,
    status,
)

__all__ = [
    "HOME_BANNER",
    "THEME",
    "apply_ui_defaults",
    "build_action_list",
    "build_artifacts_tree",
    "build_kv_table",
    "build_site_table",
    "configure_ui",
    "console",
    "console_err",
    "format_hint",
    "panel",
    "print_completion_panel",
    "print_prompt_header",
    "prompt_choice",
    "prompt_home_action",
    "prompt_required",
    "prompt_text",
    "status",
]
