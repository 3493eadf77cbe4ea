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

import subprocess
import unittest
from unittest import mock

from wpsnapshot.backup import process as process_module
from wpsnapshot.backup.process import (
    RETURNCODE_NOT_FOUND,
    RETURNCODE_TIMEOUT,
    ToolResult,
    ensure_tools,
    missing_tools,
    run_tool,
)
from wpsnapshot.core.errors import EXIT_MISSING_TOOLS, MissingToolsError


class TestRunTool(unittest.TestCase):
    @mock.patch.object(process_module.subprocess, "run")
    def test_success_discards_stdout_and_captures_stderr(self, run: mock.MagicMock) -> None:
        run.return_value = subprocess.CompletedProcess(["tar"], 0, stdout=None, stderr=b"")
        result = run_tool(["tar", "--version"], timeout=5)
        self.assertTrue(result.ok)
        kwargs = run.call_args.kwargs
        self.assertIs(kwargs["stdout"], subprocess.DEVNULL)
        self.assertIs(kwargs["stderr"], subprocess.PIPE)
        self.assertEqual(kwargs["timeout"], 5)
        self.assertFalse(kwargs["check"])

    @mock.patch.object(process_module.subprocess, "run")
    def test_stdout_handle_is_forwarded(self, run: mock.MagicMock) -> None:
        run.return_value = subprocess.CompletedProcess(["x"], 0, stderr=b"")
        handle = mock.MagicMock()
        run_tool(["x"], timeout=None, stdout=handle)
        self.assertIs(run.call_args.kwargs["stdout"], handle)

    @mock.patch.object(process_module.subprocess, "run")
    def test_nonzero_exit_keeps_stderr(self, run: mock.MagicMock) -> None:
        run.return_value = subprocess.CompletedProcess(
            ["tar"], 2, stderr=b"tar: warning\ntar: Cannot open: Permission denied\n"
        )
        result = run_tool(["tar"], timeout=5)
        self.assertFalse(result.ok)
        self.assertEqual(
            result.describe("tar"),
            "tar exited with status 2: tar: Cannot open: Permission denied",
        )

    @mock.patch.object(process_module.subprocess, "run", side_effect=FileNotFoundError)
    def test_missing_executable_maps_to_127(self, _run: mock.MagicMock) -> None:
        result = run_tool(["nope"], timeout=5)
        self.assertEqual(result.returncode, RETURNCODE_NOT_FOUND)
        self.assertEqual(result.describe("nope"), "nope not found")

    @mock.patch.object(
        process_module.subprocess,
        "run",
        side_effect=subprocess.TimeoutExpired(["mysqldump"], 3),
    )
    def test_timeout_maps_to_124(self, _run: mock.MagicMock) -> None:
        result = run_tool(["mysqldump"], timeout=3)
        self.assertEqual(result.returncode, RETURNCODE_TIMEOUT)
        self.assertTrue(result.timed_out)
        self.assertEqual(result.describe("mysqldump"), "mysqldump timed out")

    def test_describe_without_stderr(self) -> None:
        self.assertEqual(ToolResult(1).describe("gzip"), "gzip exited with status 1")


class TestToolChecks(unittest.TestCase):
    @mock.patch.object(process_module.shutil, "which")
    def test_missing_tools_preserves_order(self, which: mock.MagicMock) -> None:
        which.side_effect = lambda name: None if name in {"mysqldump", "gzip"} else "/bin/" + name
        self.assertEqual(missing_tools(["tar", "mysqldump", "gzip"]), ("mysqldump", "gzip"))

    @mock.patch.object(process_module.shutil, "which", return_value=None)
    def test_ensure_tools_raises(self, _which: mock.MagicMock) -> None:
        with self.assertRaises(MissingToolsError) as ctx:
            ensure_tools(["tar"])
        self.assertEqual(ctx.exception.tools, ("tar",))
        self.assertEqual(ctx.exception.exit_code, EXIT_MISSING_TOOLS)
        self.assertIn("tar", str(ctx.exception))

    @mock.patch.object(process_module.shutil, "which", return_value="/usr/bin/tool")
    def test_ensure_tools_passes(self, _which: mock.MagicMock) -> None:
        ensure_tools(["tar", "gzip"])


if __name__ == "__main__":
    unittest.main()
