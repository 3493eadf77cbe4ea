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
import sys
import tempfile
import unittest
from pathlib import Path

from tests.test_support import REPO_ROOT, build_cli_env


class TestEndToEndCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.env = build_cli_env(
            overrides={
                "XDG_CONFIG_HOME": str(self.tmp / "xdg"),
                "NO_COLOR": "1",
                "COLUMNS": "200",
            }
        )

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, "-m", "wpsnapshot.cli", *args],
            cwd=REPO_ROOT,
            env=self.env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=False,
            timeout=120,
        )

    def _config(self, text: str) -> str:
        path = self.tmp / "config.toml"
        path.write_text(text, encoding="utf-8")
        return str(path)

    def test_help_lists_commands(self) -> None:
        result = self._run("--help")
        self.assertEqual(result.returncode, 0, result.stderr)
        for command in ("backup", "pull", "config", "manpage"):
            self.assertIn(command, result.stdout)

    def test_no_subcommand_without_tty(self) -> None:
        result = self._run()
        self.assertEqual(result.returncode, 2)
        self.assertIn("wpsnapshot --help", result.stderr)

    def test_first_run_seeds_user_config(self) -> None:
        result = self._run("config", "--print-path")
        self.assertEqual(result.returncode, 0, result.stderr)
        expected = self.tmp / "xdg" / "wpsnapshot" / "config.toml"
        self.assertTrue(expected.is_file())
        self.assertIn(str(expected), result.stdout)

    def test_backup_missing_tools_exit_code(self) -> None:
        config = self._config('[tools]\nmysqldump = "wpsnapshot-no-such-mysqldump"\n')
        result = self._run("--config", config, "backup", str(self.tmp / "out"))
        self.assertEqual(result.returncode, 3, result.stderr)
        self.assertIn("wpsnapshot-no-such-mysqldump", result.stderr)

    def test_backup_without_sites_exit_code(self) -> None:
        empty = self.tmp / "www"
        empty.mkdir()
        # every tool points at the interpreter so the PATH check passes
        config = self._config(
            "[tools]\n"
            f'tar = "{sys.executable}"\n'
            f'mysqldump = "{sys.executable}"\n'
            f'gzip = "{sys.executable}"\n'
        )
        result = self._run("--config", config, "backup", "--root", str(empty))
        self.assertEqual(result.returncode, 4, result.stderr)
        self.assertIn("no WordPress installations found", result.stderr)

    def test_bad_config_exit_code(self) -> None:
        config = self._config("[timeouts]\narchive = -1\n")
        result = self._run("--config", config, "backup")
        self.assertEqual(result.returncode, 2)
        self.assertIn("timeouts.archive", result.stderr)

    def test_manpage_to_file(self) -> None:
        target = self.tmp / "wpsnapshot.1"
        result = self._run("manpage", "-o", str(target))
        self.assertEqual(result.returncode, 0, result.stderr)
        text = target.read_text(encoding="utf-8")
        self.assertTrue(text.startswith(".TH WPSNAPSHOT 1"))
        self.assertIn("--remote-dir", text)


if __name__ == "__main__":
    unittest.main()
