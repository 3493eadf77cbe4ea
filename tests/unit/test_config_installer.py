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

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from wpsnapshot.config import installer


class TestConfigInstaller(unittest.TestCase):
    def test_user_config_dir_precedence(self) -> None:
        with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: "/tmp/xdg"}, clear=False):
            with mock.patch.object(installer.sys, "platform", "linux"):
                self.assertEqual(installer._user_config_dir(), Path("/tmp/xdg/wpsnapshot"))

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "darwin"):
                with mock.patch.object(installer.Path, "home", return_value=Path("/Users/example")):
                    self.assertEqual(
                        installer._user_config_dir(),
                        Path("/Users/example/.config/wpsnapshot"),
                    )

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "linux"):
                with mock.patch.object(
                    installer, "user_config_dir", return_value="/opt/config/wpsnapshot"
                ):
                    self.assertEqual(installer._user_config_dir(), Path("/opt/config/wpsnapshot"))

    def test_init_user_config_copies_defaults_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            user_dir = Path(tmpdir) / "cfg"
            with mock.patch.object(installer, "_user_config_dir", return_value=user_dir):
                self.assertTrue(installer.user_config_needs_init())
                self.assertEqual(installer.init_user_config(), user_dir)
                config_file = user_dir / installer.CONFIG_FILENAME
                self.assertEqual(
                    config_file.read_bytes(), installer.DEFAULT_CONFIG_PATH.read_bytes()
                )
                self.assertFalse(installer.user_config_needs_init())

                config_file.write_text("# edited\n", encoding="utf-8")
                installer.init_user_config()
                self.assertEqual(config_file.read_text(encoding="utf-8"), "# edited\n")

    def test_init_user_config_raises_when_dir_unwritable(self) -> None:
        with mock.patch.object(installer, "_user_config_dir", return_value=Path("/cfg")):
            with mock.patch.object(installer, "_ensure_user_config", return_value=False):
                with self.assertRaises(OSError):
                    installer.init_user_config()

    def test_resolve_config_path_precedence(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            user_dir = Path(tmpdir) / "cfg"
            with mock.patch.object(installer, "_user_config_dir", return_value=user_dir):
                with mock.patch.dict(os.environ, {}, clear=False):
                    os.environ.pop(installer.CONFIG_ENV, None)
                    self.assertEqual(
                        installer.resolve_config_path(), installer.DEFAULT_CONFIG_PATH
                    )
                    installer.init_user_config()
                    self.assertEqual(
                        installer.resolve_config_path(), user_dir / installer.CONFIG_FILENAME
                    )
                    with mock.patch.dict(os.environ, {installer.CONFIG_ENV: "/etc/wps.toml"}):
                        self.assertEqual(installer.resolve_config_path(), Path("/etc/wps.toml"))
                        self.assertEqual(
                            installer.resolve_config_path("explicit.toml"),
                            Path("explicit.toml"),
                        )


if __name__ == "__main__":
    unittest.main()
