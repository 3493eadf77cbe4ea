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

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from tests.test_support import TEST_TIMESTAMP, make_site, write_vhost
from wpsnapshot.backup import snapshot as snapshot_module
from wpsnapshot.backup.snapshot import ConfigSnapshotStage


class TestConfigSnapshotStage(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        tmp = Path(self._tmp.name)
        self.vhosts = tmp / "sites-available"
        self.dest = tmp / "backups"
        self.dest.mkdir()
        self.site = make_site(tmp / "www", "blog")
        self.stage = ConfigSnapshotStage(vhost_dir=self.vhosts)

    def test_copies_vhost_verbatim(self) -> None:
        source = write_vhost(self.vhosts, "blog")
        outcome = self.stage.run(self.site, self.dest, TEST_TIMESTAMP)
        self.assertTrue(outcome.ok)
        target = self.dest / f"nginx_blog_{TEST_TIMESTAMP}.txt"
        self.assertEqual(outcome.artifact.path, target)
        self.assertEqual(target.read_bytes(), source.read_bytes())

    def test_falls_back_to_conf_suffix(self) -> None:
        source = write_vhost(self.vhosts, "blog", suffix=".conf")
        self.assertEqual(self.stage.find_vhost(self.site), source)
        self.assertTrue(self.stage.run(self.site, self.dest, TEST_TIMESTAMP).ok)

    def test_exact_name_preferred_over_conf(self) -> None:
        exact = write_vhost(self.vhosts, "blog")
        write_vhost(self.vhosts, "blog", suffix=".conf")
        self.assertEqual(self.stage.find_vhost(self.site), exact)

    def test_missing_vhost_is_failure(self) -> None:
        outcome = self.stage.run(self.site, self.dest, TEST_TIMESTAMP)
        self.assertFalse(outcome.ok)
        self.assertIn("no nginx config for blog", outcome.message)
        self.assertEqual(list(self.dest.iterdir()), [])

    def test_copy_error_is_failure(self) -> None:
        write_vhost(self.vhosts, "blog")
        with mock.patch.object(
            snapshot_module.shutil, "copyfile", side_effect=PermissionError("denied")
        ):
            outcome = self.stage.run(self.site, self.dest, TEST_TIMESTAMP)
        self.assertFalse(outcome.ok)
        self.assertIn("denied", outcome.message)


if __name__ == "__main__":
    unittest.main()
