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
import unittest
from pathlib import Path
from unittest import mock

from qrcards.config import installer


class TestConfigInstaller(unittest.TestCase):
    def test_user_config_path_precedence(self) -> None:
        with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: "/tmp/xdg"}, clear=False):
            with mock.patch.object(installer.sys, "platform", "linux"):
                self.assertEqual(
                    installer.user_config_path(),
                    Path("/tmp/xdg/qrcards/config.toml"),
                )

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "darwin"):
                with mock.patch.object(installer.Path, "home", return_value=Path("/Users/example")):
                    self.assertEqual(
                        installer.user_config_path(),
                        Path("/Users/example/.config/qrcards/config.toml"),
                    )

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "linux"):
                with mock.patch.object(
                    installer, "user_config_dir", return_value="/opt/config/qrcards"
                ):
                    self.assertEqual(
                        installer.user_config_path(),
                        Path("/opt/config/qrcards/config.toml"),
                    )

    def test_packaged_default_exists(self) -> None:
        self.assertTrue(installer.DEFAULT_CONFIG_PATH.is_file())

    def test_resolve_config_path_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            explicit = Path(tmpdir) / "explicit.toml"
            env_path = Path(tmpdir) / "env.toml"
            user_path = Path(tmpdir) / "user.toml"
            for path in (explicit, env_path, user_path):
                path.write_text("", encoding="utf-8")

            with mock.patch.object(installer, "user_config_path", return_value=user_path):
                with mock.patch.dict(os.environ, {installer.CONFIG_ENV: str(env_path)}):
                    self.assertEqual(installer.resolve_config_path(explicit), explicit)
                    self.assertEqual(installer.resolve_config_path(), env_path)
                with mock.patch.dict(os.environ, {installer.CONFIG_ENV: ""}):
                    self.assertEqual(installer.resolve_config_path(), user_path)
                    user_path.unlink()
                    self.assertEqual(
                        installer.resolve_config_path(),
                        installer.DEFAULT_CONFIG_PATH,
                    )

    def test_resolve_config_path_missing_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "missing.toml"
            with self.assertRaisesRegex(ValueError, "config file not found"):
                installer.resolve_config_path(missing)
            with mock.patch.dict(os.environ, {installer.CONFIG_ENV: str(missing)}):
                with self.assertRaisesRegex(ValueError, installer.CONFIG_ENV):
                    installer.resolve_config_path()

    def test_init_user_config_copies_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            dest = Path(tmpdir) / "nested" / "config.toml"
            with mock.patch.object(installer, "user_config_path", return_value=dest):
                self.assertEqual(installer.init_user_config(), dest)
                self.assertEqual(
                    dest.read_text(encoding="utf-8"),
                    installer.DEFAULT_CONFIG_PATH.read_text(encoding="utf-8"),
                )
                dest.write_text("# edited\n", encoding="utf-8")
                installer.init_user_config()
                self.assertEqual(dest.read_text(encoding="utf-8"), "# edited\n")

    def test_init_user_config_wraps_os_errors(self) -> None:
        with mock.patch.object(
            installer, "user_config_path", return_value=Path("/tmp/config/config.toml")
        ):
            with mock.patch.object(installer.Path, "mkdir", side_effect=PermissionError("denied")):
                with self.assertRaisesRegex(OSError, "unable to create config"):
                    installer.init_user_config()


if __name__ == "__main__":
    unittest.main()
