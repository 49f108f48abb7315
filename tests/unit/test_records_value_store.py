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

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from qrcards.records import value_store
from qrcards.records.value_store import VALUE_STORE_ENV, ValueStore, default_store_path


class TestValueStore(unittest.TestCase):
    def test_remember_and_list_sorted(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "values.json"
            store = ValueStore(path)
            self.assertTrue(store.remember("Union", "Rampur"))
            self.assertTrue(store.remember("Union", " Kamalapur "))
            self.assertFalse(store.remember("Union", "Rampur"))
            self.assertFalse(store.remember("Union", "   "))
            self.assertEqual(store.values("Union"), ["Kamalapur", "Rampur"])
            self.assertEqual(ValueStore(path).values("Union"), ["Kamalapur", "Rampur"])
            self.assertEqual(store.values("Name"), [])

    def test_remember_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "values.json"
            store = ValueStore(path)
            records = [
                {"Union": "Rampur", "Name": "Jane"},
                {"Union": "Rampur", "Name": "Sam"},
                {"Union": None},
            ]
            self.assertEqual(store.remember_records(records, ["Union"]), 1)
            payload = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(payload, {"Union": ["Rampur"]})

    def test_nothing_new_does_not_write(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "values.json"
            store = ValueStore(path)
            self.assertEqual(store.remember_records([{"Union": ""}], ["Union"]), 0)
            self.assertFalse(path.exists())

    def test_corrupt_file_is_ignored(self) -> None:
        for content in ("not json", "[1, 2]", '{"Union": "Rampur", "Name": ["Jane", 3]}'):
            with self.subTest(content=content):
                with tempfile.TemporaryDirectory() as tmpdir:
                    path = Path(tmpdir) / "values.json"
                    path.write_text(content, encoding="utf-8")
                    store = ValueStore(path)
                    self.assertEqual(store.values("Union"), [])
        self.assertEqual(store.values("Name"), ["Jane"])

    def test_default_store_path(self) -> None:
        with mock.patch.dict(os.environ, {VALUE_STORE_ENV: "/tmp/qrcards-values.json"}):
            self.assertEqual(default_store_path(), Path("/tmp/qrcards-values.json"))
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(VALUE_STORE_ENV, None)
            with mock.patch.object(value_store, "user_data_dir", return_value="/opt/data"):
                self.assertEqual(default_store_path(), Path("/opt/data/values.json"))


if __name__ == "__main__":
    unittest.main()
