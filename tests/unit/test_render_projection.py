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

import unittest

from qrcards.core.template import DEFAULT_TEMPLATE, Template
from qrcards.render.projection import MISSING_KEY_PLACEHOLDER, field_value, project


class TestProjection(unittest.TestCase):
    def test_lines_follow_template_order(self) -> None:
        record = {
            "Union": "Kamalapur",
            "HH ID": "HH001",
            "Name": "Jane Doe",
            "Gender": "F",
            "Mobile": "01712345678",
        }
        card = project(record, DEFAULT_TEMPLATE)
        self.assertEqual(
            card.lines,
            (
                "HH ID: HH001",
                "Name: Jane Doe",
                "Gender: F",
                "Mobile: 01712345678",
                "Union: Kamalapur",
            ),
        )
        self.assertEqual(card.key_value, "HH001")
        self.assertEqual(card.code_value, "HH001")

    def test_missing_field_renders_empty_value(self) -> None:
        template = Template(columns=("ID", "Name"), primary_key="ID")
        card = project({"ID": "7"}, template)
        self.assertEqual(card.lines, ("ID: 7", "Name: "))

    def test_none_value_treated_as_missing(self) -> None:
        self.assertEqual(field_value({"Name": None}, "Name"), "")

    def test_extra_fields_are_ignored(self) -> None:
        template = Template(columns=("ID",), primary_key="ID")
        card = project({"ID": "1", "Secret": "x"}, template)
        self.assertEqual(card.lines, ("ID: 1",))

    def test_missing_primary_key(self) -> None:
        template = Template(columns=("ID", "Name"), primary_key="ID")
        card = project({"Name": "Sam"}, template)
        self.assertEqual(card.key_value, MISSING_KEY_PLACEHOLDER)
        self.assertEqual(card.key_value, "N/A")
        self.assertEqual(card.code_value, "")
        self.assertEqual(card.lines[0], "ID: ")


if __name__ == "__main__":
    unittest.main()
