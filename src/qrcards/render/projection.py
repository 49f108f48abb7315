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

from dataclasses import dataclass

from ..core.template import Template
from .commands import Record

MISSING_KEY_PLACEHOLDER = "N/A"


@dataclass(frozen=True)
class ProjectedCard:
    lines: tuple[str, ...]
    key_value: str
    code_value: str


def field_value(record: Record, name: str) -> str:
    value = record.get(name)
    if value is None:
        return ""
    return str(value)


def project(record: Record, template: Template) -> ProjectedCard:
    """Project a record onto the template's "Label: value" lines.

    Missing fields render as empty values. A missing primary key is shown as
    ``N/A`` in page headers, while ``code_value`` stays empty so the encoder
    can decline it.
    """
    lines = tuple(f"{name}: {field_value(record, name)}" for name in template.columns)
    code_value = field_value(record, template.primary_key)
    return ProjectedCard(
        lines=lines,
        key_value=code_value or MISSING_KEY_PLACEHOLDER,
        code_value=code_value,
    )
