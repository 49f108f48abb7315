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

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .errors import (
    DuplicateColumnError,
    EmptyColumnsError,
    PrimaryKeyNotInColumnsError,
    TemplateError,
    TooManyColumnsError,
)

MAX_COLUMNS = 5


@dataclass(frozen=True)
class Template:
    """Ordered card fields plus the field bound to the QR code and page headers."""

    columns: tuple[str, ...]
    primary_key: str


DEFAULT_TEMPLATE = Template(
    columns=("HH ID", "Name", "Gender", "Mobile", "Union"),
    primary_key="HH ID",
)


def validate_template(template: Template) -> Template:
    columns = tuple(template.columns)
    if not columns:
        raise EmptyColumnsError("template columns cannot be empty")
    if len(columns) > MAX_COLUMNS:
        raise TooManyColumnsError(
            f"template supports at most {MAX_COLUMNS} columns, got {len(columns)}"
        )
    seen: set[str] = set()
    for column in columns:
        if column in seen:
            raise DuplicateColumnError(f"duplicate template column: {column}")
        seen.add(column)
    if template.primary_key not in seen:
        raise PrimaryKeyNotInColumnsError(
            f"primary key {template.primary_key!r} is not one of the template columns"
        )
    return template


def build_template(columns: Sequence[str], primary_key: str | None = None) -> Template:
    cleaned = tuple(str(column).strip() for column in columns)
    if any(not column for column in cleaned):
        raise TemplateError("template column names must be non-empty strings")
    key = primary_key.strip() if primary_key is not None else (cleaned[0] if cleaned else "")
    return validate_template(Template(columns=cleaned, primary_key=key))


def template_from_config(cfg: Mapping[str, object] | None) -> Template:
    if not cfg:
        return DEFAULT_TEMPLATE
    raw_columns = cfg.get("columns")
    if raw_columns is None:
        columns: Sequence[str] = DEFAULT_TEMPLATE.columns
    elif isinstance(raw_columns, (list, tuple)) and all(
        isinstance(item, str) for item in raw_columns
    ):
        columns = raw_columns
    else:
        raise TemplateError("template.columns must be a list of strings")
    raw_key = cfg.get("primary_key")
    if raw_key is not None and not isinstance(raw_key, str):
        raise TemplateError("template.primary_key must be a string")
    if raw_key is None and raw_columns is None:
        raw_key = DEFAULT_TEMPLATE.primary_key
    return build_template(columns, raw_key)


__all__ = [
    "DEFAULT_TEMPLATE",
    "MAX_COLUMNS",
    "Template",
    "build_template",
    "template_from_config",
    "validate_template",
]
