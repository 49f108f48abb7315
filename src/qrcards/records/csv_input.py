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

import csv
import io
import re
from dataclasses import dataclass
from pathlib import Path

from ..core.template import Template

CSV_TEMPLATE_FILENAME = "id_card_template.csv"

_SEPARATORS_RE = re.compile(r"[\s_]+")


@dataclass(frozen=True)
class RecordBatch:
    records: tuple[dict[str, str], ...]
    headers: tuple[str, ...]
    skipped_rows: tuple[int, ...] = ()


def normalize_field_name(name: str) -> str:
    """Fold case and treat runs of spaces/underscores as one separator."""
    return _SEPARATORS_RE.sub("_", name.strip()).strip("_").lower()


def _canonical_headers(headers: list[str], template: Template | None) -> list[str]:
    if template is None:
        return headers
    lookup = {normalize_field_name(column): column for column in template.columns}
    canonical = [lookup.get(normalize_field_name(header), header) for header in headers]
    seen: set[str] = set()
    for original, name in zip(headers, canonical):
        if name in seen:
            raise ValueError(f"duplicate CSV column {original!r} (same field as {name!r})")
        seen.add(name)
    return canonical


def parse_records(text: str, template: Template | None = None) -> RecordBatch:
    rows = [
        row
        for row in csv.reader(io.StringIO(text.lstrip("\ufeff")))
        if any(cell.strip() for cell in row)
    ]
    if not rows:
        raise ValueError("CSV input is empty; expected a header row")
    headers = _canonical_headers([cell.strip() for cell in rows[0]], template)
    records: list[dict[str, str]] = []
    skipped: list[int] = []
    for row_number, row in enumerate(rows[1:], start=2):
        if len(row) != len(headers):
            skipped.append(row_number)
            continue
        records.append({header: cell.strip() for header, cell in zip(headers, row)})
    return RecordBatch(
        records=tuple(records),
        headers=tuple(headers),
        skipped_rows=tuple(skipped),
    )


def read_records(path: str | Path, template: Template | None = None) -> RecordBatch:
    source = Path(path).expanduser()
    if not source.is_file():
        raise ValueError(f"input file not found: {source}")
    text = source.read_text(encoding="utf-8-sig")
    return parse_records(text, template)


def csv_template_text(template: Template) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(template.columns)
    return buf.getvalue()
