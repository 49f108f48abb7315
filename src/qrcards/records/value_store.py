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

import json
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from platformdirs import user_data_dir

VALUE_STORE_ENV = "QRCARDS_VALUE_STORE"
VALUE_STORE_FILENAME = "values.json"


def default_store_path() -> Path:
    override = os.environ.get(VALUE_STORE_ENV)
    if override:
        return Path(override).expanduser()
    return Path(user_data_dir("qrcards", appauthor=False)) / VALUE_STORE_FILENAME


class ValueStore:
    """Remembered field values offered as autocomplete suggestions."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_store_path()
        self._values = self._load()

    def values(self, field: str) -> list[str]:
        return sorted(self._values.get(field, ()))

    def remember(self, field: str, value: str | None) -> bool:
        normalized = (value or "").strip()
        if not normalized:
            return False
        known = self._values.setdefault(field, set())
        if normalized in known:
            return False
        known.add(normalized)
        self._save()
        return True

    def remember_records(
        self,
        records: Iterable[Mapping[str, str | None]],
        fields: Iterable[str],
    ) -> int:
        fields = tuple(fields)
        added = 0
        for record in records:
            for field in fields:
                normalized = (record.get(field) or "").strip()
                if not normalized:
                    continue
                known = self._values.setdefault(field, set())
                if normalized not in known:
                    known.add(normalized)
                    added += 1
        if added:
            self._save()
        return added

    def _load(self) -> dict[str, set[str]]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            return {}
        if not isinstance(raw, dict):
            return {}
        loaded: dict[str, set[str]] = {}
        for field, values in raw.items():
            if isinstance(field, str) and isinstance(values, list):
                loaded[field] = {value for value in values if isinstance(value, str) and value}
        return loaded

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {field: sorted(values) for field, values in sorted(self._values.items())}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)
