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

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, Union

Record = Mapping[str, "str | None"]

BORDER_DASHED = "dashed"
BORDER_SOLID = "solid"


@dataclass(frozen=True)
class CodeImage:
    data: bytes
    size: float
    mime_type: str = "image/png"


@dataclass(frozen=True)
class DrawRectangle:
    x: float
    y: float
    width: float
    height: float
    border_style: str = BORDER_DASHED


@dataclass(frozen=True)
class DrawText:
    x: float
    y: float
    text: str
    font_size: float


@dataclass(frozen=True)
class DrawImage:
    x: float
    y: float
    width: float
    height: float
    image: CodeImage


DrawCommand = Union[DrawRectangle, DrawText, DrawImage]


@dataclass(frozen=True)
class RenderedPage:
    """One output page: its records, header line and ordered draw commands.

    Coordinates use a bottom-left origin in page units.
    """

    number: int
    width: float
    height: float
    header: str
    records: tuple[Record, ...]
    commands: tuple[DrawCommand, ...]


class ProgressReporter(Protocol):
    def report(self, percent: float, message: str | None = None) -> None: ...


class CodeEncoder(Protocol):
    def __call__(self, text: str, size: float) -> CodeImage: ...


class DocumentSink(Protocol):
    def add_page(self, width: float, height: float) -> None: ...

    def draw(self, command: DrawCommand) -> None: ...

    def serialize(self) -> bytes: ...


class NullProgress:
    def report(self, percent: float, message: str | None = None) -> None:
        return None


__all__ = [
    "BORDER_DASHED",
    "BORDER_SOLID",
    "CodeEncoder",
    "CodeImage",
    "DocumentSink",
    "DrawCommand",
    "DrawImage",
    "DrawRectangle",
    "DrawText",
    "NullProgress",
    "ProgressReporter",
    "Record",
    "RenderedPage",
]
