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

import io
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, cast

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.errors import SinkFailure
from .commands import BORDER_DASHED, DrawCommand, DrawImage, DrawRectangle, DrawText

DEFAULT_FONT_FAMILY = "Helvetica"
CUSTOM_FONT_FAMILY = "CardFont"
BORDER_LINE_WIDTH = 1.0
BORDER_DASH = 2.0
BORDER_GAP = 2.0
FIXED_CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)


class FpdfSink:
    """Document sink that replays draw commands onto an fpdf2 document.

    Draw commands use a bottom-left origin; fpdf measures from the top-left,
    so every y coordinate is flipped against the current page height.
    """

    def __init__(self, *, font_path: str | Path | None = None, title: str | None = None) -> None:
        self._pdf = FPDF(unit="pt")
        self._pdf.set_auto_page_break(False)
        self._pdf.set_creation_date(FIXED_CREATION_DATE)
        if title:
            self._pdf.set_title(title)
        self._font_family = DEFAULT_FONT_FAMILY
        if font_path:
            path = Path(font_path).expanduser()
            if not path.is_file():
                raise SinkFailure(f"font file not found: {path}")
            try:
                self._pdf.add_font(CUSTOM_FONT_FAMILY, fname=str(path))
            except (FPDFException, OSError, RuntimeError) as exc:
                raise SinkFailure(f"unable to load font {path}: {exc}") from exc
            self._font_family = CUSTOM_FONT_FAMILY
        self._page_height: float | None = None

    @property
    def page_count(self) -> int:
        return self._pdf.page_no()

    def add_page(self, width: float, height: float) -> None:
        try:
            self._pdf.add_page(format=cast(Any, (float(width), float(height))))
        except FPDFException as exc:
            raise SinkFailure(f"unable to add page: {exc}") from exc
        self._page_height = float(height)

    def draw(self, command: DrawCommand) -> None:
        if self._page_height is None:
            raise SinkFailure("draw command issued before any page was added")
        try:
            if isinstance(command, DrawRectangle):
                self._draw_rectangle(command)
            elif isinstance(command, DrawText):
                self._draw_text(command)
            elif isinstance(command, DrawImage):
                self._draw_image(command)
            else:
                raise SinkFailure(f"unsupported draw command: {type(command).__name__}")
        except FPDFException as exc:
            raise SinkFailure(f"unable to draw {type(command).__name__}: {exc}") from exc

    def serialize(self) -> bytes:
        try:
            return bytes(self._pdf.output())
        except (FPDFException, OSError, ValueError) as exc:
            raise SinkFailure(f"unable to serialize PDF: {exc}") from exc

    def _flip(self, y: float, height: float = 0.0) -> float:
        assert self._page_height is not None
        return self._page_height - y - height

    def _draw_rectangle(self, command: DrawRectangle) -> None:
        pdf = self._pdf
        pdf.set_draw_color(0, 0, 0)
        pdf.set_line_width(BORDER_LINE_WIDTH)
        if command.border_style == BORDER_DASHED:
            pdf.set_dash_pattern(dash=BORDER_DASH, gap=BORDER_GAP)
        pdf.rect(
            command.x,
            self._flip(command.y, command.height),
            command.width,
            command.height,
        )
        pdf.set_dash_pattern()

    def _draw_text(self, command: DrawText) -> None:
        pdf = self._pdf
        pdf.set_font(self._font_family, size=command.font_size)
        pdf.set_text_color(0, 0, 0)
        pdf.text(command.x, self._flip(command.y), command.text)

    def _draw_image(self, command: DrawImage) -> None:
        self._pdf.image(
            io.BytesIO(command.image.data),
            x=command.x,
            y=self._flip(command.y, command.height),
            w=command.width,
            h=command.height,
        )
