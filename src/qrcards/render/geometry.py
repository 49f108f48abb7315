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

# Page geometry in PDF points (A4), origin at the bottom-left corner.
PAGE_WIDTH = 595.0
PAGE_HEIGHT = 842.0
COLUMNS_PER_PAGE = 2
ROWS_PER_PAGE = 5
PAGE_CAPACITY = COLUMNS_PER_PAGE * ROWS_PER_PAGE
OUTER_MARGIN = 20.0
HEADER_MARGIN = 30.0
CARD_GUTTER = 10.0


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


def slot_position(slot_index: int, columns_per_page: int = COLUMNS_PER_PAGE) -> tuple[int, int]:
    """Return ``(row, col)`` for a slot; row 0 is the top row."""
    if slot_index < 0:
        raise ValueError("slot_index must be non-negative")
    return slot_index // columns_per_page, slot_index % columns_per_page


def card_size(
    page_width: float,
    page_height: float,
    *,
    columns_per_page: int = COLUMNS_PER_PAGE,
    rows_per_page: int = ROWS_PER_PAGE,
    outer_margin: float = OUTER_MARGIN,
    header_margin: float = HEADER_MARGIN,
) -> tuple[float, float]:
    card_w = (page_width - 2 * outer_margin) / columns_per_page
    card_h = (page_height - outer_margin - header_margin) / rows_per_page
    return card_w, card_h


def slot_box(
    page_width: float,
    page_height: float,
    slot_index: int,
    *,
    columns_per_page: int = COLUMNS_PER_PAGE,
    rows_per_page: int = ROWS_PER_PAGE,
    outer_margin: float = OUTER_MARGIN,
    header_margin: float = HEADER_MARGIN,
    gutter: float = CARD_GUTTER,
) -> BoundingBox:
    if slot_index >= columns_per_page * rows_per_page:
        raise ValueError(
            f"slot_index {slot_index} outside a {columns_per_page}x{rows_per_page} grid"
        )
    card_w, card_h = card_size(
        page_width,
        page_height,
        columns_per_page=columns_per_page,
        rows_per_page=rows_per_page,
        outer_margin=outer_margin,
        header_margin=header_margin,
    )
    row, col = slot_position(slot_index, columns_per_page)
    x = outer_margin + col * card_w
    y = page_height - header_margin - (row + 1) * card_h
    return BoundingBox(x=x, y=y, width=card_w - gutter, height=card_h - gutter)
