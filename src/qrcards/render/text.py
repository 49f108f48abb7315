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

from collections.abc import Sequence

# Average glyph advance as a fraction of the font size. Wrapping, text block
# centering and header centering all measure with this one value.
CHAR_WIDTH_FACTOR = 0.55


def estimate_text_width(text: str, font_size: float) -> float:
    return len(text) * (float(font_size) * CHAR_WIDTH_FACTOR)


def wrap_text(line: str, max_width: float, font_size: float) -> list[str]:
    """Greedy word wrap using the character-width estimate.

    Words are never split: a word wider than ``max_width`` is emitted on its
    own line and allowed to overflow.
    """
    wrapped: list[str] = []
    current = ""
    for word in line.split():
        candidate = word if not current else f"{current} {word}"
        if not current or estimate_text_width(candidate, font_size) < max_width:
            current = candidate
            continue
        wrapped.append(current)
        current = word
    if current:
        wrapped.append(current)
    return wrapped


def wrap_lines(lines: Sequence[str], max_width: float, font_size: float) -> list[list[str]]:
    return [wrap_text(line, max_width, font_size) for line in lines]


def wrapped_line_count(wrapped: Sequence[Sequence[str]]) -> int:
    return sum(len(sub_lines) for sub_lines in wrapped)
