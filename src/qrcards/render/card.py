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
from dataclasses import dataclass

from ..core.errors import EncodingFailure
from .commands import (
    BORDER_DASHED,
    CodeEncoder,
    DrawCommand,
    DrawImage,
    DrawRectangle,
    DrawText,
)
from .geometry import BoundingBox
from .text import wrap_lines, wrapped_line_count

CARD_FONT_SIZE = 11.0
CARD_LINE_HEIGHT = 15.0
TEXT_LEFT_PADDING = 10.0
TEXT_COLUMN_RATIO = 0.55
CODE_SIZE = 85.0
CODE_RIGHT_PADDING = 5.0


@dataclass(frozen=True)
class CardRender:
    commands: tuple[DrawCommand, ...]
    encoding_error: str | None = None


def text_column_width(box: BoundingBox) -> float:
    return box.width * TEXT_COLUMN_RATIO - TEXT_LEFT_PADDING


def text_start_y(box: BoundingBox, total_lines: int) -> float:
    return box.center_y + (total_lines * CARD_LINE_HEIGHT) / 2 - CARD_LINE_HEIGHT


def code_origin(box: BoundingBox, size: float = CODE_SIZE) -> tuple[float, float]:
    x = box.right - size - CODE_RIGHT_PADDING
    y = box.y + (box.height - size) / 2
    return x, y


def render_card(
    box: BoundingBox,
    lines: Sequence[str],
    code_value: str,
    encoder: CodeEncoder,
) -> CardRender:
    """Emit border, vertically centered text and the right-aligned code image."""
    commands: list[DrawCommand] = [
        DrawRectangle(
            x=box.x,
            y=box.y,
            width=box.width,
            height=box.height,
            border_style=BORDER_DASHED,
        )
    ]

    wrapped = wrap_lines(lines, text_column_width(box), CARD_FONT_SIZE)
    text_x = box.x + TEXT_LEFT_PADDING
    current_y = text_start_y(box, wrapped_line_count(wrapped))
    for sub_lines in wrapped:
        for sub_line in sub_lines:
            commands.append(
                DrawText(x=text_x, y=current_y, text=sub_line, font_size=CARD_FONT_SIZE)
            )
            current_y -= CARD_LINE_HEIGHT

    try:
        image = encoder(code_value, CODE_SIZE)
    except EncodingFailure as exc:
        return CardRender(commands=tuple(commands), encoding_error=str(exc) or "encoding failed")

    code_x, code_y = code_origin(box)
    commands.append(
        DrawImage(x=code_x, y=code_y, width=CODE_SIZE, height=CODE_SIZE, image=image)
    )
    return CardRender(commands=tuple(commands))
