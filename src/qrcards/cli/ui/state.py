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

import sys
from dataclasses import dataclass, field

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

THEME = Theme(
    {
        "accent": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
        "hint": "italic dim",
        "panel": "cyan",
    }
)


def isatty(stream, fallback=None) -> bool:
    """Best-effort terminal check that tolerates closed or replaced streams."""
    target = stream if stream is not None else fallback
    probe = getattr(target, "isatty", None)
    if probe is None:
        return False
    try:
        return bool(probe())
    except (OSError, ValueError):
        return False


def _console(*, stderr: bool) -> Console:
    raw = sys.__stderr__ if stderr else sys.__stdout__
    current = sys.stderr if stderr else sys.stdout
    return Console(stderr=stderr, theme=THEME, force_terminal=isatty(raw, current))


@dataclass
class UIContext:
    console: Console = field(default_factory=lambda: _console(stderr=False))
    console_err: Console = field(default_factory=lambda: _console(stderr=True))
    animations_enabled: bool = True


DEFAULT_CONTEXT = UIContext()


def get_context() -> UIContext:
    return DEFAULT_CONTEXT


def format_hint(help_text: str) -> Text:
    return Text.assemble(("Hint: ", "muted"), (help_text, "hint"))
