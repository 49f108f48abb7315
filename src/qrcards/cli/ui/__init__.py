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
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from rich import box
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .prompts import prompt_field, prompt_validated
from .state import THEME, UIContext, format_hint, get_context, isatty

DEFAULT_CONTEXT = get_context()
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def configure_ui(
    *,
    no_color: bool,
    no_animations: bool,
    context: UIContext | None = None,
) -> None:
    context = context or DEFAULT_CONTEXT
    context.animations_enabled = not no_animations
    for output in (context.console, context.console_err):
        output.no_color = no_color


def _progress_columns(animated: bool) -> tuple[ProgressColumn, ...]:
    description = TextColumn("[progress.description]{task.description}")
    if not animated:
        return (description,)
    return (
        SpinnerColumn(style="accent"),
        description,
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
    )


@contextmanager
def progress(*, quiet: bool, context: UIContext | None = None) -> Iterator[Progress | None]:
    """Transient progress display for a generation run; ``None`` when quiet."""
    context = context or DEFAULT_CONTEXT
    if quiet:
        yield None
        return
    animated = context.animations_enabled
    progress_bar = Progress(
        *_progress_columns(animated),
        console=context.console,
        transient=True,
        refresh_per_second=10 if animated else 2,
        disable=not isatty(sys.__stdout__, sys.stdout),
    )
    with progress_bar:
        yield progress_bar


def build_action_list(items: Sequence[str]) -> Table:
    table = Table.grid(padding=(0, 1))
    table.add_column(no_wrap=True, style="muted")
    table.add_column()
    for item in items:
        table.add_row("-", item)
    return table


def print_completion_panel(
    title: str,
    items: Sequence[str],
    *,
    quiet: bool,
    context: UIContext | None = None,
) -> None:
    if quiet:
        return
    output = console if context is None else context.console
    output.print(
        Panel(
            build_action_list(items),
            title=title,
            title_align="left",
            border_style="success",
            box=box.ROUNDED,
            padding=(0, 1),
        )
    )


__all__ = [
    "THEME",
    "UIContext",
    "build_action_list",
    "configure_ui",
    "console",
    "console_err",
    "format_hint",
    "print_completion_panel",
    "progress",
    "prompt_field",
    "prompt_validated",
]
