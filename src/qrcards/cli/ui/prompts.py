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

from collections.abc import Callable, Sequence

import questionary
from rich.padding import Padding

from .state import UIContext, format_hint, get_context

QUESTIONARY_STYLE = questionary.Style(
    [
        ("question", "bold"),
        ("answer", "bold fg:ansicyan"),
        ("instruction", "fg:ansibrightblack"),
        ("completion-menu.completion.current", "reverse"),
    ]
)

DEFAULT_CONTEXT = get_context()


def _print_hint(help_text: str | None, context: UIContext) -> None:
    if help_text:
        context.console.print(Padding(format_hint(help_text), (0, 0, 0, 1)))


def prompt_field(
    prompt: str,
    *,
    suggestions: Sequence[str] = (),
    default: str = "",
    help_text: str | None = None,
    context: UIContext | None = None,
) -> str:
    context = context or DEFAULT_CONTEXT
    _print_hint(help_text, context)
    if suggestions:
        question = questionary.autocomplete(
            prompt,
            choices=list(suggestions),
            default=default,
            qmark="",
            style=QUESTIONARY_STYLE,
        )
    else:
        question = questionary.text(prompt, default=default, qmark="", style=QUESTIONARY_STYLE)
    value = question.ask()
    if value is None:
        raise KeyboardInterrupt
    return value.strip()


def prompt_validated(
    prompt: str,
    *,
    validator: Callable[[str], str | None],
    formatter: Callable[[str], str] | None = None,
    help_text: str | None = None,
    context: UIContext | None = None,
) -> str:
    context = context or DEFAULT_CONTEXT
    while True:
        value = prompt_field(prompt, help_text=help_text, context=context)
        if formatter is not None:
            value = formatter(value)
        error = validator(value)
        if error is None:
            return value
        context.console_err.print(f"[error]{error}[/error]")
        help_text = None

