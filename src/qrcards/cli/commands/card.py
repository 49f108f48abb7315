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
from pathlib import Path

import typer

from ...records.formatting import format_record, format_value, mobile_fields, validate_mobile
from ...records.value_store import ValueStore
from ..core.common import _ctx_value, _load_config, _quiet_value, _run_cli
from ..core.log import _warn
from ..flows.generate import default_output_path, generate_cards
from ..ui import print_completion_panel, prompt_field, prompt_validated

_CARD_HELP = (
    "Render a single ID card, prompting for any field not given with --set.\n\n"
    "Examples:\n"
    "  qrcards card\n"
    '  qrcards card --set "HH ID=HH001" --set "Name=Jane Doe" --set Mobile=01712345678\n'
)
_INVALID_MOBILE = "Please enter a valid 11-digit mobile number starting with 013-019."
_MOBILE_HINT = "11 digits starting with 013 to 019; dashes and spaces are removed."


def register(app: typer.Typer) -> None:
    app.command(help=_CARD_HELP)(card)


def card(
    ctx: typer.Context,
    values: list[str] = typer.Option(
        [],
        "--set",
        "-s",
        help="Field value as FIELD=VALUE (repeatable).",
        rich_help_panel="Inputs",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF path (defaults to QR_ID_Cards_<timestamp>.pdf).",
        rich_help_panel="Outputs",
    ),
    no_input: bool = typer.Option(
        False,
        "--no-input",
        help="Never prompt; fields not given with --set stay empty.",
        rich_help_panel="Inputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        quiet_value = _quiet_value(ctx, config)
        provided = parse_assignments(values)
        unknown = [name for name in provided if name not in config.template.columns]
        if unknown:
            raise ValueError(f"unknown card field(s): {', '.join(unknown)}")

        store = ValueStore()
        interactive = _can_prompt(no_input)
        mobiles = set(mobile_fields(config.template.columns))
        record: dict[str, str] = {}
        for column in config.template.columns:
            if column in provided:
                record[column] = provided[column]
            elif not interactive:
                record[column] = ""
            elif column in mobiles:
                record[column] = prompt_validated(
                    column,
                    validator=_mobile_error,
                    formatter=lambda value, name=column: format_value(name, value),
                    help_text=_MOBILE_HINT,
                )
            else:
                suggestions = (
                    store.values(column) if column in config.autocomplete_fields else []
                )
                record[column] = prompt_field(column, suggestions=suggestions)

        record = format_record(record)
        for column in mobiles:
            if _mobile_error(record.get(column, "")) is not None:
                raise ValueError(_INVALID_MOBILE)

        for column in config.autocomplete_fields:
            if column not in record:
                continue
            try:
                store.remember(column, record[column])
            except OSError as exc:
                _warn(f"unable to save autocomplete values: {exc}", quiet=quiet_value)
                break

        output_path = output or default_output_path(config.defaults.output_dir)
        generate_cards([record], config, output=output_path, quiet=quiet_value)
        print_completion_panel("ID card ready", [f"Saved to {output_path}"], quiet=quiet_value)

    _run_cli(_run, debug=debug_value)


def parse_assignments(values: list[str]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"expected FIELD=VALUE, got {item!r}")
        parsed[name] = value.strip()
    return parsed


def _can_prompt(no_input: bool) -> bool:
    return not no_input and sys.stdin.isatty()


def _mobile_error(value: str) -> str | None:
    if validate_mobile(value):
        return None
    return _INVALID_MOBILE
