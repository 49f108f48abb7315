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

from pathlib import Path

import typer

from ...records.csv_input import read_records
from ...records.formatting import format_record, mobile_fields, validate_mobile
from ...records.value_store import ValueStore
from ..core.common import _ctx_value, _load_config, _quiet_value, _run_cli
from ..core.log import _warn
from ..flows.generate import default_output_path, generate_cards
from ..ui import print_completion_panel

_BATCH_HELP = (
    "Render a CSV file (one card per row) into a printable PDF.\n\n"
    "Examples:\n"
    "  qrcards batch households.csv -o cards.pdf\n"
    "  qrcards batch households.csv --normalize\n"
    '  qrcards batch staff.csv --columns "ID,Name,Team" --primary-key ID\n'
)


def register(app: typer.Typer) -> None:
    app.command(help=_BATCH_HELP)(batch)


def batch(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="CSV file with a header row."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF path (defaults to QR_ID_Cards_<timestamp>.pdf).",
        rich_help_panel="Outputs",
    ),
    columns: str | None = typer.Option(
        None,
        "--columns",
        help="Comma-separated card fields, overriding the configured template.",
        rich_help_panel="Template",
    ),
    primary_key: str | None = typer.Option(
        None,
        "--primary-key",
        help="Field encoded in the QR code (must be one of the columns).",
        rich_help_panel="Template",
    ),
    normalize: bool | None = typer.Option(
        None,
        "--normalize/--no-normalize",
        help="Clean up HH ID, name, mobile and union values before rendering.",
        rich_help_panel="Inputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx, columns=columns, primary_key=primary_key)
        quiet_value = _quiet_value(ctx, config)
        record_batch = read_records(input_path, config.template)
        if record_batch.skipped_rows:
            rows = ", ".join(str(row) for row in record_batch.skipped_rows)
            _warn(
                f"skipped {len(record_batch.skipped_rows)} row(s) with a wrong number of "
                f"cells: {rows}",
                quiet=quiet_value,
            )
        records = list(record_batch.records)
        should_normalize = config.defaults.normalize if normalize is None else normalize
        if should_normalize:
            records = [format_record(record) for record in records]
        _warn_invalid_mobiles(records, config.template.columns, quiet=quiet_value)
        _remember_values(records, config.autocomplete_fields, quiet=quiet_value)

        output_path = output or default_output_path(config.defaults.output_dir)
        result = generate_cards(records, config, output=output_path, quiet=quiet_value)
        print_completion_panel(
            "ID cards ready",
            [
                f"{result.card_count} card(s) on {result.page_count} page(s)",
                f"Saved to {output_path}",
            ],
            quiet=quiet_value,
        )

    _run_cli(_run, debug=debug_value)


def _warn_invalid_mobiles(
    records: list[dict[str, str]],
    columns: tuple[str, ...],
    *,
    quiet: bool,
) -> None:
    for field in mobile_fields(columns):
        invalid = [
            str(index + 1)
            for index, record in enumerate(records)
            if record.get(field) and not validate_mobile(record[field])
        ]
        if invalid:
            _warn(f"{field} looks invalid on card(s): {', '.join(invalid)}", quiet=quiet)


def _remember_values(
    records: list[dict[str, str]],
    fields: tuple[str, ...],
    *,
    quiet: bool,
) -> None:
    if not fields:
        return
    try:
        ValueStore().remember_records(records, fields)
    except OSError as exc:
        _warn(f"unable to save autocomplete values: {exc}", quiet=quiet)
