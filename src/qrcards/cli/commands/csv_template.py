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

from ...records.csv_input import CSV_TEMPLATE_FILENAME, csv_template_text
from ..core.common import _ctx_value, _load_config, _quiet_value, _run_cli
from ..ui import console


def register(app: typer.Typer) -> None:
    app.command(
        "csv-template",
        help="Write an empty CSV with the configured card columns as its header.",
    )(csv_template)


def csv_template(
    ctx: typer.Context,
    output: Path = typer.Option(
        Path(CSV_TEMPLATE_FILENAME),
        "--output",
        "-o",
        help="Where to write the CSV header file.",
        rich_help_panel="Outputs",
    ),
    columns: str | None = typer.Option(
        None,
        "--columns",
        help="Comma-separated card fields, overriding the configured template.",
        rich_help_panel="Template",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing file.",
        rich_help_panel="Outputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx, columns=columns)
        target = output.expanduser()
        if target.exists() and not force:
            raise ValueError(f"output exists, use --force to overwrite: {target}")
        target.write_text(csv_template_text(config.template), encoding="utf-8")
        if not _quiet_value(ctx, config):
            console.print(str(target))

    _run_cli(_run, debug=debug_value)
