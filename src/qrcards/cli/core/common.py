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

import importlib.metadata
from collections.abc import Callable
from typing import Any

import typer
from rich.traceback import install as install_rich_traceback

from ...config import AppConfig, apply_template_override, load_app_config
from ..ui import configure_ui, console_err


def _run_cli(func: Callable[[], Any], *, debug: bool) -> None:
    if debug:
        install_rich_traceback(show_locals=True)
    try:
        result = func()
    except (OSError, RuntimeError, ValueError, TypeError, LookupError) as exc:
        if debug:
            raise
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if isinstance(result, int) and result != 0:
        raise typer.Exit(code=result)


def _ctx_value(ctx: typer.Context, key: str) -> Any:
    if ctx.obj is None:
        return None
    return ctx.obj.get(key)


def _parse_columns_option(value: str | None) -> list[str] | None:
    if value is None:
        return None
    columns = [item.strip() for item in value.split(",")]
    if not any(columns):
        raise typer.BadParameter("--columns needs at least one column name")
    return columns


def _get_version() -> str:
    try:
        return importlib.metadata.version("qrcards")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


def _load_config(
    ctx: typer.Context,
    *,
    columns: str | None = None,
    primary_key: str | None = None,
) -> AppConfig:
    config = load_app_config(_ctx_value(ctx, "config"))
    if config.ui.no_color or config.ui.no_animations:
        configure_ui(
            no_color=bool(_ctx_value(ctx, "no_color")) or config.ui.no_color,
            no_animations=bool(_ctx_value(ctx, "no_animations")) or config.ui.no_animations,
        )
    return apply_template_override(
        config,
        columns=_parse_columns_option(columns),
        primary_key=primary_key,
    )


def _quiet_value(ctx: typer.Context, config: AppConfig | None = None) -> bool:
    if _ctx_value(ctx, "quiet"):
        return True
    return bool(config is not None and config.ui.quiet)
