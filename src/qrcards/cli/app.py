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

import typer

from . import command_registry
from .core.common import _get_version
from .startup import run_startup
from .ui import console, console_err

OUTPUT_PANEL = "Output"
SETUP_PANEL = "Setup"

app = typer.Typer(
    add_completion=False,
    help="QR ID card PDF generator.",
    epilog="Cards are laid out ten per A4 page, two columns by five rows.",
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    console.print(f"qrcards {_get_version()}")
    raise typer.Exit()


_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    metavar="TOML",
    help="Read card template, QR and PDF settings from this file.",
    rich_help_panel=SETUP_PANEL,
)
_INIT_CONFIG_OPTION = typer.Option(
    False,
    "--init-config",
    help="Write the default settings to the user config directory, then exit.",
    is_eager=True,
    rich_help_panel=SETUP_PANEL,
)
_QUIET_OPTION = typer.Option(
    False,
    "--quiet",
    "-q",
    help="Print errors only; no progress bar or summary.",
    rich_help_panel=OUTPUT_PANEL,
)
_NO_COLOR_OPTION = typer.Option(
    False,
    "--no-color",
    help="Print plain text without colors.",
    rich_help_panel=OUTPUT_PANEL,
)
_NO_ANIMATIONS_OPTION = typer.Option(
    False,
    "--no-animations",
    help="Show a static progress line instead of spinner and bar.",
    rich_help_panel=OUTPUT_PANEL,
)
_DEBUG_OPTION = typer.Option(
    False,
    "--debug",
    help="Re-raise errors with a full traceback.",
    rich_help_panel=SETUP_PANEL,
)
_VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Print the qrcards version and exit.",
    callback=_version_callback,
    is_eager=True,
)


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    config: str | None = _CONFIG_OPTION,
    init_config: bool = _INIT_CONFIG_OPTION,
    quiet: bool = _QUIET_OPTION,
    no_color: bool = _NO_COLOR_OPTION,
    no_animations: bool = _NO_ANIMATIONS_OPTION,
    debug: bool = _DEBUG_OPTION,
    version: bool = _VERSION_OPTION,
) -> None:
    del version
    try:
        done = run_startup(
            quiet=quiet,
            no_color=no_color,
            no_animations=no_animations,
            debug=debug,
            init_config=init_config,
        )
    except (OSError, RuntimeError, ValueError) as exc:
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    if done:
        raise typer.Exit()

    options = ctx.ensure_object(dict)
    options["config"] = config
    options["debug"] = debug
    options["quiet"] = quiet
    options["no_color"] = no_color
    options["no_animations"] = no_animations

    if ctx.invoked_subcommand is None:
        console_err.print(
            "[red]Error:[/red] choose a command: batch, card or csv-template. "
            "Run `qrcards --help` for details."
        )
        raise typer.Exit(code=2)


command_registry.register(app)


def main() -> None:
    app()
