#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    batch as batch_command,
    card as card_command,
    csv_template as csv_template_command,
)


def register(app: typer.Typer) -> None:
    batch_command.register(app)
    card_command.register(app)
    csv_template_command.register(app)
