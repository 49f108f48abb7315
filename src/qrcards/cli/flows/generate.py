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

import os
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from rich.progress import Progress, TaskID

from ...config import AppConfig
from ...qr.codec import QrEncoder
from ...render.commands import CodeEncoder, NullProgress, ProgressReporter, Record
from ...render.pages import GenerationResult, GenerationRun, run_generation
from ...render.pdf_sink import FpdfSink
from ..core.log import _warn
from ..ui import console_err, progress

OUTPUT_PREFIX = "QR_ID_Cards_"
DOCUMENT_TITLE = "QR ID Cards"


@dataclass
class RichProgressReporter:
    progress: Progress
    task_id: TaskID

    def report(self, percent: float, message: str | None = None) -> None:
        if message:
            self.progress.update(self.task_id, completed=percent, description=message)
        else:
            self.progress.update(self.task_id, completed=percent)


def default_output_path(
    output_dir: str | Path | None = None,
    *,
    now: datetime | None = None,
) -> Path:
    timestamp = (now or datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    return Path(output_dir or ".").expanduser() / f"{OUTPUT_PREFIX}{timestamp}.pdf"


def write_document(path: str | Path, data: bytes, *, quiet: bool) -> Path:
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_name(f".{target.name}.partial")
    try:
        tmp_path.write_bytes(data)
        os.replace(tmp_path, target)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    if not quiet:
        console_err.print(f"[dim]- wrote {target}[/dim]")
    return target


def generate_cards(
    records: Sequence[Record],
    config: AppConfig,
    *,
    output: str | Path,
    quiet: bool,
    encoder: CodeEncoder | None = None,
) -> GenerationResult:
    if not records:
        raise ValueError("no cards to render")
    sink = FpdfSink(font_path=config.pdf.font_path, title=DOCUMENT_TITLE)
    code_encoder = encoder or QrEncoder(config.qr_config)
    with progress(quiet=quiet) as progress_bar:
        reporter: ProgressReporter = NullProgress()
        if progress_bar is not None:
            task_id = progress_bar.add_task("Preparing PDF...", total=100)
            reporter = RichProgressReporter(progress_bar, task_id)
        run = GenerationRun(
            records=records,
            template=config.template,
            encoder=code_encoder,
            progress=reporter,
        )
        result = run_generation(run, sink)

    write_document(output, result.document, quiet=quiet)
    primary_key = config.template.primary_key
    for failure in result.encoding_failures:
        _warn(
            f"card {failure.record_index + 1} ({primary_key}: {failure.key_value}) "
            f"has no QR code: {failure.reason}",
            quiet=quiet,
        )
    return result
