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

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.errors import SinkFailure
from ..core.template import Template, validate_template
from .card import render_card
from .commands import (
    CodeEncoder,
    DocumentSink,
    DrawCommand,
    DrawText,
    NullProgress,
    ProgressReporter,
    Record,
    RenderedPage,
)
from .geometry import PAGE_CAPACITY, PAGE_HEIGHT, PAGE_WIDTH, slot_box
from .projection import project
from .text import estimate_text_width

HEADER_FONT_SIZE = 10.0
HEADER_TOP_OFFSET = 20.0


@dataclass(frozen=True)
class EncodingFailureInfo:
    record_index: int
    key_value: str
    reason: str


@dataclass(frozen=True)
class PaginationResult:
    pages: tuple[RenderedPage, ...]
    encoding_failures: tuple[EncodingFailureInfo, ...] = ()

    @property
    def commands(self) -> tuple[DrawCommand, ...]:
        return tuple(command for page in self.pages for command in page.commands)


@dataclass(frozen=True)
class GenerationResult:
    document: bytes
    page_count: int
    card_count: int
    encoding_failures: tuple[EncodingFailureInfo, ...] = ()


@dataclass(frozen=True)
class GenerationRun:
    """Everything one generation run needs; nothing is shared between runs."""

    records: Sequence[Record]
    template: Template
    encoder: CodeEncoder
    progress: ProgressReporter = field(default_factory=NullProgress)
    page_capacity: int = PAGE_CAPACITY


def page_count(total_records: int, capacity: int = PAGE_CAPACITY) -> int:
    if total_records <= 0:
        return 0
    return math.ceil(total_records / capacity)


def partition_pages(
    records: Sequence[Record],
    capacity: int = PAGE_CAPACITY,
) -> list[list[Record]]:
    if capacity <= 0:
        raise ValueError("page capacity must be a positive integer")
    return [
        list(records[start : start + capacity]) for start in range(0, len(records), capacity)
    ]


def page_header(
    page_number: int,
    total_pages: int,
    primary_key: str,
    first_key: str,
    last_key: str,
) -> str:
    # First/last follow input order; the range is not sorted.
    return (
        f"Page {page_number} of {total_pages} | "
        f"{primary_key} Range: {first_key} - {last_key}"
    )


def header_command(header: str, page_width: float, page_height: float) -> DrawText:
    x = (page_width - estimate_text_width(header, HEADER_FONT_SIZE)) / 2
    return DrawText(
        x=x,
        y=page_height - HEADER_TOP_OFFSET,
        text=header,
        font_size=HEADER_FONT_SIZE,
    )


def _validate_capacity(capacity: int) -> int:
    if not isinstance(capacity, int) or isinstance(capacity, bool):
        raise ValueError("page capacity must be an integer")
    if capacity < 1 or capacity > PAGE_CAPACITY:
        raise ValueError(f"page capacity must be between 1 and {PAGE_CAPACITY}")
    return capacity


def paginate(
    records: Sequence[Record],
    template: Template,
    *,
    encoder: CodeEncoder,
    page_capacity: int = PAGE_CAPACITY,
    progress: ProgressReporter | None = None,
) -> PaginationResult:
    validate_template(template)
    capacity = _validate_capacity(page_capacity)
    reporter = progress or NullProgress()
    reporter.report(0, "Preparing PDF...")

    total_records = len(records)
    slices = partition_pages(records, capacity)
    total_pages = len(slices)
    pages: list[RenderedPage] = []
    failures: list[EncodingFailureInfo] = []
    completed = 0

    for page_idx, page_records in enumerate(slices):
        commands: list[DrawCommand] = []
        key_values: list[str] = []
        for slot_idx, record in enumerate(page_records):
            box = slot_box(PAGE_WIDTH, PAGE_HEIGHT, slot_idx)
            card = project(record, template)
            key_values.append(card.key_value)
            rendered = render_card(box, card.lines, card.code_value, encoder)
            commands.extend(rendered.commands)
            if rendered.encoding_error is not None:
                failures.append(
                    EncodingFailureInfo(
                        record_index=page_idx * capacity + slot_idx,
                        key_value=card.key_value,
                        reason=rendered.encoding_error,
                    )
                )
            completed += 1
            percent = completed / total_records * 100
            reporter.report(percent, f"Generating PDF... {round(percent)}%")

        header = page_header(
            page_idx + 1,
            total_pages,
            template.primary_key,
            key_values[0],
            key_values[-1],
        )
        commands.append(header_command(header, PAGE_WIDTH, PAGE_HEIGHT))
        pages.append(
            RenderedPage(
                number=page_idx + 1,
                width=PAGE_WIDTH,
                height=PAGE_HEIGHT,
                header=header,
                records=tuple(page_records),
                commands=tuple(commands),
            )
        )

    return PaginationResult(pages=tuple(pages), encoding_failures=tuple(failures))


def write_pages(pages: Sequence[RenderedPage], sink: DocumentSink) -> bytes:
    try:
        for page in pages:
            sink.add_page(page.width, page.height)
            for command in page.commands:
                sink.draw(command)
        return sink.serialize()
    except SinkFailure:
        raise
    except Exception as exc:
        raise SinkFailure(f"unable to build document: {exc}") from exc


def run_generation(run: GenerationRun, sink: DocumentSink) -> GenerationResult:
    result = paginate(
        run.records,
        run.template,
        encoder=run.encoder,
        page_capacity=run.page_capacity,
        progress=run.progress,
    )
    document = write_pages(result.pages, sink)
    run.progress.report(100, "Done")
    return GenerationResult(
        document=document,
        page_count=len(result.pages),
        card_count=len(run.records),
        encoding_failures=result.encoding_failures,
    )


__all__ = [
    "EncodingFailureInfo",
    "GenerationResult",
    "GenerationRun",
    "PaginationResult",
    "page_count",
    "page_header",
    "paginate",
    "partition_pages",
    "run_generation",
    "write_pages",
]
