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


class TemplateError(ValueError):
    """Raised when a card template cannot be used for a generation run."""


class EmptyColumnsError(TemplateError):
    pass


class TooManyColumnsError(TemplateError):
    pass


class PrimaryKeyNotInColumnsError(TemplateError):
    pass


class DuplicateColumnError(TemplateError):
    pass


class EncodingFailure(RuntimeError):
    """Raised by a code encoder that cannot produce an image for a value.

    Non-fatal: the card is still rendered, only without its code image.
    """


class SinkFailure(RuntimeError):
    """Raised when the document sink cannot build or serialize the document.

    Fatal for the run: no partial document is produced.
    """


__all__ = [
    "DuplicateColumnError",
    "EmptyColumnsError",
    "EncodingFailure",
    "PrimaryKeyNotInColumnsError",
    "SinkFailure",
    "TemplateError",
    "TooManyColumnsError",
]
