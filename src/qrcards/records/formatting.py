#!/usr/bin/env python3
from __future__ import annotations

import re
from collections.abc import Callable, Mapping

from .csv_input import normalize_field_name

MOBILE_LENGTH = 11
MOBILE_PREFIXES = ("013", "014", "015", "016", "017", "018", "019")

_NON_ALNUM_RE = re.compile(r"[^A-Z0-9]")
_NON_DIGIT_RE = re.compile(r"[^0-9]")


def format_hh_id(value: str) -> str:
    return _NON_ALNUM_RE.sub("", value.upper()).strip()


def format_name(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split(" ")).strip()


def format_mobile(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value)


def format_union(value: str) -> str:
    return (value[:1].upper() + value[1:]).strip()


FORMATTERS: dict[str, Callable[[str], str]] = {
    "hh_id": format_hh_id,
    "name": format_name,
    "mobile": format_mobile,
    "union": format_union,
}


def validate_mobile(value: str) -> bool:
    cleaned = format_mobile(value)
    if len(cleaned) != MOBILE_LENGTH:
        return False
    return cleaned.startswith(MOBILE_PREFIXES)


def format_value(field: str, value: str) -> str:
    formatter = FORMATTERS.get(normalize_field_name(field))
    if formatter is None or not value:
        return value
    return formatter(value)


def format_record(record: Mapping[str, str | None]) -> dict[str, str]:
    return {field: format_value(field, value or "") for field, value in record.items()}


def mobile_fields(fields: list[str] | tuple[str, ...]) -> list[str]:
    return [field for field in fields if normalize_field_name(field) == "mobile"]
