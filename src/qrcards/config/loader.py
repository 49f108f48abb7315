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

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from PIL import ImageColor

from ..core.template import DEFAULT_TEMPLATE, Template, build_template, template_from_config
from ..qr.codec import MODULE_SHAPES, Color, QrConfig
from .installer import resolve_config_path

DEFAULT_AUTOCOMPLETE_FIELDS = ("Union",)
QR_ERROR_LEVELS = ("L", "M", "Q", "H")
_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False
    no_animations: bool = False


@dataclass(frozen=True)
class OutputDefaults:
    output_dir: str | None = None
    normalize: bool = False


@dataclass(frozen=True)
class PdfConfig:
    font_path: Path | None = None


@dataclass(frozen=True)
class AppConfig:
    """Everything a card run reads from the TOML config."""

    template: Template = DEFAULT_TEMPLATE
    qr_config: QrConfig = field(default_factory=QrConfig)
    pdf: PdfConfig = field(default_factory=PdfConfig)
    autocomplete_fields: tuple[str, ...] = DEFAULT_AUTOCOMPLETE_FIELDS
    defaults: OutputDefaults = field(default_factory=OutputDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)
    source_path: Path | None = None


class _Section:
    """Typed reads from one ``[table]`` of the config, with dotted names in errors."""

    def __init__(self, name: str, values: object) -> None:
        self.name = name
        self.values: dict[str, object] = values if isinstance(values, dict) else {}

    def _invalid(self, key: str, kind: str) -> ValueError:
        return ValueError(f"{self.name}.{key} must be {kind}")

    def flag(self, key: str, default: bool) -> bool:
        value = self.values.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
        raise self._invalid(key, "a boolean")

    def integer(self, key: str, default: int, *, minimum: int) -> int:
        value = self.values.get(key, default)
        number: int | None = None
        if isinstance(value, int) and not isinstance(value, bool):
            number = value
        elif isinstance(value, float) and value.is_integer():
            number = int(value)
        elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
            number = int(value.strip())
        if number is None:
            raise self._invalid(key, "an integer")
        if number < minimum:
            kind = "a positive integer" if minimum > 0 else "a non-negative integer"
            raise self._invalid(key, kind)
        return number

    def choice(self, key: str, default: str, options: tuple[str, ...], *, upper: bool) -> str:
        text = str(self.values.get(key, default)).strip()
        text = text.upper() if upper else text.lower()
        if text not in options:
            raise self._invalid(key, "one of " + ", ".join(options))
        return text

    def text(self, key: str) -> str | None:
        value = self.values.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self._invalid(key, "a string")
        return value.strip() or None

    def names(self, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
        value = self.values.get(key)
        if value is None:
            return default
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise self._invalid(key, "a list of strings")
        return tuple(item.strip() for item in value if item.strip())

    def color(self, key: str) -> Color | None:
        """Colours load as RGB(A) tuples so the QR renderers never see unknown names."""
        value = self.values.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            text = value.strip()
            if text.lower() in ("", "none", "transparent"):
                return None
            try:
                parsed = ImageColor.getcolor(text, "RGBA")
            except ValueError:
                raise self._invalid(key, "a colour") from None
            if isinstance(parsed, int):
                return (parsed, parsed, parsed)
            red, green, blue, alpha = parsed
            return (red, green, blue) if alpha == 255 else (red, green, blue, alpha)
        if (
            isinstance(value, list)
            and len(value) in (3, 4)
            and all(isinstance(channel, int) and 0 <= channel <= 255 for channel in value)
        ):
            return tuple(value)  # type: ignore[return-value]
        raise self._invalid(key, "a colour")


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    try:
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"invalid config file {config_path}: {exc}") from exc

    template = data.get("template")
    defaults = _Section("defaults", data.get("defaults"))
    ui = _Section("ui", data.get("ui"))
    return AppConfig(
        template=template_from_config(template if isinstance(template, dict) else {}),
        qr_config=build_qr_config(data.get("qr")),
        pdf=_pdf_config(_Section("pdf", data.get("pdf")), base_dir=config_path.parent),
        autocomplete_fields=_Section("autocomplete", data.get("autocomplete")).names(
            "fields", DEFAULT_AUTOCOMPLETE_FIELDS
        ),
        defaults=OutputDefaults(
            output_dir=defaults.text("output_dir"),
            normalize=defaults.flag("normalize", False),
        ),
        ui=UiDefaults(
            quiet=ui.flag("quiet", False),
            no_color=ui.flag("no_color", False),
            no_animations=ui.flag("no_animations", False),
        ),
        source_path=config_path,
    )


def apply_template_override(
    config: AppConfig,
    *,
    columns: list[str] | None = None,
    primary_key: str | None = None,
) -> AppConfig:
    """Swap in command-line columns and key; the key falls back to the first column."""
    if not columns and not primary_key:
        return config
    new_columns = columns or list(config.template.columns)
    if primary_key is None and config.template.primary_key in new_columns:
        primary_key = config.template.primary_key
    return replace(config, template=build_template(new_columns, primary_key))


def build_qr_config(cfg: dict[str, object] | None = None) -> QrConfig:
    qr = _Section("qr", cfg)
    return QrConfig(
        error=qr.choice("error", "H", QR_ERROR_LEVELS, upper=True),
        border=qr.integer("border", 2, minimum=0),
        dark=qr.color("dark"),
        light=qr.color("light"),
        module_shape=qr.choice("module_shape", "square", MODULE_SHAPES, upper=False),
        oversample=qr.integer("oversample", 4, minimum=1),
        boost_error=qr.flag("boost_error", True),
    )


def _pdf_config(pdf: _Section, *, base_dir: Path) -> PdfConfig:
    font = pdf.text("font_path")
    if font is None:
        return PdfConfig()
    font_path = Path(font).expanduser()
    return PdfConfig(font_path=font_path if font_path.is_absolute() else base_dir / font_path)
