#!/usr/bin/env python3
from __future__ import annotations

import functools
import io
import math
from dataclasses import dataclass
from typing import Any

import segno
from PIL import Image, ImageColor, ImageDraw

from ..core.errors import EncodingFailure
from ..render.commands import CodeImage

Color = str | tuple[int, int, int] | tuple[int, int, int, int]
RGBA = tuple[int, int, int, int]

MODULE_SHAPES = ("square", "rounded")
WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)

# Corner radius of a rounded module, as a fraction of the module size.
ROUNDED_RADIUS = 0.2
ENCODER_CACHE_SIZE = 512


@dataclass(frozen=True)
class QrConfig:
    """How primary keys are turned into QR images on a card."""

    error: str = "H"
    border: int = 2
    dark: Color | None = None
    light: Color | None = None
    module_shape: str = "square"
    oversample: int = 4
    boost_error: bool = True


def make_qr(data: str, *, error: str = "H", boost_error: bool = True) -> Any:
    return segno.make(data, error=error, micro=False, boost_error=boost_error)


def scale_for_size(qr: Any, size: float, *, border: int, oversample: int) -> int:
    """Smallest integer module scale whose image covers ``size * oversample`` pixels."""
    modules, _ = qr.symbol_size(scale=1, border=border)
    pixels = max(1.0, float(size) * max(1, oversample))
    return max(1, math.ceil(pixels / modules))


def qr_png(
    data: str,
    *,
    size: float,
    error: str = "H",
    border: int = 2,
    dark: Color | None = None,
    light: Color | None = None,
    module_shape: str = "square",
    oversample: int = 4,
    boost_error: bool = True,
) -> bytes:
    shape = module_shape.strip().lower()
    if shape not in MODULE_SHAPES:
        raise ValueError(f"unsupported module_shape: {module_shape}")
    qr = make_qr(data, error=error, boost_error=boost_error)
    scale = scale_for_size(qr, size, border=border, oversample=oversample)
    if shape == "rounded":
        image = _draw_rounded(
            qr,
            scale=scale,
            border=border,
            dark=_rgba(dark, BLACK),
            light=_rgba(light, WHITE),
        )
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()

    colors = {key: value for key, value in (("dark", dark), ("light", light)) if value}
    buf = io.BytesIO()
    qr.save(buf, kind="png", scale=scale, border=border, **colors)
    return buf.getvalue()


def _rgba(value: Color | None, default: RGBA) -> RGBA:
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip()
        if not text or text.lower() in ("none", "transparent"):
            return default
        parsed = ImageColor.getcolor(text, "RGBA")
        if isinstance(parsed, int):
            return (parsed, parsed, parsed, 255)
        red, green, blue, alpha = parsed
        return (red, green, blue, alpha)
    channels = [int(channel) for channel in value]
    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4:
        return default
    return (channels[0], channels[1], channels[2], channels[3])


def _draw_rounded(qr: Any, *, scale: int, border: int, dark: RGBA, light: RGBA) -> Image.Image:
    width, height = qr.symbol_size(scale=scale, border=border)
    image = Image.new("RGBA", (width, height), light)
    draw = ImageDraw.Draw(image)
    radius = ROUNDED_RADIUS * scale
    for y, row in enumerate(qr.matrix_iter(scale=1, border=border)):
        top = y * scale
        for x, is_dark in enumerate(row):
            if is_dark:
                left = x * scale
                draw.rounded_rectangle(
                    (left, top, left + scale - 1, top + scale - 1),
                    radius=radius,
                    fill=dark,
                )
    return image


class QrEncoder:
    """Card code encoder: PNG QR images of primary keys, cached per instance."""

    def __init__(self, config: QrConfig | None = None) -> None:
        self.config = config or QrConfig()
        self._cached = functools.lru_cache(maxsize=ENCODER_CACHE_SIZE)(self._render)

    def __call__(self, text: str, size: float) -> CodeImage:
        if not text or not text.strip():
            raise EncodingFailure("no value to encode")
        return self._cached(text, float(size))

    def _render(self, text: str, size: float) -> CodeImage:
        cfg = self.config
        try:
            data = qr_png(
                text,
                size=size,
                error=cfg.error,
                border=cfg.border,
                dark=cfg.dark,
                light=cfg.light,
                module_shape=cfg.module_shape,
                oversample=cfg.oversample,
                boost_error=cfg.boost_error,
            )
        except segno.DataOverflowError as exc:
            raise EncodingFailure(f"value too long for a QR code: {exc}") from exc
        return CodeImage(data=data, size=size)
