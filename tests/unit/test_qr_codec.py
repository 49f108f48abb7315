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

import io
import unittest

from PIL import Image

from qrcards.core.errors import EncodingFailure
from qrcards.qr.codec import QrConfig, QrEncoder, make_qr, qr_png, scale_for_size
from tests.test_support import PNG_SIGNATURE

# Try to import zxingcpp for QR decoding verification
try:
    import zxingcpp

    HAS_ZXING = True
except ImportError:
    HAS_ZXING = False


def decode_qr_text(png_data: bytes) -> list[str]:
    """Decode QR code(s) from PNG bytes, returning the text payloads."""
    with Image.open(io.BytesIO(png_data)) as img:
        return [result.text for result in zxingcpp.read_barcodes(img.convert("RGB"))]


class TestQrPng(unittest.TestCase):
    def test_png_signature(self) -> None:
        for shape in ("square", "rounded"):
            with self.subTest(shape=shape):
                png = qr_png("HH001", size=85, module_shape=shape)
                self.assertTrue(png.startswith(PNG_SIGNATURE))

    def test_image_is_oversampled_for_print(self) -> None:
        png = qr_png("HH001", size=85, oversample=4)
        with Image.open(io.BytesIO(png)) as img:
            width, height = img.size
        self.assertEqual(width, height)
        self.assertGreaterEqual(width, 85 * 4)

    def test_scale_for_size(self) -> None:
        qr = make_qr("HH001")
        modules, _ = qr.symbol_size(scale=1, border=2)
        scale = scale_for_size(qr, 85, border=2, oversample=1)
        self.assertGreaterEqual(scale * modules, 85)
        self.assertLess((scale - 1) * modules, 85)

    def test_unknown_shape_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "module_shape"):
            qr_png("HH001", size=85, module_shape="hex")

    @unittest.skipUnless(HAS_ZXING, "zxingcpp not installed")
    def test_round_trip_decodes_primary_key(self) -> None:
        for shape in ("square", "rounded"):
            with self.subTest(shape=shape):
                png = qr_png("HH-2024-000123", size=85, module_shape=shape)
                self.assertIn("HH-2024-000123", decode_qr_text(png))


class TestQrEncoder(unittest.TestCase):
    def test_returns_png_code_image(self) -> None:
        image = QrEncoder()("HH001", 85)
        self.assertTrue(image.data.startswith(PNG_SIGNATURE))
        self.assertEqual(image.size, 85.0)
        self.assertEqual(image.mime_type, "image/png")

    def test_empty_value_fails(self) -> None:
        encoder = QrEncoder()
        for value in ("", "   "):
            with self.subTest(value=value):
                with self.assertRaisesRegex(EncodingFailure, "no value"):
                    encoder(value, 85)

    def test_overflow_is_an_encoding_failure(self) -> None:
        with self.assertRaisesRegex(EncodingFailure, "too long"):
            QrEncoder()("X" * 5000, 85)

    def test_deterministic_and_cached(self) -> None:
        encoder = QrEncoder(QrConfig(error="M"))
        first = encoder("HH001", 85)
        second = encoder("HH001", 85)
        self.assertIs(first, second)
        self.assertEqual(QrEncoder(QrConfig(error="M"))("HH001", 85).data, first.data)

    def test_encoding_failure_is_not_fatal_type(self) -> None:
        self.assertTrue(issubclass(EncodingFailure, RuntimeError))


if __name__ == "__main__":
    unittest.main()
