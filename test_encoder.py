"""JPEG 인코딩과 내보내기 파일명 테스트."""

import unittest
from datetime import datetime, timezone
from io import BytesIO
from unittest import mock

from PIL import Image

from renderer.encoder import encode_jpeg, export_filename
from renderer.errors import EncodeError


class EncodeJpegTests(unittest.TestCase):
    def test_produces_jpeg_of_same_size(self) -> None:
        data = encode_jpeg(Image.new("RGB", (320, 200), (26, 51, 26)))
        self.assertTrue(data.startswith(b"\xff\xd8"))
        with Image.open(BytesIO(data)) as img:
            self.assertEqual(img.format, "JPEG")
            self.assertEqual(img.size, (320, 200))
            r, g, b = img.getpixel((160, 100))
        self.assertLessEqual(abs(r - 26) + abs(g - 51) + abs(b - 26), 6)

    def test_rgba_input_is_flattened(self) -> None:
        data = encode_jpeg(Image.new("RGBA", (10, 10), (255, 255, 255, 128)))
        with Image.open(BytesIO(data)) as img:
            self.assertEqual(img.mode, "RGB")

    def test_same_input_same_bytes(self) -> None:
        img = Image.linear_gradient("L").convert("RGB")
        self.assertEqual(encode_jpeg(img), encode_jpeg(img))

    def test_lower_quality_is_smaller(self) -> None:
        img = Image.effect_noise((128, 128), 64).convert("RGB")
        self.assertLess(len(encode_jpeg(img, 0.3)), len(encode_jpeg(img, 0.95)))

    def test_invalid_quality_raises(self) -> None:
        img = Image.new("RGB", (4, 4))
        for quality in (0.0, -1, 1.5):
            with self.assertRaises(EncodeError):
                encode_jpeg(img, quality)

    def test_backend_failure_raises_encode_error(self) -> None:
        image = mock.MagicMock()
        image.convert.return_value.save.side_effect = OSError("encoder broke")
        with self.assertRaises(EncodeError):
            encode_jpeg(image)


class ExportFilenameTests(unittest.TestCase):
    def test_timestamped_name(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.assertEqual(export_filename(now=now), "oright-pro-1704067200000.jpg")
        self.assertEqual(export_filename("brand", now=now), "brand-1704067200000.jpg")


if __name__ == "__main__":
    unittest.main()
