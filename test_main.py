"""명령행 실행 테스트 — 경로 해석, 출력 파일, 종료 코드."""

import json
import os
import tempfile
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

from main import main


def _save_png(path: Path, size: tuple[int, int], color) -> None:
    Image.new("RGBA", size, color).save(path, format="PNG")


def _band_center(out_dir: Path) -> tuple[int, int, int]:
    """출력 JPEG 하나를 찾아 푸터 중앙 픽셀을 반환한다 (400x400, 바 340~400행)."""
    outputs = list(out_dir.glob("*.jpg"))
    assert len(outputs) == 1, outputs
    with Image.open(BytesIO(outputs[0].read_bytes())) as img:
        return img.convert("RGB").getpixel((200, 370))


def _is_red(rgb: tuple[int, int, int]) -> bool:
    r, g, b = rgb
    return r > 200 and g < 60 and b < 60


class MainTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        root = Path(self._tmp.name)

        self.work = root / "work"
        self.conf = root / "conf"
        self.work.mkdir()
        self.conf.mkdir()
        _save_png(self.work / "photo.png", (400, 400), (20, 40, 200, 255))

        cwd = os.getcwd()
        os.chdir(self.work)
        self.addCleanup(os.chdir, cwd)

    async def test_relative_logo_resolves_against_working_directory(self) -> None:
        _save_png(self.work / "brand.png", (120, 40), (255, 0, 0, 255))
        rc = await main([
            "photo.png", "--logo", "brand.png",
            "--config", str(self.conf / "config.json"), "--out", "out",
        ])
        self.assertEqual(rc, 0)
        self.assertTrue(_is_red(_band_center(self.work / "out")))

    async def test_config_logo_resolves_against_config_directory(self) -> None:
        _save_png(self.conf / "brand.png", (120, 40), (255, 0, 0, 255))
        (self.conf / "config.json").write_text(
            json.dumps({"logo": {"source": "brand.png"}}), encoding="utf-8")
        rc = await main(["photo.png", "--config", str(self.conf / "config.json"), "--out", "out"])
        self.assertEqual(rc, 0)
        self.assertTrue(_is_red(_band_center(self.work / "out")))

    async def test_no_logo_renders_footer_only(self) -> None:
        _save_png(self.work / "brand.png", (120, 40), (255, 0, 0, 255))
        rc = await main([
            "photo.png", "--logo", "brand.png", "--no-logo",
            "--config", str(self.conf / "config.json"), "--out", "out",
        ])
        self.assertEqual(rc, 0)
        self.assertFalse(_is_red(_band_center(self.work / "out")))

    async def test_unreadable_photo_exits_non_zero(self) -> None:
        (self.work / "broken.png").write_bytes(b"not an image")
        rc = await main(["broken.png", "--config", str(self.conf / "config.json"), "--out", "out"])
        self.assertEqual(rc, 1)
        self.assertFalse((self.work / "out").exists())


if __name__ == "__main__":
    unittest.main()
