"""RGBA 출력 캔버스 관리 모듈."""

from PIL import Image


class Canvas:
    """메인 이미지 크기의 RGBA 캔버스."""

    def __init__(self, width: int, height: int):
        self._size = (width, height)
        self._image = Image.new("RGBA", self._size, (0, 0, 0, 255))

    def draw_base(self, image: Image.Image) -> None:
        """원본 이미지를 (0, 0)에 원래 크기 그대로 그린다."""
        self.paste(image, (0, 0))

    def paste(self, layer: Image.Image, position: tuple = (0, 0)) -> None:
        """레이어를 캔버스 위에 합성한다 (알파 블렌딩)."""
        if layer.mode != "RGBA":
            layer = layer.convert("RGBA")
        self._image = Image.alpha_composite(self._image, _place(layer, position, self._size))

    def blend_rect(self, box: tuple[int, int, int, int], rgb: tuple, opacity: float) -> None:
        """box 영역에 단색을 opacity 비율로 덮는다 (alpha-over, 교체 아님)."""
        left, top, right, bottom = box
        if right <= left or bottom <= top:
            return
        alpha = round(opacity * 255)
        fill = Image.new("RGBA", (right - left, bottom - top), (*rgb[:3], alpha))
        self.paste(fill, (left, top))

    def to_rgb(self) -> Image.Image:
        """RGB 모드로 변환하여 반환한다 (JPEG 인코딩용)."""
        return self._image.convert("RGB")


def _place(layer: Image.Image, position: tuple, size: tuple[int, int]) -> Image.Image:
    """레이어를 캔버스 크기에 맞춰 지정 위치에 배치한다."""
    if layer.size == size and position == (0, 0):
        return layer
    result = Image.new("RGBA", size, (0, 0, 0, 0))
    result.paste(layer, position)
    return result
