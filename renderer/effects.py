"""로고 이미지 효과 모듈 — 고품질 축소와 흰색 실루엣 변환."""

from PIL import Image


def scale_logo(logo: Image.Image, size: tuple[int, int]) -> Image.Image:
    """로고를 LANCZOS로 리샘플링한다.

    투명 가장자리에 검은 테두리가 생기지 않도록 premultiplied alpha(RGBa)
    상태에서 리사이즈한다.
    """
    rgba = logo.convert("RGBA")
    if rgba.size == size:
        return rgba
    return rgba.convert("RGBa").resize(size, Image.Resampling.LANCZOS).convert("RGBA")


def force_white(logo: Image.Image) -> Image.Image:
    """모든 픽셀의 RGB를 255로, 알파 채널은 그대로 유지한 사본을 반환한다."""
    rgba = logo.convert("RGBA")
    alpha = rgba.getchannel("A")
    white = Image.new("L", rgba.size, 255)
    return Image.merge("RGBA", (white, white, white, alpha))
