"""화면 레이아웃 모듈 — 푸터 바와 로고의 위치를 계산한다.

좌표는 모두 실수(float)로 계산하고, 실제 픽셀 영역이 필요할 때만
box()로 반올림한다.
"""

import math
from dataclasses import dataclass

from renderer.errors import CompositeError
from renderer.settings import FooterSettings


@dataclass(frozen=True)
class FooterLayout:
    """하단 푸터 바 영역."""
    width: int
    height: float   # 바 높이
    y: float        # 바 시작 행
    image_height: int

    def box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) 정수 픽셀 영역. bottom은 포함하지 않는다."""
        return 0, round(self.y), self.width, self.image_height


@dataclass(frozen=True)
class LogoPlacement:
    """푸터 안에 배치된 로고의 크기와 위치."""
    x: float
    y: float
    width: float
    height: float
    scale: float

    def size(self) -> tuple[int, int]:
        """리샘플링할 정수 크기 (최소 1x1)."""
        return max(1, round(self.width)), max(1, round(self.height))

    def position(self) -> tuple[int, int]:
        """붙여넣을 좌상단 정수 좌표."""
        return round(self.x), round(self.y)


def compute_footer(width: int, height: int, settings: FooterSettings) -> FooterLayout:
    """메인 이미지 크기와 설정으로 푸터 영역을 계산한다."""
    if width <= 0 or height <= 0:
        raise CompositeError(f"메인 이미지 크기 오류: {width}x{height}")
    settings.validate()

    footer_height = height * settings.footer_height_ratio
    footer_y = height - footer_height
    return FooterLayout(width=width, height=footer_height, y=footer_y, image_height=height)


def compute_logo_placement(
    footer: FooterLayout,
    logo_size: tuple[int, int],
    settings: FooterSettings,
) -> LogoPlacement:
    """로고를 비율 유지로 축소해 푸터 중앙에 배치한다."""
    logo_w, logo_h = logo_size
    if logo_w <= 0 or logo_h <= 0:
        raise CompositeError(f"로고 크기 오류: {logo_w}x{logo_h}")

    max_logo_height = footer.height * (1 - 2 * settings.logo_padding)
    scale = max_logo_height / logo_h
    if not math.isfinite(scale) or scale <= 0:
        raise CompositeError(f"로고 배율 오류: {scale}")

    w = logo_w * scale
    h = logo_h * scale

    # 가로 중앙, 푸터 안에서 세로 중앙
    x = (footer.width - w) / 2
    y = footer.y + (footer.height - h) / 2
    return LogoPlacement(x=x, y=y, width=w, height=h, scale=scale)
