"""푸터/로고 합성 설정 모듈."""

import dataclasses
from dataclasses import dataclass

from PIL import ImageColor

from renderer.errors import CompositeError


@dataclass(frozen=True)
class FooterSettings:
    """합성 1회에 사용되는 읽기 전용 설정."""
    footer_color: str          # 바 색상 (예: "#1a331a")
    footer_opacity: float      # 바 불투명도 [0, 1]
    footer_height_ratio: float # 사진 높이 대비 바 높이 (0, 1)
    logo_padding: float        # 바 안의 위/아래 여백 비율 [0, 0.5)
    force_logo_white: bool     # 로고를 흰색 실루엣으로 변환

    @classmethod
    def from_config(cls, section: dict) -> "FooterSettings":
        """config["footer"] 섹션에서 설정을 만든다. 누락된 키는 기본값."""
        return cls(
            footer_color=str(section.get("color", DEFAULT_SETTINGS.footer_color)),
            footer_opacity=float(section.get("opacity", DEFAULT_SETTINGS.footer_opacity)),
            footer_height_ratio=float(
                section.get("height_ratio", DEFAULT_SETTINGS.footer_height_ratio)),
            logo_padding=float(section.get("logo_padding", DEFAULT_SETTINGS.logo_padding)),
            force_logo_white=bool(
                section.get("force_logo_white", DEFAULT_SETTINGS.force_logo_white)),
        )

    def replace(self, **changes) -> "FooterSettings":
        """일부 필드만 바꾼 사본을 반환한다."""
        return dataclasses.replace(self, **changes)

    def rgb(self) -> tuple[int, int, int]:
        """footer_color를 (R, G, B)로 해석한다."""
        try:
            return ImageColor.getrgb(self.footer_color)[:3]
        except (ValueError, AttributeError) as e:
            raise CompositeError(f"색상 해석 실패: {self.footer_color!r}") from e

    def validate(self) -> None:
        """범위를 벗어난 값이 있으면 CompositeError를 발생시킨다.

        값을 보정(clamp)하지 않는다. 잘못된 설정은 호출자 책임이다.
        """
        if not 0.0 <= self.footer_opacity <= 1.0:
            raise CompositeError(f"footer_opacity 범위 초과: {self.footer_opacity}")
        if not 0.0 < self.footer_height_ratio < 1.0:
            raise CompositeError(f"footer_height_ratio 범위 초과: {self.footer_height_ratio}")
        if not 0.0 <= self.logo_padding < 0.5:
            raise CompositeError(f"logo_padding 범위 초과: {self.logo_padding}")
        self.rgb()


# 기본 브랜드 스타일
DEFAULT_SETTINGS = FooterSettings(
    footer_color="#1a331a",
    footer_opacity=0.4,
    footer_height_ratio=0.15,
    logo_padding=0.12,
    force_logo_white=False,
)
