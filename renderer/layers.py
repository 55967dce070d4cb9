"""레이어 합성 모듈 — 원본 사진 + 반투명 푸터 바 + 로고."""

import logging

from PIL import Image

from .canvas import Canvas
from .effects import force_white, scale_logo
from .layout import LogoPlacement, compute_footer, compute_logo_placement
from .settings import FooterSettings

logger = logging.getLogger(__name__)


class LayerCompositor:
    """원본 사진 위에 푸터 바와 로고 레이어를 합성하여 최종 프레임을 생성한다."""

    def compose(
        self,
        main: Image.Image,
        logo: Image.Image | None,
        settings: FooterSettings,
    ) -> Image.Image:
        """합성 결과를 원본과 같은 크기의 RGB 이미지로 반환한다.

        Args:
            main: 원본 사진 (크기 변경 없이 (0, 0)에 그림)
            logo: 로고 이미지 (None이면 푸터 바만 그림)
            settings: 푸터/로고 설정

        Returns:
            main.size 크기의 RGB 이미지. 입력 이미지는 변경하지 않는다.
        """
        width, height = main.size
        footer = compute_footer(width, height, settings)
        placement = None
        if logo is not None:
            placement = compute_logo_placement(footer, logo.size, settings)

        canvas = Canvas(width, height)

        # 원본 레이어
        canvas.draw_base(main)

        # 푸터 바 레이어
        canvas.blend_rect(footer.box(), settings.rgb(), settings.footer_opacity)

        # 로고 레이어
        if logo is not None:
            overlay = self.render_logo(logo, placement, settings)
            canvas.paste(overlay, placement.position())
            logger.debug("로고 배치: %dx%d @ %s (scale=%.4f)",
                         overlay.width, overlay.height, placement.position(), placement.scale)

        return canvas.to_rgb()

    @staticmethod
    def render_logo(
        logo: Image.Image,
        placement: LogoPlacement,
        settings: FooterSettings,
    ) -> Image.Image:
        """배치 크기로 축소하고 필요하면 흰색으로 변환한 로고 레이어를 반환한다."""
        overlay = scale_logo(logo, placement.size())
        if settings.force_logo_white:
            overlay = force_white(overlay)
        return overlay

