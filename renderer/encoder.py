"""결과 이미지 인코딩 모듈 — JPEG 바이트와 내보내기 파일명."""

import logging
from datetime import datetime
from io import BytesIO

from PIL import Image

from renderer.errors import EncodeError

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 0.95


def encode_jpeg(image: Image.Image, quality: float = DEFAULT_QUALITY) -> bytes:
    """이미지를 JPEG 바이트로 인코딩한다.

    quality는 [0, 1] 범위이며 Pillow의 정수 품질(1~100)로 변환된다.
    """
    if not 0.0 < quality <= 1.0:
        raise EncodeError(f"JPEG 품질 범위 초과: {quality}")

    try:
        buf = BytesIO()
        image.convert("RGB").save(buf, format="JPEG", quality=round(quality * 100), optimize=True)
        data = buf.getvalue()
    except (OSError, ValueError) as e:
        raise EncodeError(f"JPEG 인코딩 실패: {e}") from e

    logger.debug("JPEG 인코딩: %dx%d, %d 바이트", image.width, image.height, len(data))
    return data


def export_filename(prefix: str = "oright-pro", now: datetime | None = None) -> str:
    """내보내기 파일명 — 밀리초 타임스탬프를 붙여 중복을 피한다."""
    now = now or datetime.now()
    return f"{prefix}-{int(now.timestamp() * 1000)}.jpg"
