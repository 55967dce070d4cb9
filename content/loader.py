"""이미지 소스 로더 모듈 — 인라인 바이트 / data URI / 파일 / HTTP.

HTTP와 파일 경로는 매번 새로 읽는다. 로고 파일을 교체하면 다음 로드에
바로 반영된다.
"""

import asyncio
import base64
import binascii
import logging
import time
from io import BytesIO
from pathlib import Path
from urllib.parse import unquote_to_bytes

from PIL import Image, ImageOps, UnidentifiedImageError

from renderer.errors import LoadError

logger = logging.getLogger(__name__)

# 캐시 우회 요청 헤더
_NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def decode_image(data: bytes, label: str = "<inline>") -> Image.Image:
    """인코딩된 바이트를 디코딩해 픽셀이 로드된 Image로 반환한다.

    다중 프레임 이미지는 첫 프레임만 사용하고, EXIF 회전 정보를 적용한다.
    디코더에 넘긴 버퍼는 성공/실패와 관계없이 닫힌다.
    """
    if not data:
        raise LoadError(f"빈 이미지 데이터: {label}")

    try:
        with BytesIO(data) as buf, Image.open(buf) as img:
            img.load()
            # exif_transpose는 항상 새 Image를 반환하므로 버퍼와 분리된다
            bitmap = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise LoadError(f"이미지 디코딩 실패: {label} ({e})") from e

    if bitmap.width <= 0 or bitmap.height <= 0:
        raise LoadError(f"이미지 크기 오류: {label} {bitmap.width}x{bitmap.height}")
    return bitmap


def decode_data_uri(uri: str) -> bytes:
    """data: URI의 본문 바이트를 반환한다."""
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:"):
        raise LoadError("잘못된 data URI")
    try:
        if header.endswith(";base64"):
            return base64.b64decode(payload, validate=True)
        return unquote_to_bytes(payload)
    except (binascii.Error, ValueError) as e:
        raise LoadError(f"data URI 디코딩 실패: {e}") from e


def _consume_result(task: asyncio.Task) -> None:
    """대기자가 모두 취소된 공유 로드의 예외도 회수한다."""
    if not task.cancelled():
        task.exception()


def _source_key(source) -> object:
    """동시 로드 중복 제거용 키."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return ("bytes", bytes(source))
    return ("ref", str(source))


class AssetLoader:
    """이미지 소스를 디코딩된 Image로 바꾼다.

    같은 소스에 대한 동시 요청은 하나의 로드를 공유한다. 완료된 결과는
    캐시하지 않는다.
    """

    def __init__(self, timeout_sec: float = 10, base_dir: str | Path | None = None):
        self._timeout = timeout_sec
        self._base_dir = Path(base_dir) if base_dir else None
        self._inflight: dict[object, asyncio.Task] = {}

    @property
    def inflight(self) -> int:
        """진행 중인 로드 수."""
        return len(self._inflight)

    async def load(self, source) -> Image.Image:
        """소스를 로드한다. 실패 시 LoadError."""
        if source is None:
            raise LoadError("이미지 소스 없음")

        key = _source_key(source)
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(key, source))
            self._inflight[key] = task
            task.add_done_callback(_consume_result)
        # 한 호출자가 취소되어도 공유 로드는 계속된다
        return await asyncio.shield(task)

    async def _run(self, key: object, source) -> Image.Image:
        try:
            return await self._load(source)
        finally:
            self._inflight.pop(key, None)

    async def _load(self, source) -> Image.Image:
        if isinstance(source, (bytes, bytearray, memoryview)):
            data, label = bytes(source), "<inline>"
        else:
            text = str(source)
            if text.startswith("data:"):
                data, label = decode_data_uri(text), "<data-uri>"
            elif text.startswith(("http://", "https://")):
                data, label = await self._fetch(text), text
            else:
                path = self._resolve(source)
                data, label = await asyncio.to_thread(self._read_file, path), str(path)

        # 디코딩은 워커 스레드에서 실행한다
        bitmap = await asyncio.to_thread(decode_image, data, label)
        logger.info("이미지 로드: %s (%dx%d, %s)", label, bitmap.width, bitmap.height, bitmap.mode)
        return bitmap

    def _resolve(self, source) -> Path:
        path = Path(source)
        if not path.is_absolute() and self._base_dir is not None:
            path = self._base_dir / path
        return path

    @staticmethod
    def _read_file(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise LoadError(f"파일 읽기 실패: {path} ({e})") from e

    async def _fetch(self, url: str) -> bytes:
        """HTTP(S)로 이미지를 가져온다. 캐시를 우회한다."""
        import aiohttp

        params = {"_ts": str(time.time_ns())}
        timeout = aiohttp.ClientTimeout(total=self._timeout)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, params=params, headers=_NO_CACHE_HEADERS,
                                       timeout=timeout) as resp:
                    if not 200 <= resp.status < 300:
                        raise LoadError(f"HTTP {resp.status}: {url}")
                    return await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise LoadError(f"이미지 요청 실패: {url} ({e})") from e
