"""합성 파이프라인 — 로드 → 합성 → 인코딩, 미리보기 세션 관리."""

import asyncio
import logging
from pathlib import Path

from PIL import Image

from content.loader import AssetLoader
from renderer.encoder import DEFAULT_QUALITY, encode_jpeg, export_filename
from renderer.errors import LoadError
from renderer.layers import LayerCompositor
from renderer.settings import DEFAULT_SETTINGS, FooterSettings
from scheduler import RunScheduler

logger = logging.getLogger(__name__)


async def load_logo(loader: AssetLoader, source) -> Image.Image | None:
    """로고를 로드한다. 실패해도 예외 대신 None을 반환한다 (로고 없이 진행)."""
    if source is None:
        return None
    try:
        return await loader.load(source)
    except LoadError as e:
        logger.warning("로고 로드 실패, 로고 없이 진행: %s", e)
        return None


async def process_image(
    main_source,
    logo_source,
    settings: FooterSettings = DEFAULT_SETTINGS,
    loader: AssetLoader | None = None,
    compositor: LayerCompositor | None = None,
    quality: float = DEFAULT_QUALITY,
) -> bytes:
    """사진 1장을 합성해 JPEG 바이트로 반환한다.

    메인 이미지 LoadError, CompositeError, EncodeError는 그대로 전파된다.
    """
    loader = loader or AssetLoader()
    compositor = compositor or LayerCompositor()

    main = await loader.load(main_source)
    logo = await load_logo(loader, logo_source)

    composite = compositor.compose(main, logo, settings)
    return encode_jpeg(composite, quality)


class PreviewSession:
    """입력이 바뀔 때마다 디바운스 후 다시 합성하고, 최신 결과만 보관한다.

    실패한 실행은 로그만 남기고 이전 결과를 그대로 둔다. 새 입력이 들어온
    뒤 끝난 실행의 결과는 버린다 (진행 중인 디코딩은 취소하지 않는다).
    """

    def __init__(
        self,
        logo_source=None,
        settings: FooterSettings = DEFAULT_SETTINGS,
        loader: AssetLoader | None = None,
        compositor: LayerCompositor | None = None,
        scheduler: RunScheduler | None = None,
        quality: float = DEFAULT_QUALITY,
        filename_prefix: str = "oright-pro",
    ):
        self._logo_source = logo_source
        self._settings = settings
        self._loader = loader or AssetLoader()
        self._compositor = compositor or LayerCompositor()
        self._scheduler = scheduler or RunScheduler()
        self._quality = quality
        self._filename_prefix = filename_prefix

        self._main_source = None
        self._latest: bytes | None = None
        self._busy_generation: int | None = None
        self._tasks: set[asyncio.Task] = set()

        self.last_error: Exception | None = None
        self.completed_runs = 0
        self.failed_runs = 0
        self.discarded_runs = 0

    @property
    def settings(self) -> FooterSettings:
        return self._settings

    @property
    def latest(self) -> bytes | None:
        """마지막으로 성공한 합성 결과 (JPEG)."""
        return self._latest

    @property
    def is_processing(self) -> bool:
        """최신 세대의 실행이 진행 중인지 여부."""
        return (self._busy_generation is not None
                and self._scheduler.is_current(self._busy_generation))

    def preview(self):
        """표시할 이미지 — 합성 결과가 없으면 원본 소스."""
        return self._latest if self._latest is not None else self._main_source

    def submit(self, main_source) -> asyncio.Task:
        """새 메인 이미지로 합성을 예약한다."""
        self._main_source = main_source
        return self._schedule()

    def update_settings(self, settings: FooterSettings) -> asyncio.Task | None:
        """설정을 바꾸고, 메인 이미지가 있으면 다시 합성한다."""
        self._settings = settings
        if self._main_source is None:
            return None
        return self._schedule()

    def clear(self) -> None:
        """메인 이미지와 결과를 지운다. 진행 중인 실행은 stale이 된다."""
        self._scheduler.reset()
        self._main_source = None
        self._latest = None
        self.last_error = None

    async def wait_idle(self) -> None:
        """예약/진행 중인 모든 실행이 끝날 때까지 기다린다."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def save(self, directory: str | Path) -> Path | None:
        """최신 결과를 타임스탬프 파일명으로 저장한다. 결과가 없으면 None."""
        if self._latest is None:
            logger.warning("저장할 합성 결과가 없습니다.")
            return None
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / export_filename(self._filename_prefix)
        path.write_bytes(self._latest)
        logger.info("저장: %s (%d 바이트)", path, len(self._latest))
        return path

    def _schedule(self) -> asyncio.Task:
        generation = self._scheduler.next_generation()
        task = asyncio.ensure_future(
            self._run(generation, self._main_source, self._settings))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, generation: int, main_source, settings: FooterSettings) -> bytes | None:
        # 디바운스 동안 새 입력이 오면 이 실행은 시작하지 않는다
        await self._scheduler.wait_debounce()
        if not self._scheduler.is_current(generation):
            logger.debug("디바운스 중 대체됨 (세대 %d)", generation)
            return None

        self._busy_generation = generation
        try:
            result = await process_image(
                main_source, self._logo_source, settings,
                loader=self._loader, compositor=self._compositor, quality=self._quality,
            )
        except Exception as e:
            logger.exception("이미지 처리 실패 (세대 %d): %s", generation, e)
            if self._scheduler.is_current(generation):
                self.last_error = e
                self.failed_runs += 1
            return None
        finally:
            if self._busy_generation == generation:
                self._busy_generation = None

        if not self._scheduler.is_current(generation):
            logger.info("오래된 결과 폐기 (세대 %d, 현재 %d)",
                        generation, self._scheduler.generation)
            self.discarded_runs += 1
            return None

        self._latest = result
        self.last_error = None
        self.completed_runs += 1
        logger.info("합성 완료 (세대 %d, %d 바이트)", generation, len(result))
        return result
