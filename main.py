"""메인 실행 — 사진에 브랜드 푸터 바와 로고를 합성해 JPEG로 저장한다."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from config import load_config
from content.loader import AssetLoader
from pipeline import PreviewSession
from renderer.settings import FooterSettings
from scheduler import RunScheduler

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s")
logging.getLogger("aiohttp").setLevel(logging.WARNING)
logging.getLogger("PIL").setLevel(logging.WARNING)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="brandbar")
    parser.add_argument("photo", help="합성할 사진 경로 또는 URL")
    parser.add_argument("--logo", default=None, help="로고 소스 (기본값: config의 logo.source)")
    parser.add_argument("--no-logo", action="store_true", help="로고 없이 푸터 바만 합성")
    parser.add_argument("--config", type=Path, default=None, help="config.json 경로")
    parser.add_argument("--out", type=Path, default=None, help="출력 디렉토리")
    parser.add_argument("--white", action="store_true", help="로고를 흰색으로 변환")
    return parser.parse_args(argv)


def _resolve_local(source: str) -> str:
    """파일 경로면 현재 디렉토리 기준 절대 경로로 바꾼다. URL은 그대로."""
    if source.startswith(("http://", "https://", "data:")):
        return source
    return str(Path(source).resolve())


async def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = load_config(args.config)

    settings = FooterSettings.from_config(config["footer"])
    if args.white:
        settings = settings.replace(force_logo_white=True)

    # --logo는 현재 디렉토리 기준, config의 logo.source는 config 위치 기준
    if args.no_logo:
        logo_source = None
    elif args.logo:
        logo_source = _resolve_local(args.logo)
    else:
        logo_source = config["logo"].get("source")
    base_dir = args.config.parent if args.config else Path(__file__).parent

    session = PreviewSession(
        logo_source=logo_source,
        settings=settings,
        loader=AssetLoader(
            timeout_sec=config["loader"].get("timeout_sec", 10),
            base_dir=base_dir,
        ),
        scheduler=RunScheduler(debounce_sec=config["preview"].get("debounce_ms", 100) / 1000),
        quality=config["output"].get("quality", 0.95),
        filename_prefix=config["output"].get("filename_prefix", "oright-pro"),
    )

    session.submit(_resolve_local(args.photo))
    await session.wait_idle()

    if session.latest is None:
        logging.error("합성 실패: %s", session.last_error)
        return 1

    out_dir = args.out or Path(config["output"].get("directory", "output/"))
    path = session.save(out_dir)
    logging.info("완료: %s", path)
    return 0


def run() -> None:
    """콘솔 스크립트 진입점."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logging.info("종료")


if __name__ == "__main__":
    run()
