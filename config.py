"""설정 파일 로더 모듈."""

import copy
import json
from pathlib import Path

# 기본 설정 경로
_CONFIG_PATH = Path(__file__).parent / "config.json"

# 기본값 — config.json에 누락된 키가 있을 때 사용
_DEFAULTS = {
    "footer": {
        "color": "#1a331a",       # 진한 녹색
        "opacity": 0.4,
        "height_ratio": 0.15,     # 사진 높이 대비 바 높이
        "logo_padding": 0.12,     # 바 안에서 로고 위/아래 여백 비율
        "force_logo_white": False,
    },
    "logo": {
        "source": "assets/logo.png",
    },
    "loader": {
        "timeout_sec": 10,
    },
    "output": {
        "directory": "output/",
        "quality": 0.95,
        "filename_prefix": "oright-pro",
    },
    "preview": {
        "debounce_ms": 100,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """base 딕셔너리에 override 값을 병합한다 (깊은 병합)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Path | None = None) -> dict:
    """설정 파일을 읽어 딕셔너리로 반환한다.

    파일이 없으면 기본값을 사용한다.
    """
    config_path = Path(path) if path else _CONFIG_PATH
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user_config = json.load(f)
        return _deep_merge(copy.deepcopy(_DEFAULTS), user_config)
    return copy.deepcopy(_DEFAULTS)
