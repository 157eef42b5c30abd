"""설정 파일 로더 모듈."""

import copy
import json
from pathlib import Path

# 기본 설정 경로
_CONFIG_PATH = Path(__file__).parent / "config.json"

# 기본값 — config.json에 누락된 키가 있을 때 사용
_DEFAULTS = {
    "weather": {
        "api_provider": "open-meteo",
        "api_key": "",
        "location": "",
        "units": "F",
        "days": 4,
        "alerts": True,
        "timeout_sec": 10,
        "user_agent": "weatherboard/0.1",
    },
    "assets": {
        "directory": "res",
        "background": "background.png",
        "fonts": {
            "small": {"file": "Star4000 Small.ttf", "size": 36},
            "regular": {"file": "Star4000.ttf", "size": 36},
            "large": {"file": "Star4000 Large.ttf", "size": 32},
        },
    },
    "render": {
        "delay_ms": 100,
        "loop": 0,
        "header_width": 530,
        "legacy_ticker": False,
    },
    "output": {
        "path": "weather.gif",
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


def default_config() -> dict:
    """기본 설정의 독립 복사본."""
    return copy.deepcopy(_DEFAULTS)


def load_config(path: Path | None = None) -> dict:
    """설정 파일을 읽어 딕셔너리로 반환한다.

    파일이 없으면 기본값을 사용한다.
    """
    config_path = path or _CONFIG_PATH
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user_config = json.load(f)
        return _deep_merge(default_config(), user_config)
    return default_config()


def font_specs(config: dict) -> dict[str, tuple[str, int]]:
    """assets.fonts 설정 → {폰트 id: (파일명, 크기)}."""
    return {
        font_id: (spec["file"], int(spec["size"]))
        for font_id, spec in config["assets"]["fonts"].items()
    }
