"""날씨 아이콘 모듈 — 상태별 6프레임 애니메이션 PNG 로딩."""

import logging
from pathlib import Path
from PIL import Image

logger = logging.getLogger(__name__)

# 아이콘 애니메이션 프레임 수
ICON_FRAME_COUNT = 6

# 알 수 없는 상태일 때 쓰는 아이콘
DEFAULT_CONDITION = "clear-day"

CONDITIONS = (
    "clear-day",
    "clear-night",
    "cloudy",
    "fog",
    "partly-cloudy-day",
    "partly-cloudy-night",
    "rain",
    "sleet",
    "snow",
    "wind",
)

# 상태별 카드 요약 문구 (줄바꿈 포함 가능)
CONDITION_SUMMARIES = {
    "clear-day": "Sunny",
    "clear-night": "Clear",
    "cloudy": "Cloudy",
    "fog": "Fog",
    "partly-cloudy-day": "Partly\nCloudy",
    "partly-cloudy-night": "Partly\nCloudy",
    "rain": "Rain",
    "sleet": "Sleet",
    "snow": "Snow",
    "wind": "Windy",
}


def describe_condition(condition: str) -> str:
    """상태 키의 요약 문구. 모르는 키는 그대로 반환한다."""
    return CONDITION_SUMMARIES.get(condition, condition)


def load_icon_sequence(icon_dir: Path, condition: str) -> tuple[Image.Image, ...]:
    """<icon_dir>/<condition>/0..5.png를 로드한다.

    0.png만 있는 상태(정지 아이콘)는 그 프레임을 6번 반복한다.
    0.png가 없거나 디코딩에 실패하면 OSError가 올라간다.
    """
    cond_dir = Path(icon_dir) / condition
    frames: list[Image.Image] = []
    for i in range(ICON_FRAME_COUNT):
        path = cond_dir / f"{i}.png"
        if i > 0 and not path.exists():
            frames.append(frames[0])
            continue
        with Image.open(path) as img:
            frames.append(img.convert("RGBA"))

    distinct = len({id(f) for f in frames})
    logger.info("아이콘 로드: %s (%d프레임)", condition, distinct)
    return tuple(frames)
