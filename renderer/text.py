"""텍스트 측정·폰트 로딩 모듈 — Star4000 픽셀 폰트.

레이아웃은 측정된 폭을 기준으로 정렬하므로, 같은 폰트 핸들로 측정하고 그려야 한다.
"""

import logging
from pathlib import Path
from PIL import ImageFont

logger = logging.getLogger(__name__)

# 폰트 캐시
_font_cache: dict[tuple[str, int], ImageFont.FreeTypeFont] = {}


def load_font(path: str | Path, size: int) -> ImageFont.FreeTypeFont:
    """TTF 폰트를 로드한다 (캐싱). 파일이 없으면 OSError를 그대로 올린다."""
    key = (str(path), size)
    if key not in _font_cache:
        _font_cache[key] = ImageFont.truetype(str(path), size)
        logger.debug("폰트 로드: %s (%dpx)", Path(path).name, size)
    return _font_cache[key]


def text_width(font: ImageFont.FreeTypeFont, text: str) -> float:
    """텍스트의 렌더링 폭을 반환한다.

    여러 줄이면 가장 넓은 줄의 advance 폭을 사용한다.
    """
    if not text:
        return 0.0
    return max(font.getlength(line) for line in text.split("\n"))
