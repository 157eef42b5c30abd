"""에셋 레지스트리 — 폰트·색상·아이콘·배경을 시작 시 한 번 로드한다.

load()가 끝나면 모든 이미지는 디코딩이 끝난 상태이며 이후 읽기 전용이다.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from PIL import Image, ImageFont

from content.weather_icons import CONDITIONS, DEFAULT_CONDITION, load_icon_sequence
from renderer.canvas import HEIGHT, WIDTH
from renderer.text import load_font

logger = logging.getLogger(__name__)

# 보드 색상 (RGBA)
WHITE = (255, 255, 255, 255)
RED = (198, 19, 2, 255)
TEAL = (47, 65, 120, 255)
TEAL_ALSO = (172, 177, 237, 255)
YELLOW = (205, 185, 0, 255)

COLORS = {
    "white": WHITE,
    "red": RED,
    "teal": TEAL,
    "teal_also": TEAL_ALSO,
    "yellow": YELLOW,
}

# 폰트 id → (파일명, 크기)
DEFAULT_FONTS = {
    "small": ("Star4000 Small.ttf", 36),
    "regular": ("Star4000.ttf", 36),
    "large": ("Star4000 Large.ttf", 32),
}


class AssetError(Exception):
    """폰트/이미지 에셋을 찾거나 읽을 수 없는 경우."""


@dataclass(frozen=True)
class AssetRegistry:
    """로드가 끝난 에셋 묶음 (프로세스 전역, 읽기 전용)."""
    fonts: dict[str, ImageFont.FreeTypeFont]
    icons: dict[str, tuple[Image.Image, ...]]
    background: Image.Image
    colors: dict[str, tuple] = field(default_factory=lambda: dict(COLORS))
    default_condition: str = DEFAULT_CONDITION

    def __post_init__(self):
        if self.default_condition not in self.icons:
            raise AssetError(f"기본 아이콘 없음: {self.default_condition}")

    @classmethod
    def load(cls, directory: str | Path,
             fonts: dict[str, tuple[str, int]] | None = None,
             background: str = "background.png",
             conditions: tuple[str, ...] = CONDITIONS) -> "AssetRegistry":
        """에셋 디렉토리에서 모든 에셋을 읽는다. 하나라도 실패하면 AssetError."""
        res_dir = Path(directory)
        font_specs = fonts or DEFAULT_FONTS

        loaded_fonts = {}
        for font_id, (filename, size) in font_specs.items():
            try:
                loaded_fonts[font_id] = load_font(res_dir / filename, size)
            except OSError as e:
                raise AssetError(f"폰트 로드 실패: {filename} ({e})") from e

        icons = {}
        for condition in conditions:
            try:
                icons[condition] = load_icon_sequence(res_dir, condition)
            except OSError as e:
                raise AssetError(f"아이콘 로드 실패: {condition} ({e})") from e

        bg = load_background(res_dir / background)

        logger.info("에셋 로드 완료: 폰트 %d개, 아이콘 %d종", len(loaded_fonts), len(icons))
        return cls(fonts=loaded_fonts, icons=icons, background=bg)

    def font(self, font_id: str) -> ImageFont.FreeTypeFont | None:
        """폰트 핸들. 없으면 None (해당 텍스트는 그려지지 않는다)."""
        return self.fonts.get(font_id)

    def color(self, name: str) -> tuple:
        """이름으로 찾은 RGBA 색상. 레지스트리에 없으면 기본 팔레트 값."""
        return self.colors.get(name, COLORS[name])

    def resolve_icon(self, condition: str) -> tuple[Image.Image, ...]:
        """상태 키의 아이콘 프레임 시퀀스. 모르는 키는 기본 상태로 대체한다."""
        icons = self.icons.get(condition)
        if icons is None:
            logger.debug("알 수 없는 상태 %r → %s", condition, self.default_condition)
            icons = self.icons[self.default_condition]
        return icons

    def icon_frame(self, condition: str, frame: int) -> Image.Image:
        """상태 키의 frame번째 아이콘. 프레임이 적은 시퀀스는 순환한다."""
        icons = self.resolve_icon(condition)
        return icons[frame % len(icons)]


def load_background(path: Path) -> Image.Image:
    """배경 이미지를 975x575 RGBA로 준비한다."""
    try:
        with Image.open(path) as img:
            bg = img.convert("RGBA")
    except OSError as e:
        raise AssetError(f"배경 로드 실패: {path} ({e})") from e
    if bg.size != (WIDTH, HEIGHT):
        logger.warning("배경 크기 %dx%d → %dx%d로 조정", bg.width, bg.height, WIDTH, HEIGHT)
        bg = bg.resize((WIDTH, HEIGHT), Image.Resampling.NEAREST)
    return bg

