"""드로잉 커맨드 인터프리터 — 커서 기반 레이아웃 DSL.

커맨드 리스트를 순서대로 실행한다. 각 커맨드는 먼저 커서를 옮기고(절대/상대),
그 위치에 텍스트·도형·이미지를 그린다. 커서는 인자로 주고받는 누산값이며
호출 사이에 남는 상태는 없다.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Protocol

from PIL import Image, ImageFont

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)
SHADOW_COLOR = (0, 0, 0, 255)
SHADOW_OFFSET = 2

HALIGN_LEFT = "left"
HALIGN_CENTER = "center"
HALIGN_RIGHT = "right"

SHAPE_RECTANGLE = "rectangle"


class RenderError(Exception):
    """이미지 핸들이 비었거나 깨진 경우."""


class Cursor(NamedTuple):
    x: float = 0
    y: float = 0


@dataclass(frozen=True)
class Text:
    """텍스트 페이로드. font가 None이면 그리지 않는다."""
    text: str
    font: ImageFont.FreeTypeFont | None
    color: tuple = WHITE
    halign: str = HALIGN_LEFT


@dataclass(frozen=True)
class Shape:
    """도형 페이로드 (rectangle만 지원)."""
    kind: str
    width: float
    height: float
    color: tuple = WHITE


@dataclass(frozen=True)
class Picture:
    """이미지 페이로드. 항상 y 기준 상단 정렬."""
    image: Image.Image | None
    halign: str = HALIGN_LEFT


@dataclass(frozen=True)
class DrawCommand:
    """커서 이동 + 선택적 페이로드. 페이로드는 모두 같은 커서 위치에 그려진다."""
    x: float = 0
    y: float = 0
    relative: bool = False
    text: Text | None = None
    shape: Shape | None = None
    image: Picture | None = None


class Surface(Protocol):
    """execute()가 그리는 대상. Canvas 또는 테스트용 기록 surface."""

    def text_width(self, text: str, font: ImageFont.FreeTypeFont) -> float: ...

    def draw_text(self, xy: tuple[float, float], text: str,
                  font: ImageFont.FreeTypeFont, color: tuple) -> None: ...

    def fill_rect(self, xy: tuple[float, float], size: tuple[float, float], color: tuple) -> None: ...

    def draw_image(self, image: Image.Image, xy: tuple[float, float]) -> None: ...


def step(cursor: Cursor, cmd: DrawCommand) -> Cursor:
    """커맨드 적용 후의 커서 위치."""
    if cmd.relative:
        return Cursor(cursor.x + cmd.x, cursor.y + cmd.y)
    return Cursor(cmd.x, cmd.y)


def align(x: float, width: float, halign: str) -> float:
    """가로 정렬에 따른 그리기 시작 x. 알 수 없는 값은 left로 취급."""
    if halign == HALIGN_CENTER:
        return x - width / 2
    if halign == HALIGN_RIGHT:
        return x - width
    return x


def execute(surface: Surface, commands: Iterable[DrawCommand], cursor: Cursor = Cursor()) -> Cursor:
    """커맨드를 순서대로 surface에 그리고 마지막 커서를 반환한다."""
    for cmd in commands:
        cursor = step(cursor, cmd)

        if cmd.text is not None and cmd.text.font is not None:
            _draw_text(surface, cursor, cmd.text)

        if cmd.shape is not None:
            _draw_shape(surface, cursor, cmd.shape)

        if cmd.image is not None:
            _draw_image(surface, cursor, cmd.image)

    return cursor


def _draw_text(surface: Surface, cursor: Cursor, text: Text) -> None:
    width = surface.text_width(text.text, text.font)
    x = align(cursor.x, width, text.halign)
    # 그림자 먼저, 본문은 그 위에
    surface.draw_text((x + SHADOW_OFFSET, cursor.y + SHADOW_OFFSET), text.text, text.font, SHADOW_COLOR)
    surface.draw_text((x, cursor.y), text.text, text.font, text.color)


def _draw_shape(surface: Surface, cursor: Cursor, shape: Shape) -> None:
    if shape.kind != SHAPE_RECTANGLE:
        logger.debug("지원하지 않는 도형 무시: %s", shape.kind)
        return
    surface.fill_rect((cursor.x, cursor.y), (shape.width, shape.height), shape.color)


def _draw_image(surface: Surface, cursor: Cursor, picture: Picture) -> None:
    image = picture.image
    if not isinstance(image, Image.Image):
        raise RenderError(f"이미지 핸들이 올바르지 않음: {image!r}")
    x = align(cursor.x, image.width, picture.halign)
    surface.draw_image(image, (x, cursor.y))
