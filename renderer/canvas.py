"""975x575 Pillow 캔버스 관리 모듈."""

from PIL import Image, ImageDraw, ImageFont

from renderer.text import text_width

# 보드 크기
WIDTH = 975
HEIGHT = 575


class Canvas:
    """975x575 RGBA 캔버스 (드로잉 커맨드의 대상 surface)."""

    def __init__(self, base: Image.Image | None = None):
        if base is None:
            self._image = Image.new("RGBA", (WIDTH, HEIGHT), (0, 0, 0, 255))
        else:
            # 원본과 픽셀을 공유하지 않도록 복사
            self._image = base.convert("RGBA") if base.mode != "RGBA" else base.copy()
        self._draw = ImageDraw.Draw(self._image)
        # 안티앨리어싱 없이 픽셀 폰트 그대로
        self._draw.fontmode = "1"

    @property
    def image(self) -> Image.Image:
        return self._image

    def copy(self) -> "Canvas":
        """픽셀 내용을 복사한 새 캔버스를 반환한다."""
        return Canvas(self._image)

    def text_width(self, text: str, font: ImageFont.FreeTypeFont) -> float:
        return text_width(font, text)

    def draw_text(self, xy: tuple[float, float], text: str,
                  font: ImageFont.FreeTypeFont, color: tuple) -> None:
        """y를 기준선(baseline)으로 텍스트를 그린다. 줄바꿈은 Pillow가 처리한다."""
        self._draw.text(xy, text, font=font, fill=color, anchor="ls")

    def fill_rect(self, xy: tuple[float, float], size: tuple[float, float], color: tuple) -> None:
        """(x, y)를 좌상단으로 w x h 사각형을 채운다."""
        x, y = xy
        w, h = size
        if w <= 0 or h <= 0:
            return
        self._draw.rectangle([x, y, x + w - 1, y + h - 1], fill=color)

    def draw_image(self, image: Image.Image, xy: tuple[float, float]) -> None:
        """이미지를 (x, y) 좌상단에 알파 합성한다. 캔버스 밖 영역은 잘린다."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        x, y = round(xy[0]), round(xy[1])
        left, top = max(0, -x), max(0, -y)
        if left >= image.width or top >= image.height:
            return
        if left or top:
            image = image.crop((left, top, image.width, image.height))
            x += left
            y += top
        if x >= self._image.width or y >= self._image.height:
            return
        self._image.alpha_composite(image, dest=(x, y))

    def to_rgb(self) -> Image.Image:
        """RGB 모드로 변환하여 반환한다 (GIF 인코딩용)."""
        return self._image.convert("RGB")
