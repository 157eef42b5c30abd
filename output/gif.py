"""애니메이션 GIF 인코딩 모듈 — 합성된 프레임을 GIF 바이트로 만든다."""

import logging
from io import BytesIO

from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 100


class GifEncoder:
    """프레임을 하나씩 받아 마지막에 GIF 바이트를 돌려준다.

    loop=0이면 무한 반복. 내용이 같은 연속 프레임은 Pillow가 하나로 합치고
    지연 시간을 더한다.
    """

    def __init__(self, width: int, height: int, delay_ms: int = DEFAULT_DELAY_MS, loop: int = 0):
        if delay_ms <= 0:
            raise ValueError(f"프레임 지연은 양수여야 함: {delay_ms}")
        self._size = (width, height)
        self._delay = delay_ms
        self._loop = loop
        self._frames: list[Image.Image] = []

    def add_frame(self, image: Image.Image) -> None:
        """프레임 한 장을 추가한다 (RGB로 변환해 보관)."""
        if image.size != self._size:
            raise ValueError(f"프레임 크기 불일치: {image.size} != {self._size}")
        self._frames.append(image.convert("RGB"))

    def finish(self) -> bytes:
        """GIF 바이트를 반환한다."""
        if not self._frames:
            raise ValueError("인코딩할 프레임이 없음")

        buf = BytesIO()
        self._frames[0].save(buf, format="GIF", save_all=True,
                             append_images=self._frames[1:],
                             duration=self._delay,
                             loop=self._loop)
        data = buf.getvalue()
        logger.info("GIF 인코딩: %d프레임, %d 바이트", len(self._frames), len(data))
        return data

