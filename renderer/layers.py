"""레이어 합성 모듈 — 정적 보드 + 프레임별 예보 카드 오버레이."""

import logging

from content.weather import WeatherReport
from content.weather_icons import ICON_FRAME_COUNT
from renderer.canvas import Canvas
from renderer.commands import execute
from renderer.layout import Layout

logger = logging.getLogger(__name__)


class FrameSequencer:
    """정적 레이어를 한 번만 그리고, 그 복사본 위에 프레임마다 카드를 합성한다."""

    def __init__(self, layout: Layout, frame_count: int = ICON_FRAME_COUNT):
        self._layout = layout
        self._frame_count = frame_count

    def render_static(self, report: WeatherReport) -> Canvas:
        """배경·헤더·시계·티커 레이어."""
        canvas = Canvas()
        execute(canvas, self._layout.build_static_commands(report))
        return canvas

    def render_animation(self, report: WeatherReport) -> list[Canvas]:
        """애니메이션 프레임 리스트를 반환한다 (항상 frame_count장).

        Returns:
            프레임 순서대로의 Canvas. 각 프레임은 정적 레이어의 독립 복사본이다.
        """
        static = self.render_static(report)

        frames = []
        for f in range(self._frame_count):
            frame = static.copy()
            for d in range(len(report.forecast)):
                execute(frame, self._layout.build_day_commands(report, d, f))
            frames.append(frame)
            logger.debug("프레임 %d/%d 합성", f + 1, self._frame_count)

        return frames
