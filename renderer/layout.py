"""화면 레이아웃 모듈 — 정적 보드와 예보 카드의 드로잉 커맨드를 만든다."""

import logging
from decimal import ROUND_HALF_UP, Decimal

from PIL import ImageFont

from content.assets import AssetRegistry
from content.clock import ClockContent
from content.weather import WeatherReport
from content.weather_icons import describe_condition
from renderer.canvas import WIDTH
from renderer.commands import (
    HALIGN_CENTER, SHAPE_RECTANGLE, DrawCommand, Picture, Shape, Text,
)
from renderer.text import text_width

logger = logging.getLogger(__name__)

# 상단 주소 (왼쪽)
HEADER_X = 150
HEADER_Y = 34
HEADER_WIDTH = 530
HEADER_LINE = 36

# 상단 시계 (오른쪽)
CLOCK_X = 695
CLOCK_Y = 45
CLOCK_LINE = 25

# 하단 티커
FOOTER_Y = 479
FOOTER_H = 96
TICKER_X = 5
TICKER_Y = 510

# 예보 카드
DAY_X = 15
DAY_PITCH = 244
DAY_Y = 90


def day_anchor(day_index: int) -> tuple[int, int]:
    """day_index번째 카드의 좌상단."""
    return DAY_X + DAY_PITCH * day_index, DAY_Y


def format_temp(value: float) -> str:
    """정수로 반올림한 표시 문자열 (.5는 0에서 먼 쪽으로)."""
    return str(int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP)))


def truncate_address(address: str, font: ImageFont.FreeTypeFont, max_width: float) -> str:
    """주소가 max_width 안에 들어올 때까지 마지막 쉼표 뒤를 잘라낸다.

    쉼표가 더 없으면 끝에서 한 글자씩 지운다. 빈 문자열이 되면 멈춘다.
    """
    while address and text_width(font, address) > max_width:
        cut = address.rfind(",")
        if cut >= 0:
            address = address[:cut].rstrip()
        else:
            address = address[:-1]
    return address


def ticker_text(report: WeatherReport, humidity: bool = True) -> str:
    """하단 티커 문구. 특보가 있으면 첫 줄에 둔다."""
    unit = report.unit
    line = (f"Temp: {format_temp(report.temperature)}°{unit}   "
            f"Feels Like: {format_temp(report.feels_like)}°{unit}")
    if humidity and report.humidity is not None:
        line += f"   Humidity: {format_temp(report.humidity)}%"
    if report.alert:
        return f"{report.alert}\n{line}"
    return line


class Layout:
    """WeatherReport를 드로잉 커맨드 리스트로 바꾼다."""

    def __init__(self, assets: AssetRegistry, header_width: float = HEADER_WIDTH,
                 legacy_ticker: bool = False):
        self._assets = assets
        self._header_width = header_width
        # 초기 버전 호환: 주소 자르기·습도 표시 없음
        self._legacy = legacy_ticker
        self._clock = ClockContent()

    def header_address(self, address: str) -> str:
        """헤더 폭에 맞게 자른 주소."""
        font = self._assets.font("regular")
        if self._legacy or font is None:
            return address
        fitted = truncate_address(address, font, self._header_width)
        if fitted != address:
            logger.info("주소 축약: %r → %r", address, fitted)
        return fitted

    def build_static_commands(self, report: WeatherReport) -> list[DrawCommand]:
        """배경·주소·시계·티커 (모든 프레임에 공통)."""
        regular = self._assets.font("regular")
        small = self._assets.font("small")
        white = self._assets.color("white")
        now = report.captured_at
        footer_color = self._assets.color("red" if report.alert else "teal")

        return [
            DrawCommand(0, 0, image=Picture(self._assets.background)),

            # 왼쪽 위 주소
            DrawCommand(HEADER_X, HEADER_Y, text=Text(self.header_address(report.address), regular, white)),
            DrawCommand(0, HEADER_LINE, relative=True,
                        text=Text("Extended Forecast", regular, self._assets.color("yellow"))),

            # 오른쪽 위 시계
            DrawCommand(CLOCK_X, CLOCK_Y, text=Text(self._clock.time_line(now), small, white)),
            DrawCommand(0, CLOCK_LINE, relative=True, text=Text(self._clock.date_line(now), small, white)),

            # 하단 티커
            DrawCommand(0, FOOTER_Y, shape=Shape(SHAPE_RECTANGLE, WIDTH, FOOTER_H, footer_color)),
            DrawCommand(TICKER_X, TICKER_Y,
                        text=Text(ticker_text(report, humidity=not self._legacy), regular, white)),
        ]

    def build_day_commands(self, report: WeatherReport, day_index: int, frame_index: int) -> list[DrawCommand]:
        """day_index번째 카드의 frame_index 프레임. 앵커 이후는 모두 상대 이동."""
        day = report.forecast[day_index]
        regular = self._assets.font("regular")
        large = self._assets.font("large")
        white = self._assets.color("white")
        yellow = self._assets.color("yellow")
        icon = self._assets.icon_frame(day.condition, frame_index)
        summary = day.summary if day.summary is not None else describe_condition(day.condition)
        x, y = day_anchor(day_index)

        return [
            # 카드 좌상단으로 이동
            DrawCommand(x, y),
            # 요일, 아이콘, 요약
            DrawCommand(100, 40, relative=True,
                        text=Text(self._clock.day_label(day.date), regular, yellow, HALIGN_CENTER)),
            DrawCommand(0, 15, relative=True, image=Picture(icon, HALIGN_CENTER)),
            DrawCommand(0, 165, relative=True, text=Text(summary, regular, white, HALIGN_CENTER)),
            # Lo
            DrawCommand(-50, 90, relative=True,
                        text=Text("Lo", regular, self._assets.color("teal_also"), HALIGN_CENTER)),
            DrawCommand(0, 45, relative=True, text=Text(format_temp(day.lo_temp), large, white, HALIGN_CENTER)),
            # Hi: x는 Lo 기준 +100, y는 Lo 라벨 줄로 복귀
            DrawCommand(100, -45, relative=True, text=Text("Hi", regular, yellow, HALIGN_CENTER)),
            DrawCommand(0, 45, relative=True, text=Text(format_temp(day.hi_temp), large, white, HALIGN_CENTER)),
        ]
