from datetime import date, datetime

import pytest
from PIL import Image, ImageFont

from content.assets import AssetRegistry
from content.weather import DayForecast, WeatherReport
from renderer.canvas import HEIGHT, WIDTH

BACKGROUND_COLOR = (10, 20, 60, 255)
ICON_SIZE = 120


def icon_frames(red: int, animated: bool = True) -> tuple:
    """프레임마다 파란 채널이 다른 단색 아이콘."""
    if not animated:
        frame = Image.new("RGBA", (ICON_SIZE, ICON_SIZE), (red, 100, 0, 255))
        return (frame,) * 6
    return tuple(Image.new("RGBA", (ICON_SIZE, ICON_SIZE), (red, 100, i * 40, 255)) for i in range(6))


class RecordingSurface:
    """픽셀 없이 그리기 호출만 기록한다. 글자 폭은 char_width 고정."""

    def __init__(self, char_width: int = 10):
        self.char_width = char_width
        self.calls = []

    def text_width(self, text, font):
        return max(len(line) for line in text.split("\n")) * self.char_width

    def draw_text(self, xy, text, font, color):
        self.calls.append(("text", xy, text, color))

    def fill_rect(self, xy, size, color):
        self.calls.append(("rect", xy, size, color))

    def draw_image(self, image, xy):
        self.calls.append(("image", xy, image))

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def recorder():
    return RecordingSurface()


@pytest.fixture
def fonts():
    return {
        "small": ImageFont.load_default(size=36),
        "regular": ImageFont.load_default(size=36),
        "large": ImageFont.load_default(size=32),
    }


@pytest.fixture
def assets(fonts):
    return AssetRegistry(
        fonts=fonts,
        icons={
            "clear-day": icon_frames(200),
            "rain": icon_frames(50),
            "partly-cloudy-day": icon_frames(120),
            "cloudy": icon_frames(160, animated=False),
        },
        background=Image.new("RGBA", (WIDTH, HEIGHT), BACKGROUND_COLOR),
    )


@pytest.fixture
def report():
    return WeatherReport(
        address="Lake Hopatcong 07849, NJ",
        unit="F",
        temperature=75,
        feels_like=76,
        captured_at=datetime(2019, 7, 30, 15, 4, 5),
        forecast=[
            DayForecast(date(2019, 7, 31), "rain", 65, 80, "Rain"),
            DayForecast(date(2019, 8, 1), "partly-cloudy-day", 64, 83, "Partly\nCloudy"),
            DayForecast(date(2019, 8, 2), "cloudy", 65, 79, "Cloudy"),
            DayForecast(date(2019, 8, 3), "rain", 64, 81, "Rain"),
        ],
    )
