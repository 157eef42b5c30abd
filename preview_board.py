"""날씨 보드 PC 미리보기 — 예제 데이터로 GIF와 첫 프레임 PNG를 저장한다."""

import argparse
import logging
from datetime import date, datetime
from pathlib import Path

from board import WeatherBoard
from config import load_config
from content.weather import DayForecast, WeatherReport

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s")


def example_report(alert: str | None = None) -> WeatherReport:
    """네트워크 없이 쓰는 예제 데이터."""
    return WeatherReport(
        address="Lake Hopatcong 07849, NJ",
        unit="F",
        temperature=75,
        feels_like=76,
        alert=alert,
        captured_at=datetime.now(),
        forecast=[
            DayForecast(date(2019, 7, 31), "rain", 65, 80, "Rain"),
            DayForecast(date(2019, 8, 1), "partly-cloudy-day", 64, 83, "Partly\nCloudy"),
            DayForecast(date(2019, 8, 2), "cloudy", 65, 79, "Cloudy"),
            DayForecast(date(2019, 8, 3), "rain", 64, 81, "Rain"),
        ],
    )


def preview(alert: str | None = None):
    board = WeatherBoard.from_config(load_config())
    report = example_report(alert)

    out = Path("preview_board.gif")
    out.write_bytes(board.render(report))
    print(f"저장됨: {out}")

    # 정적 레이어만 따로
    static = board.sequencer.render_static(report)
    static.to_rgb().save("preview_static.png")
    print("정적 레이어 저장됨: preview_static.png")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--alert", help="예: 'Severe Thunderstorm Watch'")
    preview(parser.parse_args().alert)
