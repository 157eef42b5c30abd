import asyncio
from dataclasses import replace
from io import BytesIO

import pytest
from PIL import Image

import board
from board import WeatherBoard, get_weather, render
from config import default_config
from content.weather import OpenMeteoWeatherProvider, WeatherError, create_weather_provider


def test_render_returns_animated_gif(assets, report):
    data = render(report, assets)
    with Image.open(BytesIO(data)) as gif:
        assert gif.size == (975, 575)
        assert gif.n_frames == 6
        assert gif.info["loop"] == 0
        assert gif.info["duration"] == 100


def test_render_uses_configured_delay(assets, report):
    config = default_config()
    config["render"]["delay_ms"] = 150
    with Image.open(BytesIO(render(report, assets, config))) as gif:
        assert gif.info["duration"] == 150


def test_render_with_alert(assets, report):
    data = render(replace(report, alert="Severe Thunderstorm Watch"), assets)
    with Image.open(BytesIO(data)) as gif:
        # 티커 띠의 오른쪽 아래는 특보 색
        r, g, b = gif.convert("RGB").getpixel((970, 570))
        assert r > 150 and g < 60 and b < 60


class StubProvider:
    def __init__(self, report=None, error=None):
        self.report = report
        self.error = error
        self.locations = []

    async def get_report(self, location):
        self.locations.append(location)
        if self.error is not None:
            raise self.error
        return self.report


def test_get_weather_pipeline(monkeypatch, assets, report):
    stub = StubProvider(report)
    seen = {}

    def fake_factory(config, api_key=None):
        seen["api_key"] = api_key
        return stub

    monkeypatch.setattr(board, "create_weather_provider", fake_factory)
    data = asyncio.run(get_weather("07849", "key", assets=assets))
    assert data[:6] == b"GIF89a"
    assert stub.locations == ["07849"]
    assert seen["api_key"] == "key"


def test_get_weather_propagates_provider_failure(monkeypatch, assets):
    stub = StubProvider(error=WeatherError("no results"))
    monkeypatch.setattr(board, "create_weather_provider", lambda config, api_key=None: stub)
    with pytest.raises(WeatherError):
        asyncio.run(WeatherBoard(assets).get_weather("nowhere"))


def test_get_weather_loads_assets_once(monkeypatch, assets, report):
    loads = []

    def fake_load(directory, fonts=None, background="background.png"):
        loads.append(directory)
        return assets

    monkeypatch.setattr(board, "_registries", {})
    monkeypatch.setattr(board.AssetRegistry, "load", fake_load)
    monkeypatch.setattr(board, "create_weather_provider", lambda config, api_key=None: StubProvider(report))
    asyncio.run(get_weather("07849"))
    asyncio.run(get_weather("07849"))
    assert loads == [board._BASE_DIR / "res"]


def test_shared_assets_keyed_by_asset_config(monkeypatch, tmp_path):
    loads = []
    monkeypatch.setattr(board, "_registries", {})
    monkeypatch.setattr(board, "load_assets", lambda config: loads.append(config) or object())

    config = default_config()
    first = board.shared_assets(config)
    assert board.shared_assets(default_config()) is first

    config["assets"]["directory"] = str(tmp_path)
    assert board.shared_assets(config) is not first
    assert len(loads) == 2


def test_load_assets_resolves_relative_directory(monkeypatch, tmp_path):
    seen = {}

    def fake_load(directory, fonts=None, background="background.png"):
        seen.update(directory=directory, fonts=fonts, background=background)
        return "registry"

    monkeypatch.setattr(board.AssetRegistry, "load", fake_load)
    config = default_config()
    assert board.load_assets(config) == "registry"
    assert seen["directory"] == board._BASE_DIR / "res"
    assert seen["fonts"]["large"] == ("Star4000 Large.ttf", 32)

    config["assets"]["directory"] = str(tmp_path)
    board.load_assets(config)
    assert seen["directory"] == tmp_path


def test_default_provider_is_open_meteo():
    assert isinstance(create_weather_provider(default_config()["weather"]), OpenMeteoWeatherProvider)
