"""날씨 보드 진입점 — 데이터 수집 → 레이아웃 → 프레임 합성 → GIF 인코딩."""

import asyncio
import logging
from pathlib import Path

from config import default_config, font_specs
from content.assets import AssetRegistry
from content.weather import WeatherReport, create_weather_provider
from output.gif import GifEncoder
from renderer.canvas import HEIGHT, WIDTH
from renderer.layers import FrameSequencer
from renderer.layout import Layout

logger = logging.getLogger(__name__)

_BASE_DIR = Path(__file__).parent

# (에셋 디렉토리, 배경, 폰트) → 로드된 레지스트리. 프로세스당 한 번만 읽는다.
_registries: dict[tuple, AssetRegistry] = {}


def _assets_dir(config: dict) -> Path:
    directory = Path(config["assets"]["directory"])
    if not directory.is_absolute():
        directory = _BASE_DIR / directory
    return directory


def load_assets(config: dict) -> AssetRegistry:
    """설정의 에셋 디렉토리에서 AssetRegistry를 로드한다 (상대 경로는 프로젝트 기준)."""
    return AssetRegistry.load(
        _assets_dir(config),
        fonts=font_specs(config),
        background=config["assets"]["background"],
    )


def shared_assets(config: dict) -> AssetRegistry:
    """같은 에셋 설정이면 처음 로드한 레지스트리를 재사용한다."""
    key = (
        _assets_dir(config),
        config["assets"]["background"],
        tuple(sorted(font_specs(config).items())),
    )
    registry = _registries.get(key)
    if registry is None:
        registry = load_assets(config)
        _registries[key] = registry
    return registry


class WeatherBoard:
    """로드된 에셋과 설정으로 날씨 보드 GIF를 만든다.

    에셋은 생성 시점에 이미 로드되어 있어야 한다. render()마다 새 캔버스를
    할당하므로 한 인스턴스를 여러 렌더에 재사용해도 된다.
    """

    def __init__(self, assets: AssetRegistry, config: dict | None = None):
        self._config = config or default_config()
        render_cfg = self._config["render"]
        self._layout = Layout(
            assets,
            header_width=render_cfg.get("header_width", 530),
            legacy_ticker=render_cfg.get("legacy_ticker", False),
        )
        self._sequencer = FrameSequencer(self._layout)

    @property
    def sequencer(self) -> FrameSequencer:
        return self._sequencer

    @classmethod
    def from_config(cls, config: dict | None = None) -> "WeatherBoard":
        config = config or default_config()
        return cls(shared_assets(config), config)

    def render(self, report: WeatherReport) -> bytes:
        """WeatherReport → 애니메이션 GIF 바이트."""
        render_cfg = self._config["render"]
        encoder = GifEncoder(
            WIDTH, HEIGHT,
            delay_ms=render_cfg.get("delay_ms", 100),
            loop=render_cfg.get("loop", 0),
        )
        for frame in self._sequencer.render_animation(report):
            encoder.add_frame(frame.to_rgb())
        return encoder.finish()

    async def get_weather(self, location: str, api_key: str | None = None) -> bytes:
        """위치 문자열로 날씨를 받아 GIF 바이트를 만든다. 실패는 그대로 올라간다."""
        provider = create_weather_provider(self._config["weather"], api_key=api_key)
        report = await provider.get_report(location)
        return self.render(report)


def render(report: WeatherReport, assets: AssetRegistry, config: dict | None = None) -> bytes:
    """수집 단계 없이 미리 만든 WeatherReport로 GIF를 만든다."""
    return WeatherBoard(assets, config).render(report)


async def get_weather(location: str, api_key: str | None = None,
                      config: dict | None = None, assets: AssetRegistry | None = None) -> bytes:
    """위치 → 날씨 수집 → 렌더 → GIF 바이트."""
    config = config or default_config()
    if assets is None:
        # 첫 호출에서만 디스크를 읽는다
        assets = await asyncio.to_thread(shared_assets, config)
    board = WeatherBoard(assets, config)
    return await board.get_weather(location, api_key=api_key)
