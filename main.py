"""메인 — 위치의 날씨 보드 GIF를 만들어 파일로 저장한다."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from board import get_weather, load_assets
from config import load_config
from content.assets import AssetError
from content.weather import WeatherError

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s")
logging.getLogger("aiohttp").setLevel(logging.WARNING)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="레트로 날씨 채널 스타일 GIF 생성")
    parser.add_argument("location", nargs="?", help="위치 (도시명/우편번호). 없으면 config 값")
    parser.add_argument("-c", "--config", type=Path, help="config.json 경로")
    parser.add_argument("-o", "--output", type=Path, help="출력 GIF 경로")
    parser.add_argument("--api-key", help="Open-Meteo 상용 API 키")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)

    location = args.location or config["weather"].get("location", "")
    output = args.output or Path(config["output"]["path"])

    try:
        # 에셋은 시작 시 한 번 로드
        assets = load_assets(config)
        gif = await get_weather(location, api_key=args.api_key, config=config, assets=assets)
    except (AssetError, WeatherError) as e:
        logging.error("날씨 보드 생성 실패: %s", e)
        return 1

    output.write_bytes(gif)
    logging.info("저장됨: %s (%d 바이트)", output, len(gif))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logging.info("종료")
