"""날씨 콘텐츠 모듈 — Open-Meteo 지오코딩/예보 + 미국 기상청(NWS) 특보."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

import aiohttp

from content.weather_icons import DEFAULT_CONDITION

logger = logging.getLogger(__name__)

UNIT_F = "F"
UNIT_C = "C"

DEFAULT_USER_AGENT = "weatherboard/0.1"

# WMO 날씨 코드 → 아이콘 상태 키 매핑 (Open-Meteo용)
_WMO_ICON_MAP = {
    0: "clear-day",           # Clear sky
    1: "clear-day",           # Mainly clear
    2: "partly-cloudy-day",   # Partly cloudy
    3: "cloudy",              # Overcast
    45: "fog",                # Fog
    48: "fog",                # Depositing rime fog
    51: "rain",               # Drizzle light
    53: "rain",               # Drizzle moderate
    55: "rain",               # Drizzle dense
    56: "sleet",              # Freezing drizzle light
    57: "sleet",              # Freezing drizzle dense
    61: "rain",               # Rain slight
    63: "rain",               # Rain moderate
    65: "rain",               # Rain heavy
    66: "sleet",              # Freezing rain light
    67: "sleet",              # Freezing rain heavy
    71: "snow",               # Snow slight
    73: "snow",               # Snow moderate
    75: "snow",               # Snow heavy
    77: "snow",               # Snow grains
    80: "rain",               # Rain showers slight
    81: "rain",               # Rain showers moderate
    82: "rain",               # Rain showers violent
    85: "snow",               # Snow showers slight
    86: "snow",               # Snow showers heavy
    95: "rain",               # Thunderstorm
    96: "rain",               # Thunderstorm with slight hail
    99: "rain",               # Thunderstorm with heavy hail
}


class WeatherError(Exception):
    """날씨/위치 API 호출 또는 응답 해석 실패."""


@dataclass(frozen=True)
class DayForecast:
    """하루치 예보 카드 데이터."""
    date: date
    condition: str        # 아이콘 상태 키 (rain, cloudy, ...)
    lo_temp: float
    hi_temp: float
    summary: str | None = None   # 없으면 상태 키의 요약 문구 사용


@dataclass(frozen=True)
class WeatherReport:
    """보드 한 장을 그리는 데 필요한 날씨 데이터."""
    address: str
    unit: str             # "F" | "C"
    temperature: float
    feels_like: float
    captured_at: datetime
    forecast: list[DayForecast] = field(default_factory=list)
    alert: str | None = None
    humidity: float | None = None


def wmo_condition(code) -> str:
    """WMO 코드 → 아이콘 상태 키. 모르는 코드는 기본 상태."""
    return _WMO_ICON_MAP.get(int(code), DEFAULT_CONDITION)


def format_address(place: dict) -> str:
    """지오코딩 결과 → '이름 우편번호, 주, 국가'."""
    head = place["name"]
    postcodes = place.get("postcodes") or []
    if postcodes:
        head = f"{head} {postcodes[0]}"
    parts = [head, place.get("admin1"), place.get("country")]
    return ", ".join(p for p in parts if p)


def pick_place(result: dict) -> dict:
    """지오코딩 응답에서 첫 결과를 고른다."""
    results = result.get("results") or []
    if not results:
        raise WeatherError("위치를 찾을 수 없음")
    return results[0]


def alert_text(result: dict) -> str | None:
    """NWS 특보 응답 → 중복 없는 특보 이름을 ' / '로 이은 문자열."""
    events: list[str] = []
    for feature in result.get("features") or []:
        event = (feature.get("properties") or {}).get("event")
        if event and event not in events:
            events.append(event)
    return " / ".join(events) or None


def build_report(place: dict, result: dict, alert: str | None = None,
                 units: str = UNIT_F, days: int = 4) -> WeatherReport:
    """지오코딩 결과 + 예보 응답을 WeatherReport로 조합한다."""
    try:
        current = result["current"]
        daily = result["daily"]
        dates = daily["time"]
        if len(dates) < days:
            raise WeatherError(f"예보 일수 부족: {len(dates)} < {days}")

        forecast = [
            DayForecast(
                date=date.fromisoformat(dates[i]),
                condition=wmo_condition(daily["weather_code"][i]),
                lo_temp=float(daily["temperature_2m_min"][i]),
                hi_temp=float(daily["temperature_2m_max"][i]),
            )
            for i in range(days)
        ]

        humidity = current.get("relative_humidity_2m")
        offset = timedelta(seconds=result.get("utc_offset_seconds", 0))

        return WeatherReport(
            address=format_address(place),
            unit=units,
            temperature=float(current["temperature_2m"]),
            feels_like=float(current["apparent_temperature"]),
            humidity=float(humidity) if humidity is not None else None,
            alert=alert,
            captured_at=datetime.now(timezone(offset)),
            forecast=forecast,
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise WeatherError(f"예보 응답 형식 오류: {e!r}") from e


# ---------------------------------------------------------------------------
# Open-Meteo
# ---------------------------------------------------------------------------

class OpenMeteoWeatherProvider:
    """Open-Meteo에서 위치·예보를, 미국 위치는 NWS에서 특보를 가져온다.

    api_key가 있으면 상용(customer-) 엔드포인트를 사용한다.
    """

    GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
    API_URL = "https://api.open-meteo.com/v1/forecast"
    CUSTOMER_GEOCODING_URL = "https://customer-geocoding-api.open-meteo.com/v1/search"
    CUSTOMER_API_URL = "https://customer-api.open-meteo.com/v1/forecast"
    ALERTS_URL = "https://api.weather.gov/alerts/active"

    def __init__(self, api_key: str = "", units: str = UNIT_F, days: int = 4,
                 alerts: bool = True, timeout_sec: float = 10,
                 user_agent: str = DEFAULT_USER_AGENT, **_kwargs):
        if units not in (UNIT_F, UNIT_C):
            raise ValueError(f"지원하지 않는 단위: {units}")
        self._api_key = api_key
        self._units = units
        self._days = days
        self._alerts = alerts
        self._timeout = timeout_sec
        self._user_agent = user_agent

    async def get_report(self, location: str) -> WeatherReport:
        """위치 문자열로 WeatherReport를 만든다. 실패하면 WeatherError."""
        if not location or not location.strip():
            raise WeatherError("위치가 비어 있음")

        timeout = aiohttp.ClientTimeout(total=self._timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                place = pick_place(await self._get_json(
                    session, self._geocoding_url(), self._geocoding_params(location),
                ))
                result = await self._get_json(
                    session, self._api_url(), self._forecast_params(place),
                )
                alert = None
                if self._alerts and place.get("country_code") == "US":
                    alert = alert_text(await self._get_json(
                        session, self.ALERTS_URL,
                        {"point": f"{place['latitude']:.4f},{place['longitude']:.4f}"},
                        headers={"User-Agent": self._user_agent, "Accept": "application/geo+json"},
                    ))
        except (aiohttp.ClientError, asyncio.TimeoutError, KeyError, ValueError) as e:
            raise WeatherError(f"날씨 API 호출 실패: {e!r}") from e

        report = build_report(place, result, alert, self._units, self._days)
        logger.info("날씨 갱신(Open-Meteo): %s %.0f°%s 체감 %.0f°%s%s",
                    report.address, report.temperature, report.unit,
                    report.feels_like, report.unit,
                    f" 특보: {report.alert}" if report.alert else "")
        return report

    async def _get_json(self, session: aiohttp.ClientSession, url: str,
                        params: dict, headers: dict | None = None) -> dict:
        """GET 후 JSON 응답을 반환한다."""
        async with session.get(url, params=params, headers=headers) as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)

    def _geocoding_url(self) -> str:
        return self.CUSTOMER_GEOCODING_URL if self._api_key else self.GEOCODING_URL

    def _api_url(self) -> str:
        return self.CUSTOMER_API_URL if self._api_key else self.API_URL

    def _geocoding_params(self, location: str) -> dict:
        params = {"name": location.strip(), "count": 1, "language": "en", "format": "json"}
        if self._api_key:
            params["apikey"] = self._api_key
        return params

    def _forecast_params(self, place: dict) -> dict:
        params = {
            "latitude": place["latitude"],
            "longitude": place["longitude"],
            "current": "temperature_2m,apparent_temperature,relative_humidity_2m",
            "daily": "weather_code,temperature_2m_min,temperature_2m_max",
            "temperature_unit": "fahrenheit" if self._units == UNIT_F else "celsius",
            "timezone": "auto",
            "forecast_days": self._days,
        }
        if self._api_key:
            params["apikey"] = self._api_key
        return params


# ---------------------------------------------------------------------------
# 팩토리 함수
# ---------------------------------------------------------------------------

def create_weather_provider(config: dict, api_key: str | None = None) -> OpenMeteoWeatherProvider:
    """config에 따라 날씨 provider를 생성한다. api_key 인자가 config보다 우선한다."""
    provider = config.get("api_provider", "open-meteo")
    if provider != "open-meteo":
        logger.warning("알 수 없는 날씨 provider %r, Open-Meteo로 대체", provider)

    return OpenMeteoWeatherProvider(
        api_key=api_key if api_key is not None else config.get("api_key", ""),
        units=config.get("units", UNIT_F),
        days=config.get("days", 4),
        alerts=config.get("alerts", True),
        timeout_sec=config.get("timeout_sec", 10),
        user_agent=config.get("user_agent", DEFAULT_USER_AGENT),
    )
