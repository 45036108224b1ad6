"""Weather provider abstractions and the Open-Meteo implementation.

Docs: https://open-meteo.com/en/docs
"""

from __future__ import annotations

import logging
import math
import time
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable, Dict, List, Optional

import requests
from pydantic import BaseModel, ValidationError

from blanket_app.logging_config import get_logger, log_event
from models.weather import ForecastDay, Location, WeatherReading, WeatherSnapshot

LOGGER = get_logger(__name__)

WEATHER_API_BASE = "https://api.open-meteo.com/v1/forecast"
GEOCODING_API_BASE = "https://geocoding-api.open-meteo.com/v1/search"


class WeatherProviderError(RuntimeError):
    """Raised when conditions cannot be fetched or parsed."""


class _Current(BaseModel):
    temperature_2m: float
    apparent_temperature: float
    relative_humidity_2m: Optional[float] = None
    weather_code: int = 3
    wind_speed_10m: float = 0.0


class _Hourly(BaseModel):
    time: List[str] = []
    temperature_2m: List[Optional[float]] = []
    precipitation_probability: List[Optional[float]] = []


class _Daily(BaseModel):
    time: List[str] = []
    temperature_2m_max: List[float] = []
    temperature_2m_min: List[float] = []
    weather_code: List[int] = []
    precipitation_probability_max: List[Optional[float]] = []


class _ForecastResponse(BaseModel):
    current: _Current
    hourly: _Hourly
    daily: _Daily


class _GeocodingResult(BaseModel):
    id: Optional[int] = None
    name: str
    latitude: float
    longitude: float
    admin1: Optional[str] = None
    country: Optional[str] = None


class _GeocodingResponse(BaseModel):
    results: Optional[List[_GeocodingResult]] = None


def _js_round(value: float) -> int:
    """Round half up, as the app displays temperatures."""

    return int(math.floor(value + 0.5))


def map_weather_code(code: int) -> str:
    """Map WMO weather codes onto our condition labels."""

    if code == 0:
        return "clear"
    if 1 <= code <= 3:
        return "partly-cloudy"
    if 45 <= code <= 48:
        return "cloudy"
    if 51 <= code <= 67 or 80 <= code <= 82:
        return "rain"
    if 71 <= code <= 77 or 85 <= code <= 86:
        return "snow"
    return "cloudy"


def day_name(date_string: str, index: int) -> str:
    if index == 0:
        return "Today"
    return date.fromisoformat(date_string).strftime("%a")


def tonight_low(hourly: _Hourly, daily_min: float) -> int:
    """Lowest temperature between 6 PM and 6 AM within the next 24 hours."""

    overnight = []
    for stamp, temp in list(zip(hourly.time, hourly.temperature_2m))[:24]:
        if temp is None:
            continue
        hour = datetime.fromisoformat(stamp).hour
        if hour >= 18 or hour <= 6:
            overnight.append(temp)
    return _js_round(min(overnight) if overnight else daily_min)


def near_term_precip_chance(hourly: _Hourly, hours: int = 6) -> int:
    values = [p for p in hourly.precipitation_probability[:hours] if p is not None]
    return int(max([*values, 0]))


class WeatherProvider(ABC):
    """Abstract weather provider interface."""

    @abstractmethod
    def get_conditions(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """Return current conditions and the daily forecast."""

    def search_location(self, query: str) -> List[Location]:
        return []


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo provider with schema validation and retry with backoff."""

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
        initial_delay_seconds: float = 1.0,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.initial_delay_seconds = initial_delay_seconds
        self.session = session or requests.Session()
        self._sleep = sleep

    def _backoff(self, attempt: int) -> None:
        delay = self.initial_delay_seconds * (2 ** attempt)
        LOGGER.warning("Retrying weather request", extra={"attempt": attempt + 1, "delay_seconds": delay})
        self._sleep(delay)

    def _get(self, url: str, params: Dict[str, str]) -> requests.Response:
        """GET with retries on 5xx, 429, timeouts and connection failures."""

        attempt = 0
        while True:
            try:
                response = self.session.get(url, params=params, timeout=self.timeout_seconds)
            except (requests.Timeout, requests.ConnectionError) as exc:
                if attempt < self.max_retries:
                    self._backoff(attempt)
                    attempt += 1
                    continue
                LOGGER.error("Weather API unreachable", exc_info=exc)
                raise WeatherProviderError(f"Weather API unreachable: {exc}") from exc

            if (response.status_code >= 500 or response.status_code == 429) and attempt < self.max_retries:
                self._backoff(attempt)
                attempt += 1
                continue
            return response

    def get_conditions(self, latitude: float, longitude: float) -> WeatherSnapshot:
        params = {
            "latitude": str(latitude),
            "longitude": str(longitude),
            "current": "temperature_2m,apparent_temperature,relative_humidity_2m,weather_code,wind_speed_10m",
            "hourly": "temperature_2m,precipitation_probability",
            "daily": "temperature_2m_max,temperature_2m_min,weather_code,precipitation_probability_max",
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
            "timezone": "auto",
            "forecast_days": "7",
        }
        response = self._get(WEATHER_API_BASE, params)
        if not response.ok:
            raise WeatherProviderError(f"Weather API error: {response.status_code} {response.reason}")

        try:
            parsed = _ForecastResponse.model_validate(response.json())
        except (ValidationError, ValueError) as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            raise WeatherProviderError("Weather payload did not match the expected schema") from exc

        snapshot = self.parse_forecast(parsed)
        log_event(
            LOGGER,
            logging.INFO,
            "weather_fetched",
            latitude=latitude,
            longitude=longitude,
            temp=snapshot.current.temp,
            precip_chance=snapshot.current.precip_chance,
        )
        return snapshot

    @staticmethod
    def parse_forecast(parsed: _ForecastResponse) -> WeatherSnapshot:
        daily_min = parsed.daily.temperature_2m_min[0] if parsed.daily.temperature_2m_min else parsed.current.temperature_2m
        humidity = parsed.current.relative_humidity_2m
        current = WeatherReading(
            temp=_js_round(parsed.current.temperature_2m),
            feels_like=_js_round(parsed.current.apparent_temperature),
            wind=_js_round(parsed.current.wind_speed_10m),
            humidity=_js_round(humidity) if humidity is not None else None,
            precip_chance=near_term_precip_chance(parsed.hourly),
            tonight_low=tonight_low(parsed.hourly, daily_min),
            condition=map_weather_code(parsed.current.weather_code),
        )
        daily = parsed.daily
        forecast = [
            ForecastDay(
                day=day_name(stamp, index),
                condition=map_weather_code(daily.weather_code[index]),
                high=_js_round(daily.temperature_2m_max[index]),
                low=_js_round(daily.temperature_2m_min[index]),
                precip_chance=int(daily.precipitation_probability_max[index] or 0)
                if index < len(daily.precipitation_probability_max)
                else 0,
            )
            for index, stamp in enumerate(daily.time)
        ]
        return WeatherSnapshot(current=current, forecast=forecast)

    def search_location(self, query: str) -> List[Location]:
        """Look up places by name; queries under two characters return nothing."""

        if not query or len(query.strip()) < 2:
            return []
        params = {"name": query.strip(), "count": "5", "language": "en", "format": "json"}
        response = self._get(GEOCODING_API_BASE, params)
        if not response.ok:
            raise WeatherProviderError(f"Geocoding API error: {response.status_code}")
        try:
            parsed = _GeocodingResponse.model_validate(response.json())
        except (ValidationError, ValueError) as exc:
            LOGGER.error("Geocoding payload schema validation failed", exc_info=exc)
            raise WeatherProviderError("Geocoding payload did not match the expected schema") from exc
        return [
            Location(
                id=result.id,
                name=result.name,
                latitude=result.latitude,
                longitude=result.longitude,
                region=result.admin1 or "",
                country=result.country or "",
            )
            for result in parsed.results or []
        ]


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests and demos."""

    def __init__(self, snapshot: WeatherSnapshot | None = None, locations: List[Location] | None = None) -> None:
        self.snapshot = snapshot or WeatherSnapshot(
            current=WeatherReading(
                temp=42,
                feels_like=38,
                wind=12,
                humidity=65,
                precip_chance=20,
                tonight_low=28,
                condition="partly-cloudy",
            )
        )
        self.locations = locations or []

    def get_conditions(self, latitude: float, longitude: float) -> WeatherSnapshot:
        LOGGER.info("Returning mock conditions")
        return self.snapshot

    def search_location(self, query: str) -> List[Location]:
        needle = query.strip().lower()
        if len(needle) < 2:
            return []
        return [location for location in self.locations if needle in location.name.lower()]


__all__ = [
    "WeatherProvider",
    "WeatherProviderError",
    "OpenMeteoProvider",
    "MockWeatherProvider",
    "map_weather_code",
    "day_name",
    "tonight_low",
    "near_term_precip_chance",
]
