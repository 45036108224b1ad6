"""Open-Meteo parsing, retries and location search."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from tools.weather_provider import (
    MockWeatherProvider,
    OpenMeteoProvider,
    WeatherProvider,
    WeatherProviderError,
    map_weather_code,
)
from models.weather import Location


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.reason = "OK" if status_code < 400 else "Error"

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return self._payload


class _FakeSession:
    def __init__(self, responses: List[Any]) -> None:
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _forecast_payload() -> Dict[str, Any]:
    hours = list(range(24))
    precip = [10, 20, 55, None, 0, 5] + [90] * 18
    return {
        "current": {
            "temperature_2m": 41.6,
            "apparent_temperature": 37.4,
            "relative_humidity_2m": 70,
            "weather_code": 61,
            "wind_speed_10m": 12.4,
        },
        "hourly": {
            "time": [f"2025-01-10T{hour:02d}:00" for hour in hours],
            "temperature_2m": [30.2 + hour for hour in hours],
            "precipitation_probability": precip,
        },
        "daily": {
            "time": ["2025-01-10", "2025-01-11"],
            "temperature_2m_max": [45.2, 50.0],
            "temperature_2m_min": [28.4, 30.1],
            "weather_code": [61, 0],
            "precipitation_probability_max": [80, None],
        },
    }


def _provider(session: _FakeSession, delays: List[float] | None = None) -> OpenMeteoProvider:
    recorded = delays if delays is not None else []
    return OpenMeteoProvider(session=session, sleep=recorded.append, initial_delay_seconds=0.5, max_retries=2)


@pytest.mark.parametrize(
    "code, label",
    [(0, "clear"), (2, "partly-cloudy"), (45, "cloudy"), (63, "rain"), (81, "rain"), (75, "snow"), (86, "snow"), (95, "cloudy")],
)
def test_weather_code_mapping(code: int, label: str) -> None:
    assert map_weather_code(code) == label


def test_get_conditions_parses_payload() -> None:
    session = _FakeSession([_FakeResponse(payload=_forecast_payload())])
    snapshot = _provider(session).get_conditions(43.07, -89.4)

    current = snapshot.current
    assert current.temp == 42
    assert current.feels_like == 37
    assert current.wind == 12
    assert current.humidity == 70
    assert current.precip_chance == 55
    assert current.tonight_low == 30
    assert current.condition == "rain"

    assert [day.day for day in snapshot.forecast] == ["Today", "Sat"]
    assert snapshot.forecast[0].high == 45
    assert snapshot.forecast[1].low == 30
    assert snapshot.forecast[1].precip_chance == 0
    assert snapshot.forecast[1].condition == "clear"

    params = session.calls[0]["params"]
    assert params["temperature_unit"] == "fahrenheit"
    assert params["wind_speed_unit"] == "mph"


def test_tonight_low_falls_back_to_daily_min() -> None:
    payload = _forecast_payload()
    payload["hourly"] = {"time": [], "temperature_2m": [], "precipitation_probability": []}
    snapshot = _provider(_FakeSession([_FakeResponse(payload=payload)])).get_conditions(0, 0)
    assert snapshot.current.tonight_low == 28
    assert snapshot.current.precip_chance == 0


def test_retries_server_errors_with_backoff() -> None:
    delays: List[float] = []
    session = _FakeSession([_FakeResponse(503), _FakeResponse(429), _FakeResponse(payload=_forecast_payload())])
    snapshot = _provider(session, delays).get_conditions(0, 0)
    assert snapshot.current.temp == 42
    assert delays == [0.5, 1.0]
    assert len(session.calls) == 3


def test_gives_up_after_max_retries() -> None:
    delays: List[float] = []
    session = _FakeSession([requests.Timeout("slow")] * 3)
    with pytest.raises(WeatherProviderError):
        _provider(session, delays).get_conditions(0, 0)
    assert delays == [0.5, 1.0]


def test_client_errors_are_not_retried() -> None:
    session = _FakeSession([_FakeResponse(400)])
    with pytest.raises(WeatherProviderError):
        _provider(session).get_conditions(0, 0)
    assert len(session.calls) == 1


def test_malformed_payload_raises() -> None:
    session = _FakeSession([_FakeResponse(payload={"current": {}})])
    with pytest.raises(WeatherProviderError):
        _provider(session).get_conditions(0, 0)


def test_search_location() -> None:
    payload = {
        "results": [
            {"id": 1, "name": "Madison", "latitude": 43.07, "longitude": -89.4, "admin1": "Wisconsin", "country": "United States"}
        ]
    }
    session = _FakeSession([_FakeResponse(payload=payload)])
    provider = _provider(session)
    assert provider.search_location("M") == []
    assert session.calls == []

    results = provider.search_location("Madison")
    assert results[0].display_name == "Madison, Wisconsin, United States"
    assert session.calls[0]["params"]["name"] == "Madison"


def test_search_location_without_results() -> None:
    session = _FakeSession([_FakeResponse(payload={})])
    assert _provider(session).search_location("Nowhere") == []


def test_mock_provider() -> None:
    provider = MockWeatherProvider(locations=[Location(id=1, name="Madison", latitude=43.07, longitude=-89.4)])
    assert isinstance(provider, WeatherProvider)
    assert provider.get_conditions(0, 0).current.temp == 42
    assert [location.name for location in provider.search_location("madi")] == ["Madison"]
    assert provider.search_location("m") == []
