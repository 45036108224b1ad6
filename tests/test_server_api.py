"""FastAPI endpoints."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from blanket_app.app import BlanketAdvisorApp
from blanket_app.config import AppConfig
from models.horse import HorseProfile
from models.inventory import Blanket
from server.api import app, get_advisor
from tools.notifications import PushNotificationClient
from tools.stable_store import SQLiteStableStore
from tools.weather_provider import MockWeatherProvider, WeatherProvider, WeatherProviderError


def _payload(**overrides):
    payload = {
        "weather": {"temp": 42, "feelsLike": 38, "wind": 12, "precipChance": 20, "tonightLow": 28},
        "horse": {"name": "Tucker"},
        "blankets": [
            {"name": "Rambo Medium", "grams": 200},
            {"name": "WeatherBeeta Lite", "grams": 100, "waterproof": False},
        ],
        "liners": [{"name": "Fleece", "pairedWithBlanketId": "blanket-0"}],
    }
    payload.update(overrides)
    return payload


class _FailingProvider(WeatherProvider):
    def get_conditions(self, latitude: float, longitude: float):
        raise WeatherProviderError("offline")


@pytest.fixture()
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _override(tmp_path: Path, provider: WeatherProvider) -> None:
    store = SQLiteStableStore(tmp_path / "stable.db")
    store.create_horse("owner", HorseProfile(id="h1", name="Tucker"))
    store.create_blanket("owner", Blanket(id="b1", name="Rambo Medium", grams=200))
    advisor = BlanketAdvisorApp(
        config=AppConfig(database_path=str(tmp_path / "stable.db")),
        store=store,
        weather_provider=provider,
        push_client=PushNotificationClient(app_id=None, api_key=None),
    )
    app.dependency_overrides[get_advisor] = lambda: advisor


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_recommendation_endpoint(client: TestClient) -> None:
    response = client.post("/recommendation", json=_payload())
    assert response.status_code == 200
    body = response.json()
    assert body["weight_needed"] == "light"
    assert body["grams_needed"] == 100
    # Blanket "blanket-0" plus its paired liner is 300g, further from 100g than the Lite.
    assert body["recommended_blanket"]["name"] == "WeatherBeeta Lite"
    assert body["confidence"] == 79


def test_confidence_hidden_when_disabled(client: TestClient) -> None:
    response = client.post("/recommendation", json=_payload(settings={"showConfidence": False}))
    assert response.status_code == 200
    assert response.json()["confidence"] is None


def test_schedule_endpoint(client: TestClient) -> None:
    response = client.post("/schedule", json={**_payload(), "hour": 14})
    assert response.status_code == 200
    blocks = response.json()["blocks"]
    assert [block["icon_type"] for block in blocks] == ["morning", "afternoon", "evening", "overnight"]
    assert [block["current"] for block in blocks] == [False, True, False, False]


def test_invalid_payload_returns_400(client: TestClient) -> None:
    bad = _payload(horse={"name": "Tucker", "shelterAccess": "barn"})
    response = client.post("/recommendation", json=bad)
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "needs_review"
    assert body["details"]


def test_stored_horse_recommendation(client: TestClient, tmp_path: Path) -> None:
    _override(tmp_path, MockWeatherProvider())
    response = client.get("/users/owner/horses/h1/recommendation")
    assert response.status_code == 200
    assert response.json()["weight_needed"] == "light"
    # Stored settings default to hiding confidence.
    assert response.json()["confidence"] is None

    schedule = client.get("/users/owner/horses/h1/schedule", params={"hour": 8})
    assert [block["current"] for block in schedule.json()["blocks"]] == [True, False, False, False]


def test_stored_horse_errors(client: TestClient, tmp_path: Path) -> None:
    _override(tmp_path, MockWeatherProvider())
    assert client.get("/users/owner/horses/missing/recommendation").status_code == 404

    _override(tmp_path / "failing", _FailingProvider())
    assert client.get("/users/owner/horses/h1/recommendation").status_code == 502
    assert client.get("/users/owner/horses/h1/schedule").status_code == 502


def test_generated_blanket_ids_do_not_collide_with_explicit_ids(client: TestClient) -> None:
    payload = _payload(
        weather={"temp": 10, "feelsLike": 5, "wind": 5, "precipChance": 0, "tonightLow": 0},
        blankets=[
            {"name": "Big", "grams": 300},
            {"id": "0", "name": "Rambo Medium", "grams": 200},
        ],
        liners=[{"name": "Fleece", "grams": 100, "pairedWithBlanketId": "0"}],
    )
    body = client.post("/recommendation", json=payload).json()
    assert body["weight_needed"] == "heavy"
    # Both options reach 300g; the unlabelled blanket keeps its own id and no liner.
    assert body["recommended_blanket"]["id"] == "blanket-0"
    assert body["recommended_liner"] is None
    assert body["combined_grams"] == 300
