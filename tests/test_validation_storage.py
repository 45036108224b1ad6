"""Validation schemas, storage mappers and the SQLite stable store."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.validation import (
    BlanketInput,
    BlanketUpdate,
    Coordinates,
    HorseInput,
    HorseUpdate,
    LinerInput,
    SettingsUpdate,
    validate,
    validate_or_raise,
    validation_failure,
)
from models.horse import HorseProfile
from models.inventory import Blanket, Liner
from models.settings import NotificationSettings, Settings
from tools.case_conversion import (
    blanket_from_db,
    blanket_to_db,
    blanket_updates_to_db,
    horse_from_db,
    horse_to_db,
    settings_from_db,
    settings_to_db,
)
from tools.stable_store import SQLiteStableStore


@pytest.fixture()
def store(tmp_path: Path) -> SQLiteStableStore:
    return SQLiteStableStore(tmp_path / "stable.db")


def test_horse_input_accepts_camel_case_and_trims_name() -> None:
    horse = HorseInput.model_validate(
        {"name": "  Tucker  ", "coatGrowth": 20, "isClipped": True, "shelterAccess": "trees"}
    )
    profile = horse.to_profile()
    assert profile.name == "Tucker"
    assert profile.coat_growth == 20
    assert profile.is_clipped
    assert profile.shelter_access == "trees"
    assert profile.cold_tolerance == 50


@pytest.mark.parametrize(
    "payload",
    [
        {"name": ""},
        {"name": "   "},
        {"name": "x" * 101},
        {"name": "Old", "age": 51},
        {"name": "Scale", "coatGrowth": 101},
        {"name": "Barn", "shelterAccess": "barn"},
    ],
)
def test_horse_input_rejects_out_of_bounds(payload) -> None:
    with pytest.raises(ValidationError):
        HorseInput.model_validate(payload)


def test_blanket_input_bounds_and_defaults() -> None:
    blanket = BlanketInput.model_validate({"name": "Rambo", "grams": 200}).to_blanket(blanket_id="7")
    assert blanket.id == "7"
    assert blanket.waterproof is True
    assert blanket.color == "#9CAF88"
    assert not validate(BlanketInput, {"name": "Too heavy", "grams": 501}).success
    assert not validate(BlanketInput, {"name": "Bad color", "grams": 100, "color": "blue"}).success


def test_liner_input_defaults() -> None:
    liner = LinerInput.model_validate({"name": "Fleece", "pairedWithBlanketId": "1"}).to_liner()
    assert liner.grams == 100
    assert liner.color == "#E8D4C4"
    assert liner.paired_with_blanket_id == "1"


def test_coordinates_bounds() -> None:
    assert validate(Coordinates, {"latitude": 43.07, "longitude": -89.4}).success
    outcome = validate(Coordinates, {"latitude": 91, "longitude": 0})
    assert not outcome.success
    assert outcome.error.startswith("latitude")


def test_validate_or_raise_and_failure_payload() -> None:
    with pytest.raises(ValueError):
        validate_or_raise(SettingsUpdate, {"tempBuffer": 16})
    assert validate_or_raise(SettingsUpdate, {"tempBuffer": 5}).temp_buffer == 5

    try:
        HorseInput.model_validate({"name": ""})
    except ValidationError as exc:
        payload = validation_failure("Horse rejected", exc)
    assert payload["status"] == "needs_review"
    assert payload["message"] == "Horse rejected"
    assert payload["details"]


def test_horse_mapping_round_trip() -> None:
    horse = HorseProfile(name="Tucker", breed="QH", age=22, is_senior=True, shelter_access="stall")
    row = {"id": 5, **horse_to_db(horse, "owner")}
    restored = horse_from_db(row)
    assert restored.id == "5"
    assert restored.name == "Tucker"
    assert restored.is_senior
    assert restored.shelter_access == "stall"


def test_horse_mapping_fills_defaults() -> None:
    restored = horse_from_db({"id": "1", "name": "Sparse", "coat_growth": None, "shelter_access": None})
    assert restored.coat_growth == 50
    assert restored.cold_tolerance == 50
    assert restored.shelter_access == "run-in"
    assert not restored.is_clipped


def test_blanket_mapping_and_status_update() -> None:
    row = {"id": 3, **blanket_to_db(Blanket(id="3", name="Lite", grams=100, waterproof=False), "owner")}
    blanket = blanket_from_db(row)
    assert blanket.id == "3"
    assert blanket.waterproof is False
    assert blanket.status == "available"

    fields = blanket_updates_to_db(BlanketUpdate.model_validate({"status": "available", "name": "Renamed"}))
    assert fields == {"name": "Renamed", "currently_on_horse_id": None}


def test_settings_mapping_nests_flat_columns() -> None:
    settings = Settings(temp_buffer=5, notifications=NotificationSettings(daily_summary=True), location_name="Madison")
    row = settings_to_db(settings)
    assert row["notifications_daily_summary"] is True
    assert row["liner_include_in_recommendations"] is True
    assert settings_from_db(row) == settings


def test_settings_mapping_defaults_for_missing_row() -> None:
    settings = settings_from_db({})
    assert settings.use_feels_like
    assert settings.rain_priority
    assert settings.temp_buffer == 0
    assert settings.liner.include_in_recommendations
    assert not settings.notifications.daily_summary
    assert settings.show_confidence is False


def test_store_horse_crud(store: SQLiteStableStore) -> None:
    created = store.create_horse("owner", HorseProfile(name="Tucker", is_senior=True))
    assert created.id
    assert store.get_horse("owner", created.id).name == "Tucker"
    assert store.get_horse("someone-else", created.id) is None

    updated = store.update_horse("owner", created.id, HorseUpdate.model_validate({"isClipped": True}))
    assert updated.is_clipped
    assert updated.is_senior

    assert [horse.id for horse in store.list_horses("owner")] == [created.id]
    assert store.delete_horse("owner", created.id)
    assert store.get_horse("owner", created.id) is None
    assert store.update_horse("owner", created.id, HorseUpdate()) is None


def test_store_blanket_and_liner_crud(store: SQLiteStableStore) -> None:
    blanket = store.create_blanket("owner", Blanket(id="b1", name="Rambo", grams=200, currently_on_horse_id="h1"))
    assert blanket.status == "in-use"
    store.create_blanket("owner", Blanket(id="b2", name="Sheet", grams=0))
    assert [item.id for item in store.list_blankets("owner")] == ["b1", "b2"]

    released = store.update_blanket("owner", "b1", BlanketUpdate(status="available"))
    assert released.currently_on_horse_id is None

    store.create_liner("owner", Liner(id="l1", name="Fleece", paired_with_blanket_id="b1"))
    assert store.delete_blanket("owner", "b1")
    # Liners keep their dangling pairing.
    assert store.list_liners("owner")[0].paired_with_blanket_id == "b1"
    assert store.delete_liner("owner", "l1")
    assert store.list_liners("owner") == []


def test_store_settings_upsert(store: SQLiteStableStore) -> None:
    assert store.get_settings("owner").temp_buffer == 0
    store.save_settings("owner", Settings(temp_buffer=3))
    updated = store.update_settings("owner", SettingsUpdate.model_validate({"useFeelsLike": False, "locationLat": 40.0}))
    assert updated.temp_buffer == 3
    assert updated.use_feels_like is False
    assert updated.location_lat == 40.0


def test_store_ids_are_scoped_by_owner(store: SQLiteStableStore) -> None:
    store.create_horse("alice", HorseProfile(id="1", name="Tucker"))
    store.create_horse("bob", HorseProfile(id="1", name="Biscuit"))
    store.create_blanket("alice", Blanket(id="b1", name="Rambo", grams=200))
    store.create_blanket("bob", Blanket(id="b1", name="Dover", grams=360))
    store.create_liner("alice", Liner(id="l1", name="Fleece"))
    store.create_liner("bob", Liner(id="l1", name="Quilted", grams=200))

    assert store.get_horse("alice", "1").name == "Tucker"
    assert store.get_horse("bob", "1").name == "Biscuit"
    assert [blanket.name for blanket in store.list_blankets("alice")] == ["Rambo"]
    assert [liner.name for liner in store.list_liners("bob")] == ["Quilted"]

    assert store.delete_horse("bob", "1")
    assert store.get_horse("alice", "1").name == "Tucker"


def test_store_rejects_duplicate_id_for_same_owner(store: SQLiteStableStore) -> None:
    store.create_horse("alice", HorseProfile(id="1", name="Tucker"))
    with pytest.raises(sqlite3.IntegrityError):
        store.create_horse("alice", HorseProfile(id="1", name="Impostor"))
    assert store.get_horse("alice", "1").name == "Tucker"


def test_foal_age_zero_is_stored(store: SQLiteStableStore) -> None:
    assert horse_to_db(HorseProfile(name="Newborn", age=0, is_foal=True), "owner")["age"] == 0
    created = store.create_horse("owner", HorseProfile(id="f1", name="Newborn", age=0, is_foal=True))
    assert created.age == 0
