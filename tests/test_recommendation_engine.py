"""End-to-end engine behaviour for single readings and the daily schedule."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.daily_schedule import block_readings, current_block, get_daily_schedule
from logic.recommendation_engine import get_recommendation
from models.defaults import default_blankets, default_liners
from models.horse import HorseProfile, from_raw
from models.inventory import Blanket, Liner
from models.settings import LinerSettings, Settings
from models.taxonomy import TIME_BLOCKS, WEIGHT_SEVERITY, is_heavier
from models.weather import WeatherReading


def _weather(**overrides) -> WeatherReading:
    values: Dict[str, object] = {"temp": 42, "feels_like": 38, "wind": 12, "precip_chance": 20, "tonight_low": 28}
    values.update(overrides)
    return WeatherReading(**values)


@pytest.fixture()
def horse() -> HorseProfile:
    return from_raw({"name": "Tucker"})


def test_default_horse_cool_day_needs_light(horse: HorseProfile) -> None:
    rec = get_recommendation(_weather(), horse, Settings(), default_blankets(), default_liners())
    assert rec.weight_needed == "light"
    assert rec.grams_needed == 100
    assert rec.effective_temp == 38
    assert rec.recommended_blanket.name == "WeatherBeeta Lite"
    assert rec.combined_grams == 100
    assert not rec.needs_waterproof
    assert rec.confidence == 79


def test_clipped_horse_needs_heavy() -> None:
    clipped = from_raw({"name": "Clip", "isClipped": True})
    rec = get_recommendation(_weather(temp=20, feels_like=15), clipped, Settings(), default_blankets())
    assert rec.weight_needed == "heavy"
    assert rec.grams_needed == 300
    assert rec.recommended_blanket.name == "Dover Heavyweight"


def test_warm_rain_recommends_sheet(horse: HorseProfile) -> None:
    rec = get_recommendation(_weather(temp=48, feels_like=45, precip_chance=50), horse, Settings(), default_blankets())
    assert rec.weight_needed == "sheet"
    assert rec.grams_needed == 0
    assert rec.needs_waterproof
    assert rec.recommended_blanket.waterproof
    assert rec.recommended_blanket.name == "Rain Sheet"


def test_empty_inventory_still_recommends(horse: HorseProfile) -> None:
    rec = get_recommendation(_weather(), horse, Settings(), [], [])
    assert rec.recommended_blanket is None
    assert rec.recommended_liner is None
    assert rec.combined_grams == 0
    # Only threshold proximity (18) and precipitation (3) apply.
    assert rec.confidence == 79


def test_wind_without_shelter_needs_neck_rug() -> None:
    exposed = from_raw({"name": "Open", "shelterAccess": "none"})
    rec = get_recommendation(_weather(temp=28, feels_like=25, wind=30), exposed, Settings(), default_blankets())
    assert rec.needs_neck_rug
    assert rec.weight_needed == "medium"
    assert "neck rug" in rec.reasoning


def test_no_blanket_when_warm_and_dry(horse: HorseProfile) -> None:
    rec = get_recommendation(_weather(temp=65, feels_like=65, precip_chance=0), horse, Settings(), default_blankets())
    assert rec.weight_needed == "none"
    assert rec.grams_needed == 0
    assert "comfortable without a blanket" in rec.reasoning


def test_rain_priority_off_disables_sheet_and_waterproof(horse: HorseProfile) -> None:
    settings = Settings(rain_priority=False)
    rec = get_recommendation(_weather(temp=48, feels_like=45, precip_chance=90), horse, settings, default_blankets())
    assert rec.weight_needed == "none"
    assert not rec.needs_waterproof


def test_paired_liner_is_recommended(horse: HorseProfile) -> None:
    blankets = [Blanket(id="1", name="Rambo Medium", grams=200), Blanket(id="2", name="Big", grams=400)]
    liners = [Liner(id="l", name="Fleece Liner", grams=100, paired_with_blanket_id="1")]
    rec = get_recommendation(_weather(temp=10, feels_like=5), horse, Settings(), blankets, liners)
    assert rec.weight_needed == "heavy"
    assert rec.recommended_blanket.id == "1"
    assert rec.recommended_liner.id == "l"
    assert rec.combined_grams == 300
    assert "Fleece Liner adds 100g" in rec.reasoning

    no_liners = Settings(liner=LinerSettings(include_in_recommendations=False))
    rec = get_recommendation(_weather(temp=10, feels_like=5), horse, no_liners, blankets, liners)
    assert rec.recommended_liner is None
    assert rec.combined_grams == 200


def test_engine_is_deterministic_and_does_not_mutate_inputs(horse: HorseProfile) -> None:
    blankets = default_blankets()
    liners = default_liners()
    snapshot = (list(blankets), list(liners))
    first = get_recommendation(_weather(precip_chance=55), horse, Settings(), blankets, liners)
    second = get_recommendation(_weather(precip_chance=55), horse, Settings(), blankets, liners)
    assert first == second
    assert (blankets, liners) == snapshot


def test_weight_is_monotonic_in_temperature(horse: HorseProfile) -> None:
    previous = "none"
    for temp in range(70, -20, -1):
        rec = get_recommendation(_weather(temp=temp, feels_like=temp, precip_chance=0), horse, Settings(), [])
        assert not is_heavier(previous, rec.weight_needed)
        previous = rec.weight_needed
        assert 50 <= rec.confidence <= 99


@pytest.mark.parametrize(
    "hour, block",
    [(0, "overnight"), (5, "overnight"), (6, "morning"), (11, "morning"), (12, "afternoon"), (17, "afternoon"), (18, "evening"), (20, "evening"), (21, "overnight"), (23, "overnight")],
)
def test_current_block(hour: int, block: str) -> None:
    assert current_block(hour) == block


def test_schedule_blocks_and_current_flag(horse: HorseProfile) -> None:
    blocks = get_daily_schedule(_weather(), horse, Settings(), default_blankets(), default_liners(), hour=14)
    assert [block.icon_type for block in blocks] == TIME_BLOCKS
    assert [block.label for block in blocks] == ["Morning (6 AM)", "Afternoon (12 PM)", "Evening (6 PM)", "Overnight"]
    assert [block.current for block in blocks] == [False, True, False, False]
    assert [(block.temp, block.feels_like) for block in blocks] == [(33, 30), (42, 38), (36, 30), (28, 24)]
    assert [block.recommendation for block in blocks] == ["medium", "light", "medium", "medium"]


def test_schedule_blocks_share_other_conditions() -> None:
    readings = block_readings(_weather(wind=22, precip_chance=60))
    assert list(readings) == TIME_BLOCKS
    assert {reading.wind for reading in readings.values()} == {22}
    assert {reading.precip_chance for reading in readings.values()} == {60}


def test_colder_reading_needs_heavier_weight(horse: HorseProfile) -> None:
    colder = get_recommendation(_weather(temp=5, feels_like=0), horse, Settings(), [])
    warmer = get_recommendation(_weather(temp=35, feels_like=35), horse, Settings(), [])
    assert is_heavier(colder.weight_needed, warmer.weight_needed)
    assert WEIGHT_SEVERITY[colder.weight_needed] == WEIGHT_SEVERITY["heavy"]


def test_weather_condition_is_normalised() -> None:
    assert _weather(condition="Partly Cloudy").condition == "partly-cloudy"
    assert _weather(condition="rain").shifted(temp=30, feels_like=25).condition == "rain"
    with pytest.raises(ValueError):
        _weather(condition="hail")
