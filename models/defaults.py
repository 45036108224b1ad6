"""Demo fixtures used for first-run state, the CLI demo and evaluation."""

from __future__ import annotations

from typing import List

from models.horse import HorseProfile
from models.inventory import Blanket, Liner
from models.settings import Settings
from models.weather import WeatherReading


def default_horse() -> HorseProfile:
    return HorseProfile(
        id="1",
        name="Tucker",
        breed="Quarter Horse",
        age=22,
        coat_growth=50,
        cold_tolerance=50,
        is_senior=True,
        shelter_access="run-in",
    )


def default_blankets() -> List[Blanket]:
    return [
        Blanket(id="1", name="Dover Heavyweight", grams=360, waterproof=True, color="#B8D4E3"),
        Blanket(id="2", name="Rambo Medium", grams=200, waterproof=True, color="#D4A84B", currently_on_horse_id="1"),
        Blanket(id="3", name="WeatherBeeta Lite", grams=100, waterproof=False, color="#9CAF88"),
        Blanket(id="4", name="Rain Sheet", grams=0, waterproof=True, color="#A0522D"),
    ]


def default_liners() -> List[Liner]:
    return [
        Liner(id="101", name="Fleece Liner", grams=100, color="#E8D4C4"),
        Liner(id="102", name="Quilted Liner", grams=200, color="#C9B8A8"),
    ]


def default_weather() -> WeatherReading:
    return WeatherReading(
        temp=42,
        feels_like=38,
        wind=12,
        humidity=65,
        precip_chance=20,
        tonight_low=28,
        condition="partly-cloudy",
    )


def default_settings() -> Settings:
    return Settings()


__all__ = [
    "default_horse",
    "default_blankets",
    "default_liners",
    "default_weather",
    "default_settings",
]
