"""Deterministic weight class, waterproof and neck rug rules."""

from __future__ import annotations

from typing import Dict

from logic.thresholds import Thresholds
from models.horse import HorseProfile
from models.settings import Settings
from models.weather import WeatherReading

SHEET_PRECIP_THRESHOLD = 40
FRIGID_TEMP = 10

# Precipitation chance above which a waterproof shell is needed. Stalled
# horses are protected, so 100 is effectively never.
WATERPROOF_THRESHOLDS: Dict[str, int] = {
    "stall": 100,
    "run-in": 30,
    "trees": 20,
    "none": 15,
}
DEFAULT_WATERPROOF_THRESHOLD = 30

NECK_RUG_WIND_THRESHOLDS: Dict[str, int] = {
    "stall": 100,
    "run-in": 20,
    "trees": 15,
    "none": 12,
}
DEFAULT_NECK_RUG_WIND_THRESHOLD = 20


def effective_temperature(weather: WeatherReading, settings: Settings) -> float:
    return weather.feels_like if settings.use_feels_like else weather.temp


def classify_weight(
    effective_temp: float, thresholds: Thresholds, weather: WeatherReading, settings: Settings
) -> str:
    """Map the effective temperature onto a weight class.

    Sheet only applies above the light cutoff and only for rain.
    """

    if effective_temp <= thresholds.heavy_max:
        return "heavy"
    if effective_temp <= thresholds.medium_max:
        return "medium"
    if effective_temp <= thresholds.light_max:
        return "light"
    if weather.precip_chance > SHEET_PRECIP_THRESHOLD and settings.rain_priority:
        return "sheet"
    return "none"


def waterproof_threshold(shelter_access: str) -> int:
    return WATERPROOF_THRESHOLDS.get(shelter_access, DEFAULT_WATERPROOF_THRESHOLD)


def neck_rug_wind_threshold(shelter_access: str) -> int:
    return NECK_RUG_WIND_THRESHOLDS.get(shelter_access, DEFAULT_NECK_RUG_WIND_THRESHOLD)


def needs_waterproof(weather: WeatherReading, horse: HorseProfile, settings: Settings) -> bool:
    return weather.precip_chance > waterproof_threshold(horse.shelter_access) and settings.rain_priority


def needs_neck_rug(weather: WeatherReading, horse: HorseProfile, effective_temp: float) -> bool:
    return weather.wind > neck_rug_wind_threshold(horse.shelter_access) or effective_temp < FRIGID_TEMP


__all__ = [
    "effective_temperature",
    "classify_weight",
    "needs_waterproof",
    "needs_neck_rug",
    "waterproof_threshold",
    "neck_rug_wind_threshold",
    "WATERPROOF_THRESHOLDS",
    "NECK_RUG_WIND_THRESHOLDS",
]
