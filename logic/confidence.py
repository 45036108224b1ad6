"""Confidence scoring for a blanket recommendation.

Confidence starts at 100 and loses points for each independent source of
uncertainty:

* proximity of the effective temperature to a weight class cutoff
* precipitation chance near a coin flip
* gusty wind
* a poor fill-weight match from the inventory
* a waterproof shell being needed but unavailable
* a wide gap between actual and feels-like temperature

The result is clamped to 50-99 so the UI never claims certainty.
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from logic.thresholds import Thresholds
from models.weather import WeatherReading

MIN_CONFIDENCE = 50
MAX_CONFIDENCE = 99


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def threshold_proximity_penalty(effective_temp: float, thresholds: Thresholds) -> int:
    distance = min(abs(effective_temp - boundary) for boundary in thresholds.boundaries())
    if distance <= 2:
        return 18
    if distance <= 4:
        return 12
    if distance <= 6:
        return 6
    return 0


def precipitation_penalty(precip_chance: float) -> int:
    # Peak uncertainty at 50%.
    if 35 <= precip_chance <= 65:
        return _round_half_up(10 - abs(precip_chance - 50) / 15 * 5)
    if 20 <= precip_chance < 35 or 65 < precip_chance <= 80:
        return 3
    return 0


def wind_penalty(wind: float) -> int:
    if wind > 25:
        return 8
    if wind > 18:
        return 5
    if wind > 12:
        return 2
    return 0


def match_quality_penalty(grams_needed: int, recommended_grams: Optional[int]) -> int:
    if grams_needed <= 0 or recommended_grams is None:
        return 0
    diff = abs(recommended_grams - grams_needed)
    if diff > 150:
        return 10
    if diff > 100:
        return 7
    if diff > 50:
        return 4
    if diff > 25:
        return 2
    return 0


def stability_penalty(weather: WeatherReading) -> int:
    gap = abs(weather.temp - weather.feels_like)
    if gap > 12:
        return 6
    if gap > 8:
        return 4
    if gap > 5:
        return 2
    return 0


def confidence_penalties(
    effective_temp: float,
    thresholds: Thresholds,
    weather: WeatherReading,
    grams_needed: int,
    recommended_grams: Optional[int],
    needs_waterproof: bool,
    has_waterproof_match: bool,
) -> Dict[str, int]:
    """Return each penalty by name, in scoring order."""

    return {
        "threshold_proximity": threshold_proximity_penalty(effective_temp, thresholds),
        "precipitation": precipitation_penalty(weather.precip_chance),
        "wind": wind_penalty(weather.wind),
        "match_quality": match_quality_penalty(grams_needed, recommended_grams),
        "waterproof_mismatch": 8 if needs_waterproof and not has_waterproof_match else 0,
        "stability": stability_penalty(weather),
    }


def calculate_confidence(
    effective_temp: float,
    thresholds: Thresholds,
    weather: WeatherReading,
    grams_needed: int,
    recommended_grams: Optional[int],
    needs_waterproof: bool,
    has_waterproof_match: bool,
) -> int:
    penalties = confidence_penalties(
        effective_temp,
        thresholds,
        weather,
        grams_needed,
        recommended_grams,
        needs_waterproof,
        has_waterproof_match,
    )
    confidence = 100 - sum(penalties.values())
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))


__all__ = [
    "calculate_confidence",
    "confidence_penalties",
    "threshold_proximity_penalty",
    "precipitation_penalty",
    "wind_penalty",
    "match_quality_penalty",
    "stability_penalty",
    "MIN_CONFIDENCE",
    "MAX_CONFIDENCE",
]
