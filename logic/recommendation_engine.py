"""Blanket recommendation for a single point-in-time weather reading.

The engine is a pure function of its inputs: no I/O, no logging and no state
kept between calls, so concurrent callers need no coordination and identical
inputs always produce identical output.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from logic.classification import classify_weight, effective_temperature, needs_neck_rug, needs_waterproof
from logic.confidence import calculate_confidence
from logic.inventory_matcher import match_blanket
from logic.reasoning import generate_reasoning
from logic.thresholds import calculate_thresholds
from models.horse import HorseProfile
from models.inventory import Blanket, Liner
from models.recommendation import Recommendation
from models.settings import Settings
from models.taxonomy import grams_for_weight
from models.weather import WeatherReading


def get_recommendation(
    weather: WeatherReading,
    horse: HorseProfile,
    settings: Settings,
    blankets: Sequence[Blanket],
    liners: Iterable[Liner] = (),
) -> Recommendation:
    """Recommend a weight class, accessories and the best inventory match."""

    effective_temp = effective_temperature(weather, settings)
    thresholds = calculate_thresholds(horse, settings)
    weight_needed = classify_weight(effective_temp, thresholds, weather, settings)
    grams_needed = grams_for_weight(weight_needed)
    waterproof = needs_waterproof(weather, horse, settings)
    neck_rug = needs_neck_rug(weather, horse, effective_temp)

    match = match_blanket(
        blankets,
        liners,
        grams_needed,
        waterproof,
        include_liners=settings.liner.include_in_recommendations,
    )

    # A 0g match (rain sheet, no liner) is not scored for fill weight.
    recommended_grams = match.combined_grams or (match.blanket.grams if match.blanket else 0) or None
    has_waterproof_match = not waterproof or (match.blanket is not None and match.blanket.waterproof)
    confidence = calculate_confidence(
        effective_temp,
        thresholds,
        weather,
        grams_needed,
        recommended_grams,
        waterproof,
        has_waterproof_match,
    )

    reasoning = generate_reasoning(
        weather,
        horse,
        weight_needed,
        effective_temp,
        needs_waterproof=waterproof,
        needs_neck_rug=neck_rug,
        liner=match.liner,
    )

    return Recommendation(
        weight_needed=weight_needed,
        grams_needed=grams_needed,
        recommended_blanket=match.blanket,
        recommended_liner=match.liner,
        combined_grams=match.combined_grams,
        confidence=confidence,
        reasoning=reasoning,
        needs_waterproof=waterproof,
        needs_neck_rug=neck_rug,
        effective_temp=effective_temp,
    )


__all__ = ["get_recommendation"]
