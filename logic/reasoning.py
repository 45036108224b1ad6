"""Plain-language explanation for a computed recommendation.

Clauses are gated on the same state the engine computed, so the text never
mentions a waterproof shell, neck rug or liner the recommendation does not
include.
"""

from __future__ import annotations

from typing import List, Optional

from models.horse import HorseProfile
from models.inventory import Liner
from models.weather import WeatherReading

COAT_PROTECTION = {"light": "minimal", "medium": "moderate", "heavy": "excellent"}


def _degrees(value: float) -> str:
    return f"{value:g}°F"


def _weight_clauses(weather: WeatherReading, horse: HorseProfile, weight: str, effective_temp: float) -> List[str]:
    temp = _degrees(effective_temp)
    coat_level = horse.coat_level
    clauses: List[str] = []

    if weight == "none":
        if effective_temp >= 60:
            clauses.append(f"At {temp}, it's warm enough that {horse.name} will be comfortable without a blanket")
        elif effective_temp >= 50:
            clauses.append(f"The mild {temp} temperature is comfortable for {horse.name}'s {coat_level} coat")
        else:
            clauses.append(
                f"At {temp}, {horse.name}'s {coat_level} winter coat provides "
                f"{COAT_PROTECTION[coat_level]} natural insulation"
            )
    elif weight == "sheet":
        clauses.append(
            f"With {weather.precip_chance}% chance of precipitation, a rain sheet will keep {horse.name} dry"
        )
    elif weight == "light":
        clauses.append(f"At {temp}, a lightweight blanket will supplement {horse.name}'s natural coat")
        if weather.wind > 10:
            clauses.append(f"The {weather.wind} mph winds make the extra layer helpful")
    elif weight == "medium":
        clauses.append(f"The {temp} temperature calls for medium-weight coverage")
        if coat_level == "light" or horse.is_clipped:
            coat = "clipped coat" if horse.is_clipped else "lighter coat"
            clauses.append(f"{horse.name}'s {coat} needs the extra insulation")
        elif weather.wind > 15:
            clauses.append(f"Wind at {weather.wind} mph makes it feel colder")
    elif weight == "heavy":
        if effective_temp < 10:
            clauses.append(f"With temperatures at {temp}, heavyweight protection is essential for {horse.name}")
        else:
            clauses.append(f"The cold {temp} conditions require heavyweight blanketing")
        if weather.wind > 15:
            clauses.append(f"Strong {weather.wind} mph winds increase the chill factor")
    return clauses


def _horse_clauses(horse: HorseProfile, weight: str) -> List[str]:
    clauses: List[str] = []
    if horse.is_clipped and weight not in {"none", "sheet"}:
        clauses.append("Clipped horses need extra warmth to compensate for reduced natural insulation")
    if horse.is_senior:
        clauses.append("As a senior, staying warm helps maintain comfort and health")
    if horse.is_thin_keeper and weight != "none":
        clauses.append("Extra coverage helps hard keepers conserve body heat")
    if horse.is_foal and weight != "none":
        clauses.append("Foals under 6 months need extra warmth as their thermoregulation is still developing")
    return clauses


def _shelter_clauses(
    weather: WeatherReading, horse: HorseProfile, weight: str, needs_waterproof: bool
) -> List[str]:
    if weight == "none":
        return []
    shelter = horse.shelter_access
    if shelter == "stall":
        return ["Stall protection means less coverage is needed compared to turnout"]
    if shelter == "none":
        if needs_waterproof:
            return ["With no shelter access, waterproof protection is especially important"]
        if weather.wind > 12:
            return ["Without shelter, extra wind protection is needed"]
        return ["No shelter means extra coverage helps maintain body heat"]
    if shelter == "trees":
        if needs_waterproof:
            return ["Trees provide minimal rain protection, so waterproof coverage is recommended"]
        if weather.wind > 15:
            return ["Trees offer some wind break but additional protection helps"]
    return []


def generate_reasoning(
    weather: WeatherReading,
    horse: HorseProfile,
    weight: str,
    effective_temp: float,
    needs_waterproof: bool,
    needs_neck_rug: bool,
    liner: Optional[Liner] = None,
) -> str:
    """Join the applicable clauses into sentences."""

    parts = _weight_clauses(weather, horse, weight, effective_temp)
    parts.extend(_horse_clauses(horse, weight))
    parts.extend(_shelter_clauses(weather, horse, weight, needs_waterproof))

    if needs_waterproof and weight != "none":
        parts.append("Make sure to use a waterproof option with rain in the forecast")

    if needs_neck_rug:
        if weather.wind > 20 or effective_temp >= 10:
            parts.append("Add a neck rug for protection against the strong winds")
        else:
            parts.append("A neck rug will provide extra warmth in these frigid temperatures")

    if liner is not None:
        parts.append(f"The {liner.name} adds {liner.grams}g of extra warmth")

    return ". ".join(parts) + "."


__all__ = ["generate_reasoning"]
