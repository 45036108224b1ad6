"""Evaluation scenarios covering weight classes, rain, wind and the daily schedule."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.defaults import default_blankets, default_liners
from models.horse import HorseProfile, from_raw
from models.inventory import Blanket, Liner
from models.settings import Settings
from models.weather import WeatherReading


@dataclass
class EvaluationScenario:
    name: str
    description: str
    weather: WeatherReading
    horse: HorseProfile
    settings: Settings = field(default_factory=Settings)
    blankets: List[Blanket] = field(default_factory=default_blankets)
    liners: List[Liner] = field(default_factory=default_liners)
    hour: Optional[int] = None
    expectations: Dict[str, object] = field(default_factory=dict)


def _reading(temp: int, feels_like: int, wind: int = 5, precip_chance: int = 0, tonight_low: int = 28) -> WeatherReading:
    return WeatherReading(
        temp=temp,
        feels_like=feels_like,
        wind=wind,
        precip_chance=precip_chance,
        tonight_low=tonight_low,
    )


def _horse(**overrides: object) -> HorseProfile:
    return from_raw({"name": "Eval", **overrides})


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="baseline_light",
        description="Natural coat on a cool, dry day needs a lightweight blanket.",
        weather=_reading(42, 38, wind=12, precip_chance=20, tonight_low=28),
        horse=_horse(),
        expectations={
            "thresholds": (40, 30, 14),
            "weight_needed": "light",
            "grams_needed": 100,
            "needs_waterproof": False,
        },
    ),
    EvaluationScenario(
        name="clipped_cold",
        description="A clipped horse shifts every cutoff up by 15 degrees.",
        weather=_reading(20, 15),
        horse=_horse(is_clipped=True),
        expectations={
            "thresholds": (55, 45, 29),
            "weight_needed": "heavy",
            "grams_needed": 300,
        },
    ),
    EvaluationScenario(
        name="warm_rain",
        description="Warm but likely rain calls for a waterproof sheet.",
        weather=_reading(48, 45, precip_chance=50),
        horse=_horse(),
        expectations={
            "weight_needed": "sheet",
            "grams_needed": 0,
            "needs_waterproof": True,
            "requires_waterproof_blanket": True,
        },
    ),
    EvaluationScenario(
        name="empty_inventory",
        description="No blankets on file still yields a weight class and confidence.",
        weather=_reading(42, 38, wind=12, precip_chance=20, tonight_low=28),
        horse=_horse(),
        blankets=[],
        liners=[],
        expectations={
            "weight_needed": "light",
            "no_blanket": True,
            "combined_grams": 0,
        },
    ),
    EvaluationScenario(
        name="windy_no_shelter",
        description="Open turnout in strong wind needs a neck rug.",
        weather=_reading(28, 25, wind=30),
        horse=_horse(shelter_access="none"),
        expectations={
            "weight_needed": "medium",
            "needs_neck_rug": True,
        },
    ),
    EvaluationScenario(
        name="afternoon_schedule",
        description="At 2 PM the afternoon block is the current one.",
        weather=_reading(42, 38, wind=12, precip_chance=20, tonight_low=28),
        horse=_horse(),
        hour=14,
        expectations={
            "current_block": "afternoon",
            "block_temps": [(33, 30), (42, 38), (36, 30), (28, 24)],
        },
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
