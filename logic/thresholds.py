"""Temperature cutoffs for each blanket weight class.

Baseline for a midwest horse with a natural coat (coat growth and cold
tolerance both at 50, no modifiers):

* above 40°F: no blanket
* 31-40°F: lightweight
* 15-30°F: medium weight
* 14°F and below: heavyweight

Every horse or user modifier shifts all three cutoffs by the same amount, so
the cutoffs always keep ``light_max > medium_max > heavy_max``. A cutoff is an
inclusive upper bound: ``effective_temp <= heavy_max`` means heavy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from models.horse import HorseProfile
from models.settings import Settings

BASE_LIGHT_MAX = 40.0
BASE_MEDIUM_MAX = 30.0
BASE_HEAVY_MAX = 14.0

# Defined for reference only. A sheet is triggered by rain, never by this cutoff.
SHEET_MAX = 50.0

CLIPPED_BONUS = 15
SENIOR_BONUS = 5
THIN_KEEPER_BONUS = 8
FOAL_BONUS = 10

# Run-in is the typical turnout baseline; stalled horses stay warmest.
SHELTER_ADJUSTMENTS: Dict[str, int] = {
    "stall": -8,
    "run-in": 0,
    "trees": 3,
    "none": 5,
}


@dataclass(frozen=True)
class Thresholds:
    light_max: float
    medium_max: float
    heavy_max: float

    def boundaries(self) -> Tuple[float, float, float]:
        return (self.light_max, self.medium_max, self.heavy_max)


def threshold_adjustments(horse: HorseProfile, settings: Settings) -> List[Tuple[str, float]]:
    """Return the ordered ``(reason, degrees)`` shifts applied to every cutoff."""

    adjustments: List[Tuple[str, float]] = [
        # Less coat means blanketing at higher temperatures.
        ("coat", -(horse.coat_growth - 50) / 10),
        ("cold_tolerance", -(horse.cold_tolerance - 50) / 10),
    ]
    if horse.is_clipped:
        adjustments.append(("clipped", CLIPPED_BONUS))
    if horse.is_senior:
        adjustments.append(("senior", SENIOR_BONUS))
    if horse.is_thin_keeper:
        adjustments.append(("thin_keeper", THIN_KEEPER_BONUS))
    if horse.is_foal:
        adjustments.append(("foal", FOAL_BONUS))
    adjustments.append(("shelter", SHELTER_ADJUSTMENTS.get(horse.shelter_access, 0)))
    adjustments.append(("temp_buffer", settings.temp_buffer))
    return adjustments


def calculate_thresholds(horse: HorseProfile, settings: Settings) -> Thresholds:
    """Derive the light, medium and heavy cutoffs for one horse."""

    light_max = BASE_LIGHT_MAX
    medium_max = BASE_MEDIUM_MAX
    heavy_max = BASE_HEAVY_MAX
    for _, delta in threshold_adjustments(horse, settings):
        light_max += delta
        medium_max += delta
        heavy_max += delta
    return Thresholds(light_max=light_max, medium_max=medium_max, heavy_max=heavy_max)


__all__ = [
    "Thresholds",
    "calculate_thresholds",
    "threshold_adjustments",
    "SHELTER_ADJUSTMENTS",
    "SHEET_MAX",
    "BASE_LIGHT_MAX",
    "BASE_MEDIUM_MAX",
    "BASE_HEAVY_MAX",
]
