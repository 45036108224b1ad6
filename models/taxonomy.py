"""Canonical labels for weather, shelter and blanket weight classes.

This module centralises the enumerations shared by the recommendation engine,
the validation schemas and the storage mappers so the same spelling is used
everywhere.
"""

from typing import Dict, List

CONDITIONS: List[str] = ["clear", "partly-cloudy", "cloudy", "rain", "snow"]

SHELTER_TYPES: List[str] = ["stall", "run-in", "trees", "none"]
DEFAULT_SHELTER = "run-in"

WEIGHT_CLASSES: List[str] = ["none", "sheet", "light", "medium", "heavy"]

# Target fill weight per class. Sheet and none share 0g; a rain sheet is
# selected for its shell, not its fill.
WEIGHT_GRAMS: Dict[str, int] = {
    "none": 0,
    "sheet": 0,
    "light": 100,
    "medium": 200,
    "heavy": 300,
}

WEIGHT_SEVERITY: Dict[str, int] = {name: rank for rank, name in enumerate(WEIGHT_CLASSES)}

TIME_BLOCKS: List[str] = ["morning", "afternoon", "evening", "overnight"]


def normalize_label(value: str) -> str:
    """Lower-case a free-form label and use dashes between words."""

    return value.strip().lower().replace("_", "-").replace(" ", "-")


def validate_shelter(value: str | None) -> str:
    """Return the canonical shelter label, defaulting to run-in when unset."""

    if not value:
        return DEFAULT_SHELTER
    key = normalize_label(value)
    if key not in SHELTER_TYPES:
        raise ValueError(f"Unknown shelter access '{value}'. Expected one of {SHELTER_TYPES}.")
    return key


def validate_condition(value: str) -> str:
    key = normalize_label(value)
    if key not in CONDITIONS:
        raise ValueError(f"Unknown weather condition '{value}'. Expected one of {CONDITIONS}.")
    return key


def grams_for_weight(weight: str) -> int:
    """Look up the nominal grams for a weight class."""

    return WEIGHT_GRAMS[weight]


def is_heavier(weight: str, other: str) -> bool:
    return WEIGHT_SEVERITY[weight] > WEIGHT_SEVERITY[other]


__all__ = [
    "CONDITIONS",
    "SHELTER_TYPES",
    "DEFAULT_SHELTER",
    "WEIGHT_CLASSES",
    "WEIGHT_GRAMS",
    "WEIGHT_SEVERITY",
    "TIME_BLOCKS",
    "normalize_label",
    "validate_shelter",
    "validate_condition",
    "grams_for_weight",
    "is_heavier",
]
