"""Horse profile data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from models.taxonomy import DEFAULT_SHELTER, validate_shelter

DEFAULT_SCALE_VALUE = 50


def _coerce_scale(value: Any) -> float:
    """Default a missing 0-100 slider value to the midpoint."""

    if value is None:
        return DEFAULT_SCALE_VALUE
    return float(value)


@dataclass
class HorseProfile:
    """Represents one horse and the traits that drive blanketing."""

    name: str
    breed: Optional[str] = None
    age: Optional[int] = None
    coat_growth: float = DEFAULT_SCALE_VALUE
    cold_tolerance: float = DEFAULT_SCALE_VALUE
    is_clipped: bool = False
    is_senior: bool = False
    is_thin_keeper: bool = False
    is_foal: bool = False
    shelter_access: str = DEFAULT_SHELTER
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.coat_growth = _coerce_scale(self.coat_growth)
        self.cold_tolerance = _coerce_scale(self.cold_tolerance)
        self.shelter_access = validate_shelter(self.shelter_access)

    @property
    def coat_level(self) -> str:
        """Bucket coat growth into light, medium or heavy."""

        if self.coat_growth < 33:
            return "light"
        if self.coat_growth < 66:
            return "medium"
        return "heavy"


def from_raw(metadata: Dict[str, Any]) -> HorseProfile:
    """Build a :class:`HorseProfile` from a loose camelCase or snake_case mapping."""

    def pick(snake: str, camel: str, default: Any = None) -> Any:
        if metadata.get(snake) is not None:
            return metadata[snake]
        if metadata.get(camel) is not None:
            return metadata[camel]
        return default

    if not metadata.get("name"):
        raise ValueError("Missing required field for HorseProfile: name")

    raw_id = metadata.get("id")
    return HorseProfile(
        name=str(metadata["name"]),
        breed=metadata.get("breed"),
        age=metadata.get("age"),
        coat_growth=pick("coat_growth", "coatGrowth", DEFAULT_SCALE_VALUE),
        cold_tolerance=pick("cold_tolerance", "coldTolerance", DEFAULT_SCALE_VALUE),
        is_clipped=bool(pick("is_clipped", "isClipped", False)),
        is_senior=bool(pick("is_senior", "isSenior", False)),
        is_thin_keeper=bool(pick("is_thin_keeper", "isThinKeeper", False)),
        is_foal=bool(pick("is_foal", "isFoal", False)),
        shelter_access=pick("shelter_access", "shelterAccess", DEFAULT_SHELTER),
        id=str(raw_id) if raw_id is not None else None,
    )


__all__ = ["HorseProfile", "from_raw", "DEFAULT_SCALE_VALUE"]
