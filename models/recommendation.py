"""Engine output schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from models.inventory import Blanket, Liner


@dataclass(frozen=True)
class Recommendation:
    """Ephemeral recommendation, recomputed on every call and never stored."""

    weight_needed: str
    grams_needed: int
    recommended_blanket: Optional[Blanket]
    recommended_liner: Optional[Liner]
    combined_grams: int
    confidence: int
    reasoning: str
    needs_waterproof: bool
    needs_neck_rug: bool
    effective_temp: float


@dataclass(frozen=True)
class ScheduleBlock:
    label: str
    icon_type: str
    temp: int
    feels_like: int
    current: bool
    recommendation: str


__all__ = ["Recommendation", "ScheduleBlock"]
