"""User settings that tune recommendations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class LinerSettings:
    include_in_recommendations: bool = True
    show_combined_weight: bool = True


@dataclass(frozen=True)
class NotificationSettings:
    blanket_change: bool = True
    severe_weather: bool = True
    daily_summary: bool = False


@dataclass(frozen=True)
class Settings:
    """Recommendation preferences plus persisted UI selection state.

    Only ``use_feels_like``, ``rain_priority``, ``temp_buffer`` and
    ``liner.include_in_recommendations`` influence the engine.
    """

    use_feels_like: bool = True
    rain_priority: bool = True
    temp_buffer: float = 0
    liner: LinerSettings = field(default_factory=LinerSettings)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    show_confidence: bool = True
    current_blanket_id: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    location_name: Optional[str] = None


__all__ = ["Settings", "LinerSettings", "NotificationSettings"]
