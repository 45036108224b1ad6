"""Weather reading schemas consumed by the recommendation engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from models.taxonomy import validate_condition


@dataclass(frozen=True)
class WeatherReading:
    """Point-in-time conditions in Fahrenheit and mph."""

    temp: int
    feels_like: int
    wind: int
    precip_chance: int
    tonight_low: int
    condition: str = "clear"
    humidity: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "condition", validate_condition(self.condition))

    def shifted(self, temp: int, feels_like: int) -> "WeatherReading":
        """Return a copy with new temperatures and everything else shared."""

        return replace(self, temp=temp, feels_like=feels_like)


@dataclass(frozen=True)
class ForecastDay:
    day: str
    condition: str
    high: int
    low: int
    precip_chance: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "condition", validate_condition(self.condition))


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions plus the ordered daily forecast."""

    current: WeatherReading
    forecast: List[ForecastDay] = field(default_factory=list)


@dataclass(frozen=True)
class Location:
    id: Optional[int]
    name: str
    latitude: float
    longitude: float
    region: str = ""
    country: str = ""

    @property
    def display_name(self) -> str:
        return ", ".join(part for part in (self.name, self.region, self.country) if part)


__all__ = ["WeatherReading", "ForecastDay", "WeatherSnapshot", "Location"]
