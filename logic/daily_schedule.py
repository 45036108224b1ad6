"""Four time-of-day blanket recommendations derived from current conditions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from logic.recommendation_engine import get_recommendation
from models.horse import HorseProfile
from models.inventory import Blanket, Liner
from models.recommendation import ScheduleBlock
from models.settings import Settings
from models.weather import WeatherReading


@dataclass(frozen=True)
class _BlockTemplate:
    label: str
    icon_type: str
    temperatures: Callable[[WeatherReading], Tuple[int, int]]


# Fixed offsets from current conditions: (temp, feels_like).
_BLOCKS: Tuple[_BlockTemplate, ...] = (
    _BlockTemplate("Morning (6 AM)", "morning", lambda w: (w.tonight_low + 5, w.tonight_low + 2)),
    _BlockTemplate("Afternoon (12 PM)", "afternoon", lambda w: (w.temp, w.feels_like)),
    _BlockTemplate("Evening (6 PM)", "evening", lambda w: (w.temp - 6, w.feels_like - 8)),
    _BlockTemplate("Overnight", "overnight", lambda w: (w.tonight_low, w.tonight_low - 4)),
)


def current_block(hour: int) -> str:
    """Return the block whose window contains ``hour`` (0-23)."""

    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    if 18 <= hour < 21:
        return "evening"
    return "overnight"


def block_readings(weather: WeatherReading) -> Dict[str, WeatherReading]:
    """Synthetic reading for each block keyed by icon type, in block order."""

    readings: Dict[str, WeatherReading] = {}
    for template in _BLOCKS:
        temp, feels_like = template.temperatures(weather)
        readings[template.icon_type] = weather.shifted(temp=temp, feels_like=feels_like)
    return readings


def get_daily_schedule(
    weather: WeatherReading,
    horse: HorseProfile,
    settings: Settings,
    blankets: Sequence[Blanket],
    liners: Iterable[Liner] = (),
    hour: Optional[int] = None,
) -> List[ScheduleBlock]:
    """Run the engine once per block and return all four blocks in order.

    ``hour`` defaults to the local wall clock, read once per call.
    """

    active = current_block(datetime.now().hour if hour is None else hour)
    liner_list = list(liners)
    readings = block_readings(weather)
    blocks: List[ScheduleBlock] = []
    for template in _BLOCKS:
        block_weather = readings[template.icon_type]
        recommendation = get_recommendation(block_weather, horse, settings, blankets, liner_list)
        blocks.append(
            ScheduleBlock(
                label=template.label,
                icon_type=template.icon_type,
                temp=block_weather.temp,
                feels_like=block_weather.feels_like,
                current=template.icon_type == active,
                recommendation=recommendation.weight_needed,
            )
        )
    return blocks


__all__ = ["get_daily_schedule", "current_block", "block_readings"]
