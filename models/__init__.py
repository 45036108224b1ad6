"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.horse import HorseProfile, from_raw
from models.inventory import Blanket, Liner
from models.recommendation import Recommendation, ScheduleBlock
from models.settings import LinerSettings, NotificationSettings, Settings
from models.weather import ForecastDay, Location, WeatherReading, WeatherSnapshot

__all__ = [
    "Blanket",
    "ForecastDay",
    "HorseProfile",
    "Liner",
    "LinerSettings",
    "Location",
    "NotificationSettings",
    "Recommendation",
    "ScheduleBlock",
    "Settings",
    "WeatherReading",
    "WeatherSnapshot",
    "from_raw",
]
