"""App bootstrap wiring storage, weather and push delivery around the engine."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from blanket_app.config import AppConfig
from blanket_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.daily_schedule import block_readings, get_daily_schedule
from logic.recommendation_engine import get_recommendation
from models.horse import HorseProfile
from models.inventory import Blanket, Liner
from models.recommendation import Recommendation, ScheduleBlock
from models.settings import Settings
from models.weather import WeatherReading
from tools.notifications import PushNotificationClient, compose_daily_message
from tools.stable_store import SQLiteStableStore, StableStore
from tools.weather_provider import OpenMeteoProvider, WeatherProvider


LOGGER = get_logger(__name__)


class HorseNotFoundError(LookupError):
    """Raised when a horse id does not belong to the requesting owner."""


@dataclass(frozen=True)
class StableContext:
    """Everything the engine needs for one horse, loaded in one pass."""

    horse: HorseProfile
    settings: Settings
    blankets: List[Blanket]
    liners: List[Liner]
    weather: WeatherReading


class BlanketAdvisorApp:
    """Wires together the store, weather provider and push client.

    Collaborators are created once here and passed by reference; tests inject
    in-memory or mock replacements.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        store: StableStore | None = None,
        weather_provider: WeatherProvider | None = None,
        push_client: PushNotificationClient | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging()

        self.store = store or SQLiteStableStore(self.config.database_path)
        self.weather_provider = weather_provider or OpenMeteoProvider(
            timeout_seconds=self.config.weather_timeout_seconds,
            max_retries=self.config.weather_max_retries,
            initial_delay_seconds=self.config.weather_initial_delay_seconds,
        )
        self.push_client = push_client or PushNotificationClient(
            app_id=self.config.push_app_id, api_key=self.config.push_api_key
        )

    def _location(self, settings: Settings) -> Tuple[float, float]:
        if settings.location_lat is not None and settings.location_lng is not None:
            return settings.location_lat, settings.location_lng
        return self.config.default_latitude, self.config.default_longitude

    def load_context(self, user_id: str, horse_id: str) -> StableContext:
        horse = self.store.get_horse(user_id, horse_id)
        if horse is None:
            raise HorseNotFoundError(f"Unknown horse {horse_id}")
        settings = self.store.get_settings(user_id)
        latitude, longitude = self._location(settings)
        snapshot = self.weather_provider.get_conditions(latitude, longitude)
        return StableContext(
            horse=horse,
            settings=settings,
            blankets=self.store.list_blankets(user_id),
            liners=self.store.list_liners(user_id),
            weather=snapshot.current,
        )

    def recommend_for_horse(self, user_id: str, horse_id: str) -> Recommendation:
        with operation_context("app.recommend_for_horse") as correlation_id:
            context = self.load_context(user_id, horse_id)
            recommendation = get_recommendation(
                context.weather, context.horse, context.settings, context.blankets, context.liners
            )
            log_event(
                LOGGER,
                logging.INFO,
                "recommendation_computed",
                correlation_id=correlation_id,
                user_id=user_id,
                horse_id=horse_id,
                weight_needed=recommendation.weight_needed,
                confidence=recommendation.confidence,
                inventory_size=len(context.blankets),
            )
            return recommendation

    def schedule_for_horse(self, user_id: str, horse_id: str, hour: Optional[int] = None) -> List[ScheduleBlock]:
        with operation_context("app.schedule_for_horse") as correlation_id:
            context = self.load_context(user_id, horse_id)
            schedule = get_daily_schedule(
                context.weather, context.horse, context.settings, context.blankets, context.liners, hour=hour
            )
            log_event(
                LOGGER,
                logging.INFO,
                "schedule_computed",
                correlation_id=correlation_id,
                user_id=user_id,
                horse_id=horse_id,
                blocks=[block.recommendation for block in schedule],
            )
            return schedule

    def send_daily_notification(self, user_id: str, horse_id: str) -> bool:
        """Push the afternoon and overnight picks for one horse to its owner."""

        with operation_context("app.send_daily_notification"):
            context = self.load_context(user_id, horse_id)
            if not context.settings.notifications.daily_summary:
                LOGGER.info("Daily summary disabled for owner; skipping")
                return False
            readings = block_readings(context.weather)
            day = get_recommendation(
                readings["afternoon"], context.horse, context.settings, context.blankets, context.liners
            )
            night = get_recommendation(
                readings["overnight"], context.horse, context.settings, context.blankets, context.liners
            )
            message = compose_daily_message(context.horse, day, night)
            return self.push_client.send(user_id, message)


__all__ = ["BlanketAdvisorApp", "HorseNotFoundError", "StableContext"]
