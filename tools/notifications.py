"""Push notification delivery for daily blanket forecasts.

The client is an explicit object created once by the app and handed to
whoever needs it; there is no module-level initialisation state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

import requests

from blanket_app.logging_config import get_logger, log_event
from models.horse import HorseProfile
from models.recommendation import Recommendation
from models.settings import NotificationSettings

LOGGER = get_logger(__name__)

ONESIGNAL_API_URL = "https://onesignal.com/api/v1/notifications"
MISMATCH_WARNING_GRAMS = 150


@dataclass(frozen=True)
class PushMessage:
    heading: str
    body: str


def describe_choice(recommendation: Recommendation) -> str:
    """Short label for one recommendation, e.g. ``Rambo Medium``."""

    if recommendation.weight_needed == "none":
        return "No blanket"
    blanket = recommendation.recommended_blanket
    if blanket is None:
        return "No suitable blanket"
    diff = recommendation.combined_grams - recommendation.grams_needed
    if diff < -MISMATCH_WARNING_GRAMS:
        return f"{blanket.name} (may be too light)"
    if diff > MISMATCH_WARNING_GRAMS:
        return f"{blanket.name} (may be too warm)"
    return blanket.name


def compose_daily_message(horse: HorseProfile, day: Recommendation, night: Recommendation) -> PushMessage:
    return PushMessage(
        heading=f"{horse.name}'s Blanket Forecast",
        body=f"Day: {describe_choice(day)} → Night: {describe_choice(night)}",
    )


def notification_tags(settings: NotificationSettings) -> Dict[str, str]:
    """Subscriber tags used to target opted-in users."""

    return {
        "blanket_change": str(settings.blanket_change).lower(),
        "severe_weather": str(settings.severe_weather).lower(),
        "daily_summary": str(settings.daily_summary).lower(),
    }


class PushNotificationClient:
    """OneSignal REST client. Disabled when no app id or key is configured."""

    def __init__(
        self,
        app_id: str | None,
        api_key: str | None,
        timeout_seconds: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.app_id = app_id
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.app_id and self.api_key)

    def send(self, external_id: str, message: PushMessage) -> bool:
        """Send one push to a user; returns False on any delivery failure."""

        if not self.enabled:
            LOGGER.info("Push delivery disabled; skipping notification")
            return False

        payload = {
            "app_id": self.app_id,
            "include_aliases": {"external_id": [external_id]},
            "target_channel": "push",
            "headings": {"en": message.heading},
            "contents": {"en": message.body},
        }
        headers = {"Content-Type": "application/json", "Authorization": f"Basic {self.api_key}"}
        try:
            response = self.session.post(
                ONESIGNAL_API_URL, json=payload, headers=headers, timeout=self.timeout_seconds
            )
        except requests.RequestException as exc:
            log_event(LOGGER, logging.ERROR, "push_send_failed", external_id=external_id, exc_info=exc)
            return False

        if not response.ok:
            log_event(
                LOGGER,
                logging.ERROR,
                "push_send_failed",
                external_id=external_id,
                status_code=response.status_code,
            )
            return False

        log_event(LOGGER, logging.INFO, "push_sent", external_id=external_id)
        return True


__all__ = [
    "PushMessage",
    "PushNotificationClient",
    "compose_daily_message",
    "describe_choice",
    "notification_tags",
]
