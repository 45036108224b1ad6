"""Explicit row <-> model mappers for the stable store.

Storage rows use flat snake_case columns (``coat_growth``,
``liner_include_in_recommendations``); the application works with the model
dataclasses. Each entity has its own pair of functions so a column rename
only touches one place.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from logic.validation import BlanketUpdate, HorseUpdate, LinerUpdate, SettingsUpdate
from models.horse import DEFAULT_SCALE_VALUE, HorseProfile
from models.inventory import DEFAULT_BLANKET_COLOR, DEFAULT_LINER_COLOR, DEFAULT_LINER_GRAMS, Blanket, Liner
from models.settings import LinerSettings, NotificationSettings, Settings
from models.taxonomy import DEFAULT_SHELTER


def _optional_str(value: Any) -> str | None:
    return str(value) if value is not None else None


def _default(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def horse_from_db(row: Mapping[str, Any]) -> HorseProfile:
    return HorseProfile(
        id=_optional_str(row["id"]),
        name=row["name"],
        breed=row.get("breed"),
        age=row.get("age"),
        coat_growth=_default(row.get("coat_growth"), DEFAULT_SCALE_VALUE),
        cold_tolerance=_default(row.get("cold_tolerance"), DEFAULT_SCALE_VALUE),
        is_clipped=bool(row.get("is_clipped")),
        is_senior=bool(row.get("is_senior")),
        is_thin_keeper=bool(row.get("is_thin_keeper")),
        is_foal=bool(row.get("is_foal")),
        shelter_access=row.get("shelter_access") or DEFAULT_SHELTER,
    )


def horse_to_db(horse: HorseProfile, user_id: str) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "name": horse.name,
        "breed": horse.breed or None,
        "age": horse.age,
        "coat_growth": horse.coat_growth,
        "cold_tolerance": horse.cold_tolerance,
        "is_clipped": horse.is_clipped,
        "is_senior": horse.is_senior,
        "is_thin_keeper": horse.is_thin_keeper,
        "is_foal": horse.is_foal,
        "shelter_access": horse.shelter_access or DEFAULT_SHELTER,
    }


def horse_updates_to_db(updates: HorseUpdate) -> Dict[str, Any]:
    """Only fields the caller explicitly set are written."""

    return dict(updates.model_dump(exclude_unset=True))


def blanket_from_db(row: Mapping[str, Any]) -> Blanket:
    return Blanket(
        id=str(row["id"]),
        name=row["name"],
        grams=int(row["grams"]),
        waterproof=bool(row["waterproof"]),
        color=row.get("color") or DEFAULT_BLANKET_COLOR,
        currently_on_horse_id=_optional_str(row.get("currently_on_horse_id")),
    )


def blanket_to_db(blanket: Blanket, user_id: str) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "name": blanket.name,
        "grams": _default(blanket.grams, 0),
        "waterproof": _default(blanket.waterproof, True),
        "color": blanket.color or DEFAULT_BLANKET_COLOR,
        "currently_on_horse_id": blanket.currently_on_horse_id or None,
    }


def blanket_updates_to_db(updates: BlanketUpdate) -> Dict[str, Any]:
    """Translate a blanket edit; marking it available unassigns it from its horse."""

    fields = updates.model_dump(exclude_unset=True)
    status = fields.pop("status", None)
    if status == "available":
        fields["currently_on_horse_id"] = None
    return fields


def liner_from_db(row: Mapping[str, Any]) -> Liner:
    return Liner(
        id=str(row["id"]),
        name=row["name"],
        grams=int(row["grams"]),
        color=row.get("color") or DEFAULT_LINER_COLOR,
        paired_with_blanket_id=_optional_str(row.get("paired_with_blanket_id")),
    )


def liner_to_db(liner: Liner, user_id: str) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "name": liner.name,
        "grams": _default(liner.grams, DEFAULT_LINER_GRAMS),
        "color": liner.color or DEFAULT_LINER_COLOR,
        "paired_with_blanket_id": liner.paired_with_blanket_id or None,
    }


def liner_updates_to_db(updates: LinerUpdate) -> Dict[str, Any]:
    return dict(updates.model_dump(exclude_unset=True))


def settings_from_db(row: Mapping[str, Any]) -> Settings:
    """Nest the flattened settings columns, filling unset columns with defaults."""

    return Settings(
        use_feels_like=bool(_default(row.get("use_feels_like"), True)),
        rain_priority=bool(_default(row.get("rain_priority"), True)),
        temp_buffer=_default(row.get("temp_buffer"), 0),
        liner=LinerSettings(
            include_in_recommendations=bool(_default(row.get("liner_include_in_recommendations"), True)),
            show_combined_weight=bool(_default(row.get("liner_show_combined_weight"), True)),
        ),
        notifications=NotificationSettings(
            blanket_change=bool(_default(row.get("notifications_blanket_change"), True)),
            severe_weather=bool(_default(row.get("notifications_severe_weather"), True)),
            daily_summary=bool(_default(row.get("notifications_daily_summary"), False)),
        ),
        show_confidence=bool(_default(row.get("show_confidence"), False)),
        current_blanket_id=_optional_str(row.get("current_blanket_id")),
        location_lat=row.get("location_lat"),
        location_lng=row.get("location_lng"),
        location_name=row.get("location_name"),
    )


def settings_to_db(settings: Settings) -> Dict[str, Any]:
    return {
        "use_feels_like": settings.use_feels_like,
        "rain_priority": settings.rain_priority,
        "temp_buffer": settings.temp_buffer,
        "liner_include_in_recommendations": settings.liner.include_in_recommendations,
        "liner_show_combined_weight": settings.liner.show_combined_weight,
        "notifications_blanket_change": settings.notifications.blanket_change,
        "notifications_severe_weather": settings.notifications.severe_weather,
        "notifications_daily_summary": settings.notifications.daily_summary,
        "show_confidence": settings.show_confidence,
        "current_blanket_id": settings.current_blanket_id,
        "location_lat": settings.location_lat,
        "location_lng": settings.location_lng,
        "location_name": settings.location_name,
    }


def settings_updates_to_db(updates: SettingsUpdate) -> Dict[str, Any]:
    return dict(updates.model_dump(exclude_unset=True))


__all__ = [
    "horse_from_db",
    "horse_to_db",
    "horse_updates_to_db",
    "blanket_from_db",
    "blanket_to_db",
    "blanket_updates_to_db",
    "liner_from_db",
    "liner_to_db",
    "liner_updates_to_db",
    "settings_from_db",
    "settings_to_db",
    "settings_updates_to_db",
]
