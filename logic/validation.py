"""Pydantic schemas and helpers for validating horse, inventory and settings payloads.

Payloads arrive camelCase from clients; the aliases map them onto the
snake_case field names used throughout the package.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from models.horse import HorseProfile
from models.inventory import DEFAULT_BLANKET_COLOR, DEFAULT_LINER_COLOR, DEFAULT_LINER_GRAMS, Blanket, Liner
from models.settings import LinerSettings, NotificationSettings, Settings
from models.weather import WeatherReading

ShelterAccess = Literal["stall", "run-in", "trees", "none"]
Condition = Literal["clear", "partly-cloudy", "cloudy", "rain", "snow"]
HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HorseInput(_CamelModel):
    """Input contract for creating a horse."""

    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=100)
    breed: Optional[str] = Field(default=None, max_length=100)
    age: Optional[int] = Field(default=None, ge=0, le=50)
    coat_growth: float = Field(default=50, ge=0, le=100)
    cold_tolerance: float = Field(default=50, ge=0, le=100)
    is_clipped: bool = False
    is_senior: bool = False
    is_thin_keeper: bool = False
    is_foal: bool = False
    shelter_access: Optional[ShelterAccess] = "run-in"

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Horse name is required")
        return stripped

    def to_profile(self) -> HorseProfile:
        return HorseProfile(
            id=self.id,
            name=self.name,
            breed=self.breed,
            age=self.age,
            coat_growth=self.coat_growth,
            cold_tolerance=self.cold_tolerance,
            is_clipped=self.is_clipped,
            is_senior=self.is_senior,
            is_thin_keeper=self.is_thin_keeper,
            is_foal=self.is_foal,
            shelter_access=self.shelter_access or "run-in",
        )


class HorseUpdate(_CamelModel):
    """Partial horse edit; unset fields are left untouched."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    breed: Optional[str] = Field(default=None, max_length=100)
    age: Optional[int] = Field(default=None, ge=0, le=50)
    coat_growth: Optional[float] = Field(default=None, ge=0, le=100)
    cold_tolerance: Optional[float] = Field(default=None, ge=0, le=100)
    is_clipped: Optional[bool] = None
    is_senior: Optional[bool] = None
    is_thin_keeper: Optional[bool] = None
    is_foal: Optional[bool] = None
    shelter_access: Optional[ShelterAccess] = None


class BlanketInput(_CamelModel):
    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=100)
    grams: int = Field(ge=0, le=500)
    waterproof: bool = True
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    currently_on_horse_id: Optional[str] = None

    def to_blanket(self, blanket_id: str | None = None) -> Blanket:
        return Blanket(
            id=str(blanket_id or self.id or self.name),
            name=self.name.strip(),
            grams=self.grams,
            waterproof=self.waterproof,
            color=self.color or DEFAULT_BLANKET_COLOR,
            currently_on_horse_id=self.currently_on_horse_id,
        )


class BlanketUpdate(_CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    grams: Optional[int] = Field(default=None, ge=0, le=500)
    waterproof: Optional[bool] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    currently_on_horse_id: Optional[str] = None
    status: Optional[Literal["available", "in-use"]] = None


class LinerInput(_CamelModel):
    id: Optional[str] = None
    name: str = Field(min_length=1, max_length=100)
    grams: int = Field(default=DEFAULT_LINER_GRAMS, ge=0, le=500)
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    paired_with_blanket_id: Optional[str] = None

    def to_liner(self, liner_id: str | None = None) -> Liner:
        return Liner(
            id=str(liner_id or self.id or self.name),
            name=self.name.strip(),
            grams=self.grams,
            color=self.color or DEFAULT_LINER_COLOR,
            paired_with_blanket_id=self.paired_with_blanket_id,
        )


class LinerUpdate(_CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    grams: Optional[int] = Field(default=None, ge=0, le=500)
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    paired_with_blanket_id: Optional[str] = None


class Coordinates(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class LinerSettingsInput(_CamelModel):
    include_in_recommendations: bool = True
    show_combined_weight: bool = True


class NotificationSettingsInput(_CamelModel):
    blanket_change: bool = True
    severe_weather: bool = True
    daily_summary: bool = False


class SettingsInput(_CamelModel):
    """Full settings document as the engine consumes it."""

    use_feels_like: bool = True
    rain_priority: bool = True
    temp_buffer: float = Field(default=0, ge=0, le=15)
    liner: LinerSettingsInput = Field(default_factory=LinerSettingsInput)
    notifications: NotificationSettingsInput = Field(default_factory=NotificationSettingsInput)
    show_confidence: bool = True
    current_blanket_id: Optional[str] = None
    location_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    location_lng: Optional[float] = Field(default=None, ge=-180, le=180)
    location_name: Optional[str] = Field(default=None, max_length=200)

    def to_settings(self) -> Settings:
        return Settings(
            use_feels_like=self.use_feels_like,
            rain_priority=self.rain_priority,
            temp_buffer=self.temp_buffer,
            liner=LinerSettings(**self.liner.model_dump()),
            notifications=NotificationSettings(**self.notifications.model_dump()),
            show_confidence=self.show_confidence,
            current_blanket_id=self.current_blanket_id,
            location_lat=self.location_lat,
            location_lng=self.location_lng,
            location_name=self.location_name,
        )


class SettingsUpdate(_CamelModel):
    location_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    location_lng: Optional[float] = Field(default=None, ge=-180, le=180)
    location_name: Optional[str] = Field(default=None, max_length=200)
    use_feels_like: Optional[bool] = None
    rain_priority: Optional[bool] = None
    temp_buffer: Optional[float] = Field(default=None, ge=0, le=15)
    show_confidence: Optional[bool] = None
    current_blanket_id: Optional[str] = None


class WeatherInput(_CamelModel):
    temp: int
    feels_like: int
    wind: int = Field(ge=0)
    precip_chance: int = Field(ge=0, le=100)
    tonight_low: int
    condition: Condition = "clear"
    humidity: Optional[int] = Field(default=None, ge=0, le=100)

    def to_reading(self) -> WeatherReading:
        return WeatherReading(**self.model_dump())


class ValidationOutcome(BaseModel):
    """Result of :func:`validate`; ``data`` is set on success, ``error`` otherwise."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def _first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = str(first.get("msg", "Validation failed"))
        return f"{location}: {message}" if location else message
    return "Validation failed"


def validate(schema: type[BaseModel], data: Any) -> ValidationOutcome:
    """Validate ``data`` against ``schema`` without raising."""

    try:
        return ValidationOutcome(success=True, data=schema.model_validate(data))
    except ValidationError as exc:
        return ValidationOutcome(success=False, error=_first_error_message(exc))


def validate_or_raise(schema: type[BaseModel], data: Any) -> BaseModel:
    """Validate and raise ``ValueError`` with the first error message if invalid."""

    outcome = validate(schema, data)
    if not outcome.success:
        raise ValueError(outcome.error)
    return outcome.data


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False)).model_dump()


__all__ = [
    "HorseInput",
    "HorseUpdate",
    "BlanketInput",
    "BlanketUpdate",
    "LinerInput",
    "LinerUpdate",
    "Coordinates",
    "SettingsInput",
    "SettingsUpdate",
    "WeatherInput",
    "ValidationOutcome",
    "ValidationResult",
    "validate",
    "validate_or_raise",
    "validation_failure",
]
