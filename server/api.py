"""FastAPI server exposing the blanket recommendation engine."""

from dataclasses import asdict
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from blanket_app.app import BlanketAdvisorApp, HorseNotFoundError
from blanket_app.logging_config import configure_logging, get_logger
from logic.daily_schedule import get_daily_schedule
from logic.recommendation_engine import get_recommendation
from logic.validation import (
    BlanketInput,
    HorseInput,
    LinerInput,
    SettingsInput,
    ValidationResult,
    WeatherInput,
)
from tools.weather_provider import WeatherProviderError

configure_logging()

LOGGER = get_logger(__name__)
app = FastAPI(title="Blanket Advisor", version="0.1.0")


class RecommendationRequest(BaseModel):
    """Everything the engine needs, supplied inline by the caller."""

    weather: WeatherInput
    horse: HorseInput
    settings: SettingsInput = Field(default_factory=SettingsInput)
    blankets: List[BlanketInput] = Field(default_factory=list)
    liners: List[LinerInput] = Field(default_factory=list)


class ScheduleRequest(RecommendationRequest):
    hour: Optional[int] = Field(None, ge=0, le=23, description="Wall-clock hour; defaults to server time")


@app.exception_handler(RequestValidationError)
async def invalid_payload(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    LOGGER.warning("Rejected invalid payload", extra={"error_count": len(details)})
    body = ValidationResult(message="Request payload failed validation", details=details)
    return JSONResponse(status_code=400, content=body.model_dump())


@lru_cache(maxsize=1)
def get_advisor() -> BlanketAdvisorApp:
    """Build the stored-stable app once per process."""

    return BlanketAdvisorApp()


def _engine_inputs(request: RecommendationRequest):
    blankets = [item.to_blanket(blanket_id=item.id or f"blanket-{index}") for index, item in enumerate(request.blankets)]
    liners = [item.to_liner(liner_id=item.id or f"liner-{index}") for index, item in enumerate(request.liners)]
    return (
        request.weather.to_reading(),
        request.horse.to_profile(),
        request.settings.to_settings(),
        blankets,
        liners,
    )


def _recommendation_payload(recommendation, show_confidence: bool) -> dict:
    payload = asdict(recommendation)
    if not show_confidence:
        payload["confidence"] = None
    return payload


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {"status": "ok", "service": "blanket-advisor"}


@app.post("/recommendation")
async def recommend(request: RecommendationRequest) -> dict:
    """Return the recommendation for a single weather reading."""

    weather, horse, settings, blankets, liners = _engine_inputs(request)
    recommendation = get_recommendation(weather, horse, settings, blankets, liners)
    LOGGER.info(
        "Recommendation served",
        extra={"weight_needed": recommendation.weight_needed, "confidence": recommendation.confidence},
    )
    return _recommendation_payload(recommendation, settings.show_confidence)


@app.post("/schedule")
async def schedule(request: ScheduleRequest) -> dict:
    """Return the four time-of-day blocks for today."""

    weather, horse, settings, blankets, liners = _engine_inputs(request)
    blocks = get_daily_schedule(weather, horse, settings, blankets, liners, hour=request.hour)
    return {"blocks": [asdict(block) for block in blocks]}


@app.get("/users/{user_id}/horses/{horse_id}/recommendation")
def stored_recommendation(
    user_id: str, horse_id: str, advisor: BlanketAdvisorApp = Depends(get_advisor)
) -> dict:
    """Recommend for a stored horse using live weather at the owner's location."""

    try:
        recommendation = advisor.recommend_for_horse(user_id, horse_id)
    except HorseNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except WeatherProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    settings = advisor.store.get_settings(user_id)
    return _recommendation_payload(recommendation, settings.show_confidence)


@app.get("/users/{user_id}/horses/{horse_id}/schedule")
def stored_schedule(
    user_id: str, horse_id: str, hour: Optional[int] = None, advisor: BlanketAdvisorApp = Depends(get_advisor)
) -> dict:
    try:
        blocks = advisor.schedule_for_horse(user_id, horse_id, hour=hour)
    except HorseNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except WeatherProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"blocks": [asdict(block) for block in blocks]}


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
