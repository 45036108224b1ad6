"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

from typing import Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from logic.daily_schedule import get_daily_schedule
from logic.recommendation_engine import get_recommendation
from logic.thresholds import calculate_thresholds
from models.recommendation import Recommendation, ScheduleBlock


def _evaluate_recommendation(expectations: Dict[str, object], scenario: EvaluationScenario, rec: Recommendation) -> Dict[str, bool]:
    checks: Dict[str, bool] = {}
    if "thresholds" in expectations:
        thresholds = calculate_thresholds(scenario.horse, scenario.settings)
        checks["thresholds"] = thresholds.boundaries() == tuple(float(v) for v in expectations["thresholds"])
    for key in ("weight_needed", "grams_needed", "needs_waterproof", "needs_neck_rug", "combined_grams"):
        if key in expectations:
            checks[key] = getattr(rec, key) == expectations[key]
    if expectations.get("requires_waterproof_blanket"):
        checks["requires_waterproof_blanket"] = rec.recommended_blanket is not None and rec.recommended_blanket.waterproof
    if expectations.get("no_blanket"):
        checks["no_blanket"] = rec.recommended_blanket is None and rec.recommended_liner is None
    checks["confidence_in_range"] = 50 <= rec.confidence <= 99
    return checks


def _evaluate_schedule(expectations: Dict[str, object], blocks: List[ScheduleBlock]) -> Dict[str, bool]:
    checks: Dict[str, bool] = {"four_blocks": len(blocks) == 4}
    if "current_block" in expectations:
        current = [block.icon_type for block in blocks if block.current]
        checks["current_block"] = current == [expectations["current_block"]]
    if "block_temps" in expectations:
        checks["block_temps"] = [(block.temp, block.feels_like) for block in blocks] == expectations["block_temps"]
    return checks


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    recommendation = get_recommendation(
        scenario.weather, scenario.horse, scenario.settings, scenario.blankets, scenario.liners
    )
    checks = _evaluate_recommendation(scenario.expectations, scenario, recommendation)
    if scenario.hour is not None:
        blocks = get_daily_schedule(
            scenario.weather, scenario.horse, scenario.settings, scenario.blankets, scenario.liners, hour=scenario.hour
        )
        checks.update(_evaluate_schedule(scenario.expectations, blocks))
    return {
        "scenario": scenario.name,
        "passed": all(checks.values()),
        "checks": checks,
        "recommendation": recommendation,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
