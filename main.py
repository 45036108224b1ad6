"""Simple entrypoint to print today's blanket advice for the demo horse."""

from logic.daily_schedule import get_daily_schedule
from logic.recommendation_engine import get_recommendation
from models.defaults import default_blankets, default_horse, default_liners, default_settings, default_weather


def main() -> None:
    horse = default_horse()
    weather = default_weather()
    settings = default_settings()
    blankets = default_blankets()
    liners = default_liners()

    recommendation = get_recommendation(weather, horse, settings, blankets, liners)
    blanket = recommendation.recommended_blanket
    print(f"{horse.name}: {recommendation.weight_needed} ({recommendation.grams_needed}g)")
    print(f"  Blanket: {blanket.name if blanket else 'none'}")
    print(f"  Confidence: {recommendation.confidence}%")
    print(f"  {recommendation.reasoning}")

    for block in get_daily_schedule(weather, horse, settings, blankets, liners):
        marker = "*" if block.current else " "
        print(f"{marker} {block.label:<18} {block.temp}°F (feels {block.feels_like}°F): {block.recommendation}")


if __name__ == "__main__":
    main()
