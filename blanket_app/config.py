"""Configuration helpers for the blanket advisor app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Dict, Optional

DEFAULT_DATABASE_PATH = "data/stable.db"
DEFAULT_CONFIG_DIR = "config/environments"

# Madison, WI; used until the owner saves a location.
DEFAULT_LATITUDE = 43.0731
DEFAULT_LONGITUDE = -89.4012
DEFAULT_LOCATION_NAME = "Madison, WI"


@dataclass
class AppConfig:
    """Configuration values for the app.

    The recommendation engine itself takes no configuration; these values wire
    up the collaborators around it (storage, weather, push delivery).
    """

    database_path: str = DEFAULT_DATABASE_PATH
    default_latitude: float = DEFAULT_LATITUDE
    default_longitude: float = DEFAULT_LONGITUDE
    default_location_name: str = DEFAULT_LOCATION_NAME
    weather_timeout_seconds: float = 10.0
    weather_max_retries: int = 3
    weather_initial_delay_seconds: float = 1.0
    push_app_id: Optional[str] = None
    push_api_key: Optional[str] = None
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables over an optional env file.

        ``APP_CONFIG_PATH`` names a file directly; otherwise ``APP_ENV`` selects
        ``<APP_CONFIG_DIR>/<env>.yaml``. Upper-cased environment variables win
        over file values so secrets can be injected at runtime.
        """

        env_name = os.getenv("APP_ENV")
        path = cls._config_path(env_name)
        file_values = cls._load_yaml_config(path) if path and path.exists() else {}

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(key.upper(), file_values.get(key, default))

        defaults = cls()
        return cls(
            database_path=get_value("database_path", defaults.database_path),
            default_latitude=float(get_value("default_latitude", str(defaults.default_latitude))),
            default_longitude=float(get_value("default_longitude", str(defaults.default_longitude))),
            default_location_name=get_value("default_location_name", defaults.default_location_name),
            weather_timeout_seconds=float(get_value("weather_timeout_seconds", str(defaults.weather_timeout_seconds))),
            weather_max_retries=int(get_value("weather_max_retries", str(defaults.weather_max_retries))),
            weather_initial_delay_seconds=float(
                get_value("weather_initial_delay_seconds", str(defaults.weather_initial_delay_seconds))
            ),
            push_app_id=get_value("onesignal_app_id"),
            push_api_key=get_value("onesignal_rest_api_key"),
            environment=env_name,
        )

    @staticmethod
    def _config_path(env_name: Optional[str]) -> Optional[Path]:
        explicit = os.getenv("APP_CONFIG_PATH")
        if explicit:
            return Path(explicit)
        if env_name:
            return Path(os.getenv("APP_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
        return None

    @staticmethod
    def _load_yaml_config(path: Path) -> Dict[str, str]:
        """Read flat ``key: value`` lines; nesting and lists are not supported."""

        values: Dict[str, str] = {}
        for raw_line in path.read_text().splitlines():
            line = raw_line.split(" #", 1)[0].strip()
            if not line or line.startswith("#") or ":" not in line:
                continue
            key, _, value = line.partition(":")
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
                value = value[1:-1]
            values[key.strip()] = value
        return values


__all__ = ["AppConfig"]
