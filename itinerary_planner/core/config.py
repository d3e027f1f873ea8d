# core/config.py

from __future__ import annotations

import os
from dataclasses import dataclass

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"

_ENV_NAMES = {
    "gemini_api_key": "GEMINI_API_KEY",
    "brave_api_key": "BRAVE_SEARCH_API_KEY",
}


@dataclass(frozen=True)
class Settings:
    """
    Everything the clients need, read once at startup.

    Entry points call ``load_dotenv()`` and then ``Settings.from_env()``;
    clients receive the instance and never touch ``os.environ`` themselves.
    """

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    brave_api_key: str = ""
    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    search_url: str = SEARCH_URL
    http_timeout: float = 10.0
    forecast_days: int = 16
    search_result_count: int = 5
    max_search_rounds: int = 6
    log_level: str = "WARNING"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            gemini_api_key=env.get("GEMINI_API_KEY", ""),
            gemini_model=env.get("GEMINI_MODEL", cls.gemini_model),
            brave_api_key=env.get("BRAVE_SEARCH_API_KEY", ""),
            geocoding_url=env.get("GEOCODING_URL", GEOCODING_URL),
            forecast_url=env.get("FORECAST_URL", FORECAST_URL),
            search_url=env.get("SEARCH_URL", SEARCH_URL),
            http_timeout=float(env.get("HTTP_TIMEOUT", cls.http_timeout)),
            forecast_days=int(env.get("FORECAST_DAYS", cls.forecast_days)),
            search_result_count=int(env.get("SEARCH_RESULT_COUNT", cls.search_result_count)),
            max_search_rounds=int(env.get("MAX_SEARCH_ROUNDS", cls.max_search_rounds)),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            api_host=env.get("API_HOST", cls.api_host),
            api_port=int(env.get("API_PORT", cls.api_port)),
        )

    def require(self, field_name: str) -> str:
        """Return a non-empty setting or fail the way a missing env var should."""
        value = getattr(self, field_name)
        if not value:
            env_name = _ENV_NAMES.get(field_name, field_name.upper())
            raise RuntimeError(f"Environment variable {env_name} is missing.")
        return value
