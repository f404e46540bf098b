"""
LifeIndex Configuration
=======================
All environment variables in one place. Pydantic Settings validates
types at startup so a bad timezone or baseline fails at boot rather than
on the first scoring request.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Loaded from environment variables or a .env file."""

    # --- App settings ---
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]

    # --- Scoring ---
    # IANA zone used for "now" when a request does not pin a time.
    # Day progress and the morning labels depend on local wall-clock time.
    timezone: str = "UTC"

    # Personal recovery baselines, used when a request omits its own.
    hrv_baseline_ms: float = 50.0
    rhr_baseline_bpm: float = 62.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache
def get_settings() -> Settings:
    return Settings()
