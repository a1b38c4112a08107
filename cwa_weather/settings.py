from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable runtime configuration for the API.

    Notes
    -----
    - Values are read once from environment variables (case-insensitive) and
      from an optional `.env` file in the working directory.
    - `cwa_api_key` may be unset at startup; the weather endpoint reports the
      misconfiguration per request instead of refusing to boot.
    - The instance is frozen: nothing mutates configuration after startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    cwa_api_base_url: str = "https://opendata.cwa.gov.tw/api"
    # "General forecast - 36 hours", keyed by county/city name
    cwa_dataset_id: str = "F-C0032-001"
    cwa_api_key: Optional[str] = None
    cwa_timeout: float = 20.0  # seconds, per upstream request

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, built on first use."""

    return Settings()
