from typing import Literal, Tuple

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # ---- REST endpoint ----
    api_base_url: AnyHttpUrl = "http://localhost:8080/server/api"
    verify_ssl: bool = True
    request_timeout: float = 10.0

    # ---- retries (urllib3 Retry) ----
    total_retries: int = 3
    backoff_factor: float = 1.0
    status_forcelist: Tuple[int, ...] = (429, 500, 502, 503, 504)

    # ---- app/runtime ----
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Reject silent overwrites in the default metadata registry
    strict_registration: bool = False

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="HAL_",      # HAL_API_BASE_URL, HAL_LOG_LEVEL, etc.
        extra = "ignore"
    )


def get_settings() -> Settings:
    """Accessor so callers never construct Settings at import time."""
    return Settings()
