"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from FORMGUARD_* environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Error region synthesis
    ERROR_REGION_TAG: str = "p"
    ERROR_LIVE_MODE: str = "assertive"

    # Write-back
    INVALID_CLASS: str = "is-invalid"

    # Message resolution
    GENERIC_ERROR_MESSAGE: str = "validation failed"

    model_config = {"env_prefix": "FORMGUARD_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
