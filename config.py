"""Runtime settings read from the environment or a local ``.env`` file."""
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- External valuation service ---
    REALESTATE_API_URL: str = "http://localhost:8000/api/v1/analysis"
    REQUEST_TIMEOUT_S: float = 30.0

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"
    SHOW_TEST_DATA_BUTTON: bool = True  # ignored when ENV=prod


settings = Settings()
