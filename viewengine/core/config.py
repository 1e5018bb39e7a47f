# File: /viewengine/core/config.py | Version: 1.3 | Title: Central App Settings (Pydantic v2)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Database View Engine"

    # --- Request limits ---
    MAX_SNAPSHOT_ROWS: int = 50_000  # larger snapshots are rejected with 413

    # --- API behavior toggles ---
    ENABLE_STD_ERRORS: bool = (
        False  # set True in .env to enable standardized error responses
    )

    # v2-style config
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
