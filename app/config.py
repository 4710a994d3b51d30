"""
Service configuration loaded from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    LOG_LEVEL: str = "INFO"

    # Populate the in-memory store with deterministic data on startup
    SEED_ON_STARTUP: bool = True

    # Number of best-selling products reported per seller
    TOP_PRODUCTS_LIMIT: int = 10


settings = Settings()
