import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Marios Brazil Concierge")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # providers
    OPENROUTER_API_KEY: str | None = None
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    TAVILY_API_KEY: str | None = None
    TAVILY_BASE_URL: str = "https://api.tavily.com"
    SEARCH_TIMEOUT_MS: int = 5000

    # knowledge config documents
    CONFIG_DIR: str = "config"
    MAIN_CONFIG: str = "main-config.yaml"
    SPECIFIC_CONFIG: str | None = "specific-config.yaml"

    # temporal context
    TEMPORAL_CONTEXT: bool = True
    TIMEZONE: str = "Europe/Rome"

    # dev: answer with the echo client instead of OpenRouter
    USE_ECHO: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
