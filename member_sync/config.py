"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Adapter settings loaded from environment variables."""

    log_level: str = Field(default="INFO")

    # Slack
    slack_bot_token: str | None = Field(default=None)
    slack_page_size: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Members requested per conversations.members page",
    )
    removal_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Pause between successive removals to avoid rate limits",
    )

    # Opsgenie
    opsgenie_api_key: str | None = Field(default=None)
    opsgenie_api_url: str = Field(default="https://api.opsgenie.com")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
