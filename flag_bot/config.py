"""Configuration settings using pydantic-settings."""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot (checked by run.py, empty is allowed for tests)
    BOT_TOKEN: str = Field(default="", description="Telegram Bot API token")

    # Country catalog
    COUNTRIES_API_URL: str = Field(
        default="https://restcountries.com/v3.1/all",
        description="REST Countries endpoint returning name and flags"
    )
    COUNTRIES_API_TIMEOUT: float = Field(default=20, description="Catalog request timeout in seconds")

    # Round pacing: shorter pause after a correct answer, longer after a miss
    CORRECT_DELAY: float = Field(default=0.9, description="Seconds before advancing after a correct pick")
    INCORRECT_DELAY: float = Field(default=1.2, description="Seconds before advancing after a wrong pick")

    # Chats kept in memory; the least recently used one is dropped beyond this
    MAX_SESSIONS: int = Field(default=1000, description="Maximum concurrent quiz sessions")

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
