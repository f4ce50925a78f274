"""
Configuration settings for parameterized retry runs.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Parameterized Retry"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON

    # === Retry Policy Defaults ===
    DEFAULT_REPEATS: int = 3  # Max attempts per parameter tuple
    DEFAULT_MIN_SUCCESS: int = 1  # Trailing successes that resolve a tuple

    # === Invocation Naming ===
    DEFAULT_NAME_PATTERN: str = "[{index}] {arguments}"
    DISAMBIGUATE_ATTEMPTS: bool = True  # Append "(attempt N)" to retried names

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
