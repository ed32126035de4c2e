"""Application configuration."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_env: str = "development"
    log_level: str = "INFO"

    # Store (in-memory SQLite, one connection per store)
    database_url: str = "sqlite://"
    seed_demo_data: bool = False

    # Dashboard / reports
    dashboard_recent_trips: int = 5
    display_timezone: str = "Asia/Kolkata"
    currency_code: str = "INR"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.app_env == "testing"

    def validate_required_settings(self) -> list[str]:
        """
        Validate that all settings hold usable values.

        Returns:
            List of missing or invalid settings
        """
        errors = []

        if not self.database_url.startswith("sqlite"):
            errors.append("DATABASE_URL must point at SQLite; the store is in-memory only")

        if self.dashboard_recent_trips <= 0:
            errors.append("dashboard_recent_trips must be positive")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"LOG_LEVEL is not a logging level: {self.log_level}")

        return errors


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
