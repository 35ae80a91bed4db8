"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.cwd() / "data"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WEALTHTRACK_",
        extra="ignore",
    )

    app_name: str = "Wealth Tracker"
    app_version: str = "0.1.0"

    # Data directory (database lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Valuation
    base_currency: str = "EUR"
    default_tolerance_pct: float = 2.0

    # Rate cache TTL (5 minutes)
    rate_cache_ttl_seconds: int = 300

    # Price oracle: "coinmarketcap", "yahoo" or "stub"
    price_oracle: str = "coinmarketcap"
    oracle_request_delay_seconds: float = 1.0
    oracle_timeout_seconds: float = 30.0
    cmc_api_key: str = ""
    cmc_base_url: str = "https://pro-api.coinmarketcap.com"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "wealthtrack.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
