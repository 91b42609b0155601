"""Configuration management for CleanStream."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 7000
    debug: bool = False
    log_level: str = "INFO"

    # Skip resolution
    merge_gap_ms: int = 500
    warning_lead_ms: int = 3000


# Global settings instance
settings = Settings()
