"""Configuration management for the JurisGuide cultural adaptation core."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    model_config = SettingsConfigDict(
        env_prefix="JURISGUIDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Application Configuration
    debug: bool = Field(False, description="Enable debug mode (console log rendering)")
    log_level: str = Field("INFO", description="Logging level")
    
    # Escalation Detection
    escalation_window_size: int = Field(
        10, gt=0, description="Number of most recent timeline events scanned for escalation"
    )
    rapid_exchange_threshold_ms: int = Field(
        300_000, gt=0, description="Gap between consecutive events counted as a rapid exchange"
    )


# Global settings instance
settings = Settings()
