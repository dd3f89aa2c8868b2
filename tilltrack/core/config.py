"""
Core configuration settings for TillTrack application.
"""
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


STORAGE_BACKENDS = ("memory", "sql", "redis")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = "TillTrack"
    debug: bool = False
    api_v1_str: str = "/api/v1"

    # Storage
    storage_backend: str = "memory"
    database_url: str = "sqlite:///./tilltrack.db"

    # Redis
    redis_url: str = "redis://localhost:6379"
    redis_db: int = 0
    redis_key_prefix: str = "tilltrack"

    # Celery
    celery_broker_url: str = "redis://localhost:6379/1"
    celery_result_backend: str = "redis://localhost:6379/2"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Store operation
    opening_hour: int = 6
    closing_hour: int = 22  # inclusive
    store_timezone: Optional[str] = None  # None = system local time
    traffic_window_days: int = 7
    top_products_limit: int = 10

    # Demo data
    demo_enabled: bool = False
    demo_days: int = 14
    demo_seed: Optional[int] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v):
        if v not in STORAGE_BACKENDS:
            raise ValueError(f"Storage backend must be one of {', '.join(STORAGE_BACKENDS)}")
        return v

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v):
        if not v.startswith("redis://"):
            raise ValueError("Redis URL must start with redis://")
        return v

    @field_validator("store_timezone")
    @classmethod
    def validate_store_timezone(cls, v):
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @field_validator("traffic_window_days", "top_products_limit", "demo_days")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @model_validator(mode="after")
    def validate_operating_window(self):
        if not 0 <= self.opening_hour <= self.closing_hour <= 23:
            raise ValueError("Operating window must satisfy 0 <= opening_hour <= closing_hour <= 23")
        return self

    @property
    def operating_hours(self) -> range:
        """Hours of day reported by hourly analytics."""
        return range(self.opening_hour, self.closing_hour + 1)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
