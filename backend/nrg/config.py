"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from nrg.shared.constants import (
    TICK_INTERVAL_SECONDS,
    HOLD_DURATION_SECONDS,
    UNDO_WINDOW_SECONDS,
    GEL_TIME_THRESHOLD_SECONDS,
    HRV_LOW_THRESHOLD_MS,
    GEL_MIN_INTERVAL_SECONDS,
    DEFAULT_RESTING_VO2,
    DEFAULT_BODY_MASS_KG,
    DEFAULT_GEL_CALORIE_THRESHOLD_KCAL,
)


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Timing ===
    tick_interval_seconds: float = Field(default=TICK_INTERVAL_SECONDS, gt=0)
    hold_duration_seconds: float = Field(default=HOLD_DURATION_SECONDS, gt=0)
    undo_window_seconds: float = Field(default=UNDO_WINDOW_SECONDS, gt=0)

    # === Supplement policy ===
    gel_time_threshold_seconds: float = Field(
        default=GEL_TIME_THRESHOLD_SECONDS,
        gt=0,
        description="Seconds since last gel before a time-based alert"
    )
    hrv_low_threshold_ms: float = Field(default=HRV_LOW_THRESHOLD_MS, gt=0)
    gel_min_interval_seconds: float = Field(
        default=GEL_MIN_INTERVAL_SECONDS,
        ge=0,
        description="Minimum spacing between gels for the calorie rule"
    )
    test_mode: bool = Field(
        default=False,
        description="Use the 30s time threshold for on-device testing"
    )

    # === Athlete defaults ===
    default_resting_vo2: float = Field(default=DEFAULT_RESTING_VO2, gt=0)
    default_body_mass_kg: float = Field(default=DEFAULT_BODY_MASS_KG, gt=0)
    default_gel_calorie_threshold_kcal: int = Field(
        default=DEFAULT_GEL_CALORIE_THRESHOLD_KCAL,
        gt=0
    )

    # === Session ===
    preserve_last_supplement: bool = Field(
        default=False,
        description="Keep counting time since the last gel across sessions"
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
