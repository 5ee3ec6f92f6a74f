"""
Sensor schemas.

Pydantic models for the inbound sensor channel.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .models import SensorSnapshot


class SensorUpdateRequest(BaseModel):
    """Partial sensor sample. Every field is optional."""
    distance_meters: Optional[float] = Field(default=None, description="Cumulative distance")
    speed_mps: Optional[float] = Field(default=None, description="Current speed (m/s)")
    elevation_delta_floors: Optional[float] = Field(
        default=None,
        description="Floors ascended minus floors descended"
    )
    hrv_ms: Optional[float] = None
    heart_rate_bpm: Optional[float] = None
    vo2_max: Optional[float] = None

    def to_snapshot(self) -> SensorSnapshot:
        return SensorSnapshot(
            distance_meters=self.distance_meters,
            speed_mps=self.speed_mps,
            elevation_delta_floors=self.elevation_delta_floors,
            hrv_ms=self.hrv_ms,
            heart_rate_bpm=self.heart_rate_bpm,
            vo2_max=self.vo2_max,
        )


class SensorSnapshotSchema(BaseModel):
    """Current merged snapshot."""
    distance_meters: Optional[float] = None
    speed_mps: Optional[float] = None
    elevation_delta_floors: Optional[float] = None
    hrv_ms: Optional[float] = None
    heart_rate_bpm: Optional[float] = None
    vo2_max: Optional[float] = None
