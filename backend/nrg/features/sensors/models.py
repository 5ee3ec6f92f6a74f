"""
Sensor snapshot model.

A snapshot is the latest known value per channel. Every field is
independently optional: None means "never reported", not zero.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional


@dataclass(frozen=True)
class SensorSnapshot:
    """Latest reading per sensor channel."""
    distance_meters: Optional[float] = None
    speed_mps: Optional[float] = None
    elevation_delta_floors: Optional[float] = None   # ascended - descended
    hrv_ms: Optional[float] = None
    heart_rate_bpm: Optional[float] = None
    vo2_max: Optional[float] = None                  # ml/kg/min

    def present_fields(self) -> dict:
        """Channels carrying a value, as {name: value}."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def merged_with(self, update: "SensorSnapshot") -> "SensorSnapshot":
        """Return a copy with every present field of update applied."""
        present = update.present_fields()
        if not present:
            return self
        return replace(self, **present)

    @property
    def is_empty(self) -> bool:
        return not self.present_fields()

    def to_dict(self) -> dict:
        """Convert to dict for API response."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
