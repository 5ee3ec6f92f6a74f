"""
Sensor fusion module.

Usage:
    from nrg.features.sensors import SensorSampleAggregator, SensorSnapshot

Components:
- SensorSnapshot: Latest value per channel (each optional)
- SensorSampleAggregator: Last-write-wins merge of partial updates
"""

from .models import SensorSnapshot
from .aggregator import SensorSampleAggregator
from .schemas import SensorUpdateRequest, SensorSnapshotSchema

__all__ = [
    # Models
    "SensorSnapshot",
    # Aggregator
    "SensorSampleAggregator",
    # Schemas
    "SensorUpdateRequest",
    "SensorSnapshotSchema",
]
