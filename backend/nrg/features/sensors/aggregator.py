"""
Sensor Sample Aggregator

Merges partial, independently-arriving sensor updates into a single
current-reading snapshot. Holds no policy logic.

Sources seen in practice:
- Pedometer: distance + speed + floors (together)
- HRV query: hrv only
- Heart rate query: heart rate only
- VO2 query: vo2 max only
"""

import logging
import threading
from typing import Optional

from .models import SensorSnapshot

logger = logging.getLogger(__name__)


class SensorSampleAggregator:
    """
    Last-write-wins merge of partial sensor updates, per field.

    Example:
        agg = SensorSampleAggregator()
        agg.apply_update(SensorSnapshot(distance_meters=120.0, speed_mps=3.1))
        agg.apply_update(SensorSnapshot(hrv_ms=58.0))
        agg.snapshot.distance_meters   # 120.0 (untouched by the HRV update)

    The snapshot is immutable and swapped atomically, so readers never
    see a half-applied update.
    """

    def __init__(self, lock: Optional[threading.RLock] = None):
        self._lock = lock or threading.RLock()
        self._snapshot = SensorSnapshot()

    @property
    def snapshot(self) -> SensorSnapshot:
        return self._snapshot

    def apply_update(self, update: SensorSnapshot) -> SensorSnapshot:
        """
        Merge present fields of update into the running snapshot.

        Args:
            update: Partial snapshot; None fields are skipped

        Returns:
            The resulting full snapshot
        """
        with self._lock:
            self._snapshot = self._snapshot.merged_with(update)
            return self._snapshot

    def reset(self) -> None:
        """Discard all readings (session stop/start)."""
        with self._lock:
            self._snapshot = SensorSnapshot()
        logger.debug("Sensor snapshot cleared")
