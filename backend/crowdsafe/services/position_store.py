from __future__ import annotations

import datetime as dt
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from crowdsafe.utils.geo import Coordinate, is_near
from crowdsafe.utils.time import utc_now

logger = logging.getLogger("crowdsafe.position_store")

STALENESS_WINDOW = dt.timedelta(minutes=5)


@dataclass(frozen=True)
class TrackedPosition:
    entity_id: str
    coordinate: Coordinate
    observed_at: dt.datetime


class PositionStore:
    """Latest known position per tracked entity.

    No history is kept: a later update overwrites the earlier one. Entries
    older than the staleness window are evicted lazily by ``count_near``;
    there is no background sweep. One lock guards both the write path and
    the whole evict+count scan, so readers never observe a half-evicted table.
    """

    def __init__(self, staleness_window: dt.timedelta = STALENESS_WINDOW):
        self.staleness_window = staleness_window
        self._positions: Dict[str, TrackedPosition] = {}
        self._lock = threading.Lock()

    def upsert(self, entity_id: str, coordinate: Coordinate, now: Optional[dt.datetime] = None) -> TrackedPosition:
        position = TrackedPosition(
            entity_id=entity_id,
            coordinate=(float(coordinate[0]), float(coordinate[1])),
            observed_at=now or utc_now(),
        )
        with self._lock:
            self._positions[entity_id] = position
        return position

    def count_near(
        self,
        point: Coordinate,
        lat_threshold: float,
        lng_threshold: float,
        now: Optional[dt.datetime] = None,
    ) -> int:
        now = now or utc_now()
        count = 0
        evicted = 0
        with self._lock:
            for entity_id, position in list(self._positions.items()):
                if now - position.observed_at > self.staleness_window:
                    del self._positions[entity_id]
                    evicted += 1
                    continue
                if is_near(position.coordinate, point, lat_threshold, lng_threshold):
                    count += 1
        if evicted:
            logger.debug("Evicted %d stale position(s)", evicted)
        return count

    def get(self, entity_id: str) -> Optional[TrackedPosition]:
        with self._lock:
            return self._positions.get(entity_id)

    def clear(self) -> None:
        with self._lock:
            self._positions.clear()

    def __len__(self) -> int:
        # Includes entries not yet evicted by a read
        with self._lock:
            return len(self._positions)
