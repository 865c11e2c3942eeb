from __future__ import annotations

import datetime as dt
from typing import Optional, Sequence

from crowdsafe.services.position_store import PositionStore
from crowdsafe.utils.geo import Coordinate
from crowdsafe.utils.time import utc_now

POINT_DENSITY_THRESHOLD_DEG = 0.0005  # ~50 m
CROWD_SATURATION = 5.0  # entities per sample treated as maximally crowded
MAX_ROUTE_SAMPLES = 10


class DensityEstimator:
    """Turns raw position counts into a coarse 0..1 crowding signal."""

    def __init__(
        self,
        store: PositionStore,
        threshold_deg: float = POINT_DENSITY_THRESHOLD_DEG,
        saturation: float = CROWD_SATURATION,
    ):
        self.store = store
        self.threshold_deg = threshold_deg
        self.saturation = saturation

    def density_at_point(self, point: Coordinate, now: Optional[dt.datetime] = None) -> int:
        return self.store.count_near(point, self.threshold_deg, self.threshold_deg, now=now)

    def density_along_route(self, geometry: Optional[Sequence[Coordinate]], now: Optional[dt.datetime] = None) -> float:
        """Average crowd count over at most ~10 evenly strided vertices, scaled to [0, 1].

        Each lookup is a full scan of the store, so sampling keeps the cost
        per route constant regardless of geometry resolution.
        """
        if not geometry:
            return 0.0

        now = now or utc_now()
        stride = max(1, len(geometry) // MAX_ROUTE_SAMPLES)
        samples = geometry[::stride]
        total = sum(self.density_at_point(point, now) for point in samples)
        average = total / len(samples)
        return min(average / self.saturation, 1.0)
