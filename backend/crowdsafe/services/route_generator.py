from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

from crowdsafe.utils.geo import (
    METERS_PER_DEGREE,
    Coordinate,
    degree_distance,
    interpolate,
    parse_coordinate,
    parse_coordinates,
    point_in_polygon,
)
from crowdsafe.utils.ids import route_id
from crowdsafe.utils.time import utc_now

logger = logging.getLogger("crowdsafe.route_generator")


# --- Shaping parameters ---
VARIANT_COUNT = 5
INTERIOR_POINTS = 20
STRAIGHT_JITTER_DEG = 0.0002
CURVE_AMPLITUDE_DEG = 0.003
LNG_BIAS_SPAN_DEG = 0.005
WALKING_SPEED_MPS = 1.4

# (variant, interior index, point) for points outside the declared boundary
BoundaryObserver = Callable[[int, int, Coordinate], None]


class RandomSource(Protocol):
    def uniform(self) -> float:
        """Return a float in [0, 1)."""
        ...


class DefaultRandomSource:
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def uniform(self) -> float:
        return self._rng.random()


@dataclass(frozen=True)
class CandidateRoute:
    id: str
    geometry: Tuple[Coordinate, ...]
    distance_m: float
    duration_min: int

    @property
    def start(self) -> Coordinate:
        return self.geometry[0]

    @property
    def end(self) -> Coordinate:
        return self.geometry[-1]


class CandidateRouteGenerator:
    """Synthesizes distinct walking paths between two points without a road graph.

    Variant 0 is a jittered straight line; variants 1-4 bow to either side
    with amplitude proportional to ``i - 2`` plus a constant longitude offset
    drawn once per variant.

    Points are checked against the boundary polygon but never moved or
    dropped. Violations only reach ``boundary_observer`` and the debug log.
    """

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        boundary_observer: Optional[BoundaryObserver] = None,
    ):
        self.random = random_source or DefaultRandomSource()
        self.boundary_observer = boundary_observer

    def generate(
        self,
        start: Any,
        end: Any,
        boundary: Optional[Sequence[Any]] = None,
    ) -> List[CandidateRoute]:
        start = parse_coordinate(start, "start")
        end = parse_coordinate(end, "end")
        polygon = parse_coordinates(boundary, "boundary")

        distance_m = degree_distance(start, end) * METERS_PER_DEGREE
        duration_min = round(distance_m / WALKING_SPEED_MPS / 60)
        issued_at = utc_now()

        routes: List[CandidateRoute] = []
        for variant in range(VARIANT_COUNT):
            geometry = [start]
            geometry.extend(self._shape(variant, start, end, polygon))
            geometry.append(end)
            routes.append(
                CandidateRoute(
                    id=route_id(issued_at, variant),
                    geometry=tuple(geometry),
                    distance_m=distance_m,
                    duration_min=duration_min,
                )
            )
        return routes

    def _shape(
        self,
        variant: int,
        start: Coordinate,
        end: Coordinate,
        polygon: Tuple[Coordinate, ...],
    ) -> List[Coordinate]:
        lng_bias = 0.0
        if variant != 0:
            lng_bias = (self.random.uniform() - 0.5) * LNG_BIAS_SPAN_DEG

        points: List[Coordinate] = []
        outside = 0
        for j in range(1, INTERIOR_POINTS + 1):
            fraction = j / INTERIOR_POINTS
            lat, lng = interpolate(start, end, fraction)

            if variant == 0:
                lat += (self.random.uniform() - 0.5) * STRAIGHT_JITTER_DEG
                lng += (self.random.uniform() - 0.5) * STRAIGHT_JITTER_DEG
            else:
                deviation = math.sin(fraction * math.pi) * CURVE_AMPLITUDE_DEG * (variant - 2)
                lat += deviation * 0.5
                lng += deviation * 0.5 + lng_bias

            point = (lat, lng)
            if polygon and not point_in_polygon(point, polygon):
                outside += 1
                if self.boundary_observer is not None:
                    self.boundary_observer(variant, j, point)
            points.append(point)

        if outside:
            logger.debug("Variant %d has %d point(s) outside the boundary (kept)", variant, outside)
        return points
