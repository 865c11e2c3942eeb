from __future__ import annotations

import math
from numbers import Real
from typing import Any, Optional, Sequence, Tuple

from crowdsafe.errors import InvalidInput

# (lat, lng) in decimal degrees
Coordinate = Tuple[float, float]

# Flat-earth approximation, valid at city scale only.
METERS_PER_DEGREE = 111000.0


def parse_coordinate(value: Any, name: str = "coordinate") -> Coordinate:
    """Validate a ``[lat, lng]`` pair and return it as a float tuple."""
    if value is None:
        raise InvalidInput(f"{name} is required")
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
        raise InvalidInput(f"{name} must be a [lat, lng] pair, got {value!r}")
    parts = []
    for axis in value:
        # bool is a Real subclass; reject it explicitly
        if isinstance(axis, bool) or not isinstance(axis, Real):
            raise InvalidInput(f"{name} must be numeric, got {value!r}")
        f = float(axis)
        if not math.isfinite(f):
            raise InvalidInput(f"{name} must be finite, got {value!r}")
        parts.append(f)
    return (parts[0], parts[1])


def parse_coordinates(values: Optional[Sequence[Any]], name: str) -> Tuple[Coordinate, ...]:
    if not values:
        return ()
    return tuple(parse_coordinate(v, f"{name}[{i}]") for i, v in enumerate(values))


def is_near(a: Coordinate, b: Coordinate, lat_threshold: float, lng_threshold: float) -> bool:
    """Axis-aligned degree box test, not a radius."""
    return abs(a[0] - b[0]) < lat_threshold and abs(a[1] - b[1]) < lng_threshold


def interpolate(start: Coordinate, end: Coordinate, fraction: float) -> Coordinate:
    return (
        start[0] + (end[0] - start[0]) * fraction,
        start[1] + (end[1] - start[1]) * fraction,
    )


def degree_distance(a: Coordinate, b: Coordinate) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def point_in_polygon(point: Coordinate, polygon: Sequence[Coordinate]) -> bool:
    """Even-odd ray casting. An empty polygon means no restriction."""
    if not polygon:
        return True

    x, y = point
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside
