from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Tuple

from crowdsafe.errors import InvalidInput
from crowdsafe.services.density import DensityEstimator
from crowdsafe.services.route_generator import CandidateRoute
from crowdsafe.utils.geo import Coordinate, is_near
from crowdsafe.utils.time import utc_now

SafetyLabel = Literal["SAFE", "MODERATE", "UNSAFE"]
ColorTier = Literal["green", "yellow", "red"]


# --- Scoring parameters ---
WEIGHT_DENSITY = 0.7
# Declared alongside the density weight but not part of the score formula.
WEIGHT_DISTANCE = 0.3

PENALTY_RESTRICTED = 0.9
RESTRICTED_THRESHOLD_DEG = 0.0002  # ~20 m

UNSAFE_BELOW = 40
SAFE_FROM = 75


@dataclass(frozen=True)
class SafetyAssessment:
    score: float
    label: SafetyLabel
    color: ColorTier
    density: float
    restricted: bool


def classify(score: float) -> Tuple[SafetyLabel, ColorTier]:
    if score < UNSAFE_BELOW:
        return "UNSAFE", "red"
    if score < SAFE_FROM:
        return "MODERATE", "yellow"
    return "SAFE", "green"


def touches_restricted_zone(
    geometry: Sequence[Coordinate],
    zones: Sequence[Coordinate],
    threshold_deg: float = RESTRICTED_THRESHOLD_DEG,
) -> bool:
    """True if any vertex sits inside the box of any zone. Existence only, not a count."""
    return any(
        is_near(point, zone, threshold_deg, threshold_deg)
        for point in geometry
        for zone in zones
    )


class SafetyScorer:
    def __init__(self, density: DensityEstimator, restricted_threshold_deg: float = RESTRICTED_THRESHOLD_DEG):
        self.density = density
        self.restricted_threshold_deg = restricted_threshold_deg

    def score(
        self,
        route: CandidateRoute,
        restricted_zones: Optional[Sequence[Coordinate]] = None,
        now: Optional[dt.datetime] = None,
    ) -> SafetyAssessment:
        if not route.geometry:
            raise InvalidInput(f"route {route.id} has no geometry to score")

        density = self.density.density_along_route(route.geometry, now or utc_now())

        penalty = 0.0
        if restricted_zones and touches_restricted_zone(route.geometry, restricted_zones, self.restricted_threshold_deg):
            penalty = PENALTY_RESTRICTED

        raw = 100 - (density * 100 * WEIGHT_DENSITY) - (penalty * 100)
        score = max(0.0, min(100.0, raw))
        label, color = classify(score)

        return SafetyAssessment(
            score=score,
            label=label,
            color=color,
            density=density,
            restricted=penalty > 0,
        )
