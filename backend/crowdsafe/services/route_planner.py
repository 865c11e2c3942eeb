from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from crowdsafe.services.route_generator import CandidateRoute, CandidateRouteGenerator
from crowdsafe.services.safety_scorer import SafetyAssessment, SafetyScorer
from crowdsafe.utils.geo import Coordinate, parse_coordinate, parse_coordinates
from crowdsafe.utils.time import utc_now

logger = logging.getLogger("crowdsafe.route_planner")

RESULT_CAP = 3


@dataclass(frozen=True)
class EventConfig:
    """Per-event map configuration. Empty means unrestricted, nothing configured."""
    boundary: Tuple[Coordinate, ...] = ()
    restricted_zones: Tuple[Coordinate, ...] = ()

    @classmethod
    def from_raw(cls, boundary: Optional[Sequence[Any]] = None, restricted_zones: Optional[Sequence[Any]] = None) -> "EventConfig":
        return cls(
            boundary=parse_coordinates(boundary, "boundary"),
            restricted_zones=parse_coordinates(restricted_zones, "restricted_zones"),
        )


NO_CONFIG = EventConfig()


@dataclass(frozen=True)
class ScoredRoute:
    route: CandidateRoute
    safety: SafetyAssessment

    def to_dict(self) -> dict:
        return {
            "id": self.route.id,
            "geometry": [[lat, lng] for lat, lng in self.route.geometry],
            "distance": round(self.route.distance_m),
            "duration": self.route.duration_min,
            "safety": {
                "score": self.safety.score,
                "label": self.safety.label,
                "color": self.safety.color,
                "details": {
                    "density": self.safety.density,
                    "restricted": self.safety.restricted,
                },
            },
        }


@dataclass
class RouteRankingPipeline:
    """generate -> score -> rank -> truncate.

    Pure in-memory computation: any failure is an input or programming
    error and propagates immediately.
    """
    generator: CandidateRouteGenerator
    scorer: SafetyScorer
    result_cap: int = RESULT_CAP

    def plan_routes(self, start: Any, end: Any, event_config: Optional[EventConfig] = None) -> List[ScoredRoute]:
        start = parse_coordinate(start, "start")
        end = parse_coordinate(end, "end")
        config = event_config or NO_CONFIG

        candidates = self.generator.generate(start, end, boundary=config.boundary or None)

        now = utc_now()
        scored = [
            ScoredRoute(route=c, safety=self.scorer.score(c, config.restricted_zones, now=now))
            for c in candidates
        ]
        # sorted() is stable, and reverse=True keeps generation order among ties
        ranked = sorted(scored, key=lambda s: s.safety.score, reverse=True)[: self.result_cap]

        logger.info(
            "Planned %d/%d routes %s -> %s (best=%.1f %s)",
            len(ranked), len(candidates), start, end,
            ranked[0].safety.score if ranked else 0.0,
            ranked[0].safety.label if ranked else "-",
        )
        return ranked
