from __future__ import annotations

import datetime as dt
from typing import Any, List, Optional

from crowdsafe.config import Settings
from crowdsafe.errors import InvalidInput
from crowdsafe.services.density import DensityEstimator
from crowdsafe.services.position_store import PositionStore
from crowdsafe.services.route_generator import BoundaryObserver, CandidateRouteGenerator, RandomSource
from crowdsafe.services.route_planner import EventConfig, RouteRankingPipeline, ScoredRoute
from crowdsafe.services.safety_scorer import SafetyScorer
from crowdsafe.utils.geo import parse_coordinate


class CrowdRoutingEngine:
    """Owns the position table and the ranking pipeline.

    One instance per process, created at startup and injected into the
    routers. Nothing is persisted: a restart forgets all tracked positions.
    """

    def __init__(
        self,
        store: Optional[PositionStore] = None,
        random_source: Optional[RandomSource] = None,
        boundary_observer: Optional[BoundaryObserver] = None,
        density_threshold_deg: Optional[float] = None,
        restricted_threshold_deg: Optional[float] = None,
        crowd_saturation: Optional[float] = None,
        result_cap: Optional[int] = None,
    ):
        self.store = store if store is not None else PositionStore()

        density_kwargs = {}
        if density_threshold_deg is not None:
            density_kwargs["threshold_deg"] = density_threshold_deg
        if crowd_saturation is not None:
            density_kwargs["saturation"] = crowd_saturation
        self.density = DensityEstimator(self.store, **density_kwargs)

        scorer_kwargs = {}
        if restricted_threshold_deg is not None:
            scorer_kwargs["restricted_threshold_deg"] = restricted_threshold_deg

        pipeline_kwargs = {}
        if result_cap is not None:
            pipeline_kwargs["result_cap"] = result_cap
        self.pipeline = RouteRankingPipeline(
            generator=CandidateRouteGenerator(random_source, boundary_observer),
            scorer=SafetyScorer(self.density, **scorer_kwargs),
            **pipeline_kwargs,
        )

    def update_location(self, entity_id: str, lat: Any, lng: Any, now: Optional[dt.datetime] = None) -> None:
        if not entity_id:
            raise InvalidInput("entity id is required")
        self.store.upsert(entity_id, parse_coordinate((lat, lng), "location"), now=now)

    def plan_routes(self, start: Any, end: Any, event_config: Optional[EventConfig] = None) -> List[ScoredRoute]:
        return self.pipeline.plan_routes(start, end, event_config)

    def density_at_point(self, lat: Any, lng: Any, now: Optional[dt.datetime] = None) -> int:
        return self.density.density_at_point(parse_coordinate((lat, lng), "point"), now=now)

    @property
    def tracked_count(self) -> int:
        return len(self.store)


def build_engine(settings: Settings, random_source: Optional[RandomSource] = None) -> CrowdRoutingEngine:
    return CrowdRoutingEngine(
        store=PositionStore(dt.timedelta(seconds=settings.position_staleness_s)),
        random_source=random_source,
        density_threshold_deg=settings.density_threshold_deg,
        restricted_threshold_deg=settings.restricted_threshold_deg,
        crowd_saturation=settings.crowd_saturation,
        result_cap=settings.route_result_cap,
    )
