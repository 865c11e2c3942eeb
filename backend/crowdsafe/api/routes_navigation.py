from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from crowdsafe.deps import get_catalog, get_engine
from crowdsafe.errors import InvalidInput
from crowdsafe.schemas.routing import RouteRequest, ScoredRouteOut
from crowdsafe.services.event_catalog import EventCatalog
from crowdsafe.services.route_planner import EventConfig
from crowdsafe.services.routing_engine import CrowdRoutingEngine

logger = logging.getLogger("crowdsafe.api")
router = APIRouter()


@router.post("/navigation/routes", response_model=List[ScoredRouteOut])
def plan_routes(
    payload: RouteRequest,
    engine: CrowdRoutingEngine = Depends(get_engine),
    catalog: EventCatalog = Depends(get_catalog),
):
    """Return up to three candidate walking routes, safest first."""
    try:
        if payload.event_config is not None:
            config = EventConfig.from_raw(
                boundary=payload.event_config.boundary,
                restricted_zones=payload.event_config.restricted_zones,
            )
        elif payload.event_id:
            config = catalog.config_for(payload.event_id)
            if config is None:
                raise HTTPException(status_code=404, detail="event not found")
        else:
            config = None

        routes = engine.plan_routes(payload.start, payload.end, config)
    except InvalidInput as e:
        logger.info("Rejected route request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return [ScoredRouteOut(**r.to_dict()) for r in routes]
