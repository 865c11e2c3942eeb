from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from crowdsafe.deps import get_engine
from crowdsafe.errors import InvalidInput
from crowdsafe.schemas.routing import DensityOut, LocationAck, LocationUpdate
from crowdsafe.services.routing_engine import CrowdRoutingEngine
from crowdsafe.utils.ids import new_id

router = APIRouter()


@router.post("/realtime/location", response_model=LocationAck, response_model_by_alias=True)
def update_location(payload: LocationUpdate, engine: CrowdRoutingEngine = Depends(get_engine)):
    """Record the latest position of an attendee. Anonymous callers get a generated id."""
    tracking_id = payload.user_id or new_id("anon")
    try:
        engine.update_location(tracking_id, payload.lat, payload.lng)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    return LocationAck(tracking_id=tracking_id)


@router.get("/realtime/density", response_model=DensityOut)
def density(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    engine: CrowdRoutingEngine = Depends(get_engine),
):
    try:
        count = engine.density_at_point(lat, lng)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DensityOut(lat=lat, lng=lng, count=count)
