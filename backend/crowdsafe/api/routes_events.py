from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from crowdsafe.deps import get_catalog
from crowdsafe.schemas.events import EventOut
from crowdsafe.services.event_catalog import EventCatalog, EventInfo

router = APIRouter()


def _to_out(e: EventInfo) -> EventOut:
    return EventOut(
        event_id=e.event_id,
        name=e.name,
        boundary=[list(p) for p in e.boundary],
        restricted_zones=[list(p) for p in e.restricted_zones],
    )


@router.get("/events", response_model=List[EventOut])
def list_events(catalog: EventCatalog = Depends(get_catalog)):
    return [_to_out(e) for e in catalog.list()]


@router.get("/events/{event_id}", response_model=EventOut)
def get_event(event_id: str, catalog: EventCatalog = Depends(get_catalog)):
    event = catalog.get(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="event not found")
    return _to_out(event)
