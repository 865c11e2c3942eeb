from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

LatLng = List[float]


class LocationUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId", max_length=200)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class LocationAck(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    tracking_id: str = Field(..., alias="trackingId")


class DensityOut(BaseModel):
    lat: float
    lng: float
    count: int


class EventConfigIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    boundary: Optional[List[LatLng]] = None
    restricted_zones: Optional[List[LatLng]] = Field(None, alias="restrictedZones")


class RouteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: LatLng
    end: LatLng
    event_id: Optional[str] = Field(None, alias="eventId")
    # Inline configuration takes precedence over event_id
    event_config: Optional[EventConfigIn] = Field(None, alias="eventConfig")


class SafetyDetails(BaseModel):
    density: float
    restricted: bool


class SafetyOut(BaseModel):
    score: float
    label: Literal["SAFE", "MODERATE", "UNSAFE"]
    color: Literal["green", "yellow", "red"]
    details: SafetyDetails


class ScoredRouteOut(BaseModel):
    id: str
    geometry: List[LatLng]
    distance: int  # meters
    duration: int  # minutes
    safety: SafetyOut
