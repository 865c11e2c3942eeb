from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class EventOut(BaseModel):
    event_id: str
    name: str
    boundary: List[List[float]] = Field(default_factory=list)
    restricted_zones: List[List[float]] = Field(default_factory=list)
