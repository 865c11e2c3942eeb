from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import yaml

from crowdsafe.errors import InvalidInput
from crowdsafe.services.route_planner import EventConfig
from crowdsafe.utils.geo import Coordinate, parse_coordinates

logger = logging.getLogger("crowdsafe.events")

DEFAULT_CATALOG_PATH = pathlib.Path(__file__).resolve().parent.parent / "catalog" / "event_catalog.yaml"


@dataclass(frozen=True)
class EventInfo:
    event_id: str
    name: str
    boundary: Tuple[Coordinate, ...] = ()
    restricted_zones: Tuple[Coordinate, ...] = ()

    @property
    def config(self) -> EventConfig:
        return EventConfig(boundary=self.boundary, restricted_zones=self.restricted_zones)


class EventCatalog:
    """Read-only event map configuration, loaded once from YAML.

    Expected document::

        events:
          - event_id: riverside-fest
            name: Riverside Festival
            boundary: [[lat, lng], ...]
            restricted_zones: [[lat, lng], ...]
    """

    def __init__(self, path: Optional[str | pathlib.Path] = None):
        self.path = pathlib.Path(path) if path else DEFAULT_CATALOG_PATH
        self._events: Dict[str, EventInfo] = self._load()

    def _load(self) -> Dict[str, EventInfo]:
        if not self.path.exists():
            logger.warning("Event catalog not found at %s; no events configured", self.path)
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            doc = yaml.safe_load(f) or {}

        events: Dict[str, EventInfo] = {}
        for raw in doc.get("events", []) or []:
            event_id = str(raw.get("event_id") or "").strip()
            if not event_id:
                raise InvalidInput(f"event without event_id in {self.path}")
            events[event_id] = EventInfo(
                event_id=event_id,
                name=raw.get("name", event_id),
                boundary=parse_coordinates(raw.get("boundary"), f"{event_id}.boundary"),
                restricted_zones=parse_coordinates(raw.get("restricted_zones"), f"{event_id}.restricted_zones"),
            )
        logger.info("Loaded %d event(s) from %s", len(events), self.path)
        return events

    def list(self) -> List[EventInfo]:
        return list(self._events.values())

    def get(self, event_id: str) -> Optional[EventInfo]:
        return self._events.get(event_id)

    def config_for(self, event_id: str) -> Optional[EventConfig]:
        event = self.get(event_id)
        return event.config if event else None
