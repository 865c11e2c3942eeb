from __future__ import annotations

from crowdsafe.config import settings
from crowdsafe.services.event_catalog import EventCatalog
from crowdsafe.services.routing_engine import CrowdRoutingEngine, build_engine

# Process-wide instances, created once at import (app startup)
_engine = build_engine(settings)
_catalog = EventCatalog(settings.event_catalog_path)


def get_engine() -> CrowdRoutingEngine:
    return _engine


def get_catalog() -> EventCatalog:
    return _catalog
