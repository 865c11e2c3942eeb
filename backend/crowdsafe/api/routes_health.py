from __future__ import annotations

import resource
import time

from fastapi import APIRouter, Depends

from crowdsafe.config import settings
from crowdsafe.deps import get_engine
from crowdsafe.services.routing_engine import CrowdRoutingEngine
from crowdsafe.utils.time import utc_now

router = APIRouter()

_started = time.monotonic()


@router.get("/health")
def health(engine: CrowdRoutingEngine = Depends(get_engine)):
    """Health check endpoint with tracking status."""
    return {
        "status": "ok",
        "service": "CrowdSafe API",
        "environment": settings.environment,
        "tracked_entities": engine.tracked_count,
        "version": "1.0.0",
    }


@router.get("/status")
def status():
    """Process diagnostics for dashboards."""
    usage = resource.getrusage(resource.RUSAGE_SELF)
    return {
        "server": "running",
        "uptime_s": round(time.monotonic() - _started, 3),
        "max_rss_kb": usage.ru_maxrss,  # kilobytes on Linux
        "timestamp": utc_now().isoformat(),
    }
