from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crowdsafe.config import settings
from crowdsafe.observability.logging import configure_logging
from crowdsafe.api.routes_health import router as health_router
from crowdsafe.api.routes_realtime import router as realtime_router
from crowdsafe.api.routes_navigation import router as navigation_router
from crowdsafe.api.routes_events import router as events_router
from crowdsafe.deps import get_catalog, get_engine

configure_logging()
logger = logging.getLogger("crowdsafe")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting CrowdSafe API")
    logger.info(f"   Environment: {settings.environment}")
    logger.info(f"   Events configured: {len(get_catalog().list())}")

    yield

    logger.info(f"Shutting down, discarding {get_engine().tracked_count} tracked position(s)")


app = FastAPI(
    title="CrowdSafe API",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/")
def root():
    return {
        "name": "CrowdSafe API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health_router)
app.include_router(realtime_router)
app.include_router(navigation_router)
app.include_router(events_router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port, log_config=None)


if __name__ == "__main__":
    run()
