from __future__ import annotations

import logging

from crowdsafe.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once. Safe to call repeatedly."""
    resolved = (level or settings.log_level).upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    root.setLevel(resolved)
    # one access line per location update otherwise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
