from __future__ import annotations

import datetime as dt
import uuid

from crowdsafe.utils.time import epoch_ms


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def route_id(issued_at: dt.datetime, index: int) -> str:
    """Time-based id; unique within one generation call via the index."""
    return f"route-{epoch_ms(issued_at)}-{index}"
