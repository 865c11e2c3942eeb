from __future__ import annotations

import datetime as dt


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def epoch_ms(ts: dt.datetime) -> int:
    return int(ts.timestamp() * 1000)
