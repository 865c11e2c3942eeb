from __future__ import annotations


class InvalidInput(ValueError):
    """Raised for malformed coordinates or geometry.

    Never retried: the routers surface it as a rejected request (HTTP 400).
    """
