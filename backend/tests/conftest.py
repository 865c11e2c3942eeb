"""Test fixtures: a fresh routing engine per test + deterministic randomness."""

from __future__ import annotations

import datetime as dt
import random
from typing import Iterable, List

import pytest

from crowdsafe.deps import get_engine
from crowdsafe.main import app
from crowdsafe.services.route_generator import DefaultRandomSource
from crowdsafe.services.routing_engine import CrowdRoutingEngine


class ScriptedRandom:
    """Replays a fixed sequence of uniform() values, then repeats ``fill``."""

    def __init__(self, values: Iterable[float] = (), fill: float = 0.5):
        self._values: List[float] = list(values)
        self._fill = fill
        self.calls = 0

    def uniform(self) -> float:
        self.calls += 1
        if self._values:
            return self._values.pop(0)
        return self._fill


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def t0() -> dt.datetime:
    return dt.datetime(2026, 3, 14, 18, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def engine() -> CrowdRoutingEngine:
    return CrowdRoutingEngine(random_source=DefaultRandomSource(random.Random(7)))


@pytest.fixture(autouse=True)
def _override_engine(engine: CrowdRoutingEngine):
    app.dependency_overrides[get_engine] = lambda: engine
    yield
    app.dependency_overrides.pop(get_engine, None)
