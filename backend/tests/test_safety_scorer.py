import pytest

from crowdsafe.errors import InvalidInput
from crowdsafe.services.density import DensityEstimator
from crowdsafe.services.position_store import PositionStore
from crowdsafe.services.route_generator import CandidateRoute
from crowdsafe.services.safety_scorer import SafetyScorer, classify, touches_restricted_zone
from crowdsafe.utils.geo import interpolate


def _route(start, end, n=22, rid="route-test-0"):
    geometry = tuple(interpolate(start, end, k / (n - 1)) for k in range(n))
    return CandidateRoute(id=rid, geometry=geometry, distance_m=0.0, duration_min=0)


@pytest.fixture
def scorer():
    return SafetyScorer(DensityEstimator(PositionStore()))


def test_empty_crowd_and_no_zones_is_fully_safe(scorer, t0):
    a = scorer.score(_route((0.0, 0.0), (0.0, 0.01)), now=t0)
    assert a.score == 100
    assert (a.label, a.color) == ("SAFE", "green")
    assert a.density == 0.0
    assert a.restricted is False


def test_saturated_crowd_is_unsafe(scorer, t0):
    route = _route((0.0, 0.0), (0.0, 0.0002))
    mid = route.geometry[len(route.geometry) // 2]
    for i in range(6):
        scorer.density.store.upsert(f"u{i}", (mid[0] + 0.00005, mid[1]), now=t0)

    a = scorer.score(route, now=t0)
    assert a.density == 1.0
    assert a.score == pytest.approx(30.0)
    assert (a.label, a.color) == ("UNSAFE", "red")


def test_restricted_zone_at_start_penalizes(scorer, t0):
    route = _route((0.0, 0.0), (0.0, 0.01))
    a = scorer.score(route, restricted_zones=[(0.0, 0.0)], now=t0)
    assert a.restricted is True
    assert a.score == pytest.approx(10.0)
    assert a.label == "UNSAFE"


def test_penalty_does_not_stack_with_more_hits(scorer, t0):
    route = _route((0.0, 0.0), (0.0, 0.01))
    zones = [route.geometry[k] for k in range(0, 22, 3)]
    a = scorer.score(route, restricted_zones=zones, now=t0)
    assert a.score == pytest.approx(10.0)


def test_distant_zone_has_no_effect(scorer, t0):
    a = scorer.score(_route((0.0, 0.0), (0.0, 0.01)), restricted_zones=[(1.0, 1.0)], now=t0)
    assert a.restricted is False
    assert a.score == 100


def test_score_clamped_at_zero(scorer, t0):
    route = _route((0.0, 0.0), (0.0, 0.0002))
    for i in range(20):
        scorer.density.store.upsert(f"u{i}", route.geometry[0], now=t0)
    a = scorer.score(route, restricted_zones=[route.geometry[0]], now=t0)
    assert a.score == 0.0
    assert a.color == "red"


def test_route_length_does_not_affect_score(scorer, t0):
    short = scorer.score(_route((0.0, 0.0), (0.0, 0.001)), now=t0)
    long = scorer.score(_route((0.0, 0.0), (0.5, 0.5)), now=t0)
    assert short.score == long.score == 100


@pytest.mark.parametrize(
    "score,expected",
    [(0.0, "UNSAFE"), (39.99, "UNSAFE"), (40.0, "MODERATE"), (74.99, "MODERATE"), (75.0, "SAFE"), (100.0, "SAFE")],
)
def test_label_thresholds(score, expected):
    assert classify(score)[0] == expected


def test_touches_restricted_zone_uses_box():
    assert touches_restricted_zone([(0.0, 0.0)], [(0.00019, 0.00019)])
    assert not touches_restricted_zone([(0.0, 0.0)], [(0.0002, 0.0)])
    assert not touches_restricted_zone([(0.0, 0.0)], [])


def test_empty_geometry_rejected(scorer):
    with pytest.raises(InvalidInput):
        scorer.score(CandidateRoute(id="r", geometry=(), distance_m=0.0, duration_min=0))
