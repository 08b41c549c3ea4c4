import math

import pytest

from eventgen.config.settings import PolicyConfig
from eventgen.core.geo import ViewportGeometry
from eventgen.policy.passive import REJECT, Accept, PassiveAIGenPolicy, Reject, density_threshold

CONFIG = PolicyConfig(
    request_cooldown_ms=30_000,
    min_event_spacing_km=0.15,
    max_viewport_radius_km=5.0,
    max_events_per_request=3,
)


@pytest.fixture
def policy():
    return PassiveAIGenPolicy(CONFIG)


def _vp(radius_km: float) -> ViewportGeometry:
    return ViewportGeometry(center_lat=46.52, center_lon=6.63, radius_km=radius_km)


def _evaluate(policy, radius_km, num_events, last, now):
    return policy.evaluate(_vp(radius_km), num_events, last, now)


def test_rejects_while_cooldown_is_active(policy):
    now = 10_000_000
    last = now - (CONFIG.request_cooldown_ms - 1)

    assert _evaluate(policy, 1.0, 0, last, now) == REJECT


def test_cooldown_boundary_is_inclusive(policy):
    # Exactly one cooldown period later is allowed.
    now = 10_000_000
    last = now - CONFIG.request_cooldown_ms

    assert isinstance(_evaluate(policy, 1.0, 0, last, now), Accept)


@pytest.mark.parametrize("radius_km", [0.0, 0.5, 2.0, 5.0, 50.0, 9999.0])
@pytest.mark.parametrize("num_events", [0, 1, 100])
def test_cooldown_rejects_regardless_of_viewport_or_count(policy, radius_km, num_events):
    assert _evaluate(policy, radius_km, num_events, last=1000, now=1001) == REJECT


def test_rejects_when_radius_exceeds_maximum(policy):
    result = _evaluate(policy, CONFIG.max_viewport_radius_km + 5, 0, 0, CONFIG.request_cooldown_ms + 1)
    assert isinstance(result, Reject)


@pytest.mark.parametrize("radius_km", [math.nan, math.inf])
def test_rejects_non_finite_radius(policy, radius_km):
    assert _evaluate(policy, radius_km, 0, 0, CONFIG.request_cooldown_ms + 1) == REJECT


def test_rejects_when_existing_events_meet_threshold(policy):
    # (R / d)^2 == 1 when R == d
    result = _evaluate(policy, CONFIG.min_event_spacing_km, 1, 0, CONFIG.request_cooldown_ms + 1)
    assert result == REJECT


def test_tiny_viewport_still_admits_one_event(policy):
    result = _evaluate(policy, 0.01, 0, 0, CONFIG.request_cooldown_ms + 1)
    assert result == Accept(events_to_generate=1)


def test_accepts_deficit_below_cap():
    config = CONFIG.model_copy(update={"max_events_per_request": 20})
    policy = PassiveAIGenPolicy(config)

    # (0.46 / 0.15)^2 ~= 9.4, so the threshold is 9
    result = _evaluate(policy, 0.46, 4, 0, config.request_cooldown_ms + 1)

    assert result == Accept(events_to_generate=5)


def test_accepts_and_caps_to_max_events_per_request(policy):
    result = _evaluate(policy, CONFIG.max_viewport_radius_km, 0, 0, CONFIG.request_cooldown_ms + 1)
    assert result == Accept(events_to_generate=CONFIG.max_events_per_request)


@pytest.mark.parametrize("radius_km", [0.05, 0.15, 0.2, 0.45, 1.0, 2.0, 5.0])
@pytest.mark.parametrize("num_events", [0, 1, 2, 5, 8, 200])
def test_accepted_count_is_within_bounds(policy, radius_km, num_events):
    result = _evaluate(policy, radius_km, num_events, 0, CONFIG.request_cooldown_ms + 1)

    threshold = density_threshold(radius_km, CONFIG.min_event_spacing_km)
    if num_events >= threshold:
        assert result == REJECT
    else:
        assert isinstance(result, Accept)
        assert 1 <= result.events_to_generate <= CONFIG.max_events_per_request
        assert result.events_to_generate == min(threshold - num_events, CONFIG.max_events_per_request)


def test_evaluate_is_deterministic(policy):
    args = (_vp(0.8), 3, 12_345, 99_999_999)
    first = policy.evaluate(*args)
    assert all(policy.evaluate(*args) == first for _ in range(50))


def test_density_threshold_matches_packing_heuristic():
    assert density_threshold(0.2, 0.15) == 1
    assert density_threshold(0.15, 0.15) == 1
    assert density_threshold(0.46, 0.15) == 9
    assert density_threshold(2.0, 0.15) == 177
    assert density_threshold(0.0, 0.15) == 1


def test_accept_requires_positive_count():
    with pytest.raises(ValueError):
        Accept(events_to_generate=0)


def test_policy_defaults_to_configured_settings():
    assert PassiveAIGenPolicy().config.max_events_per_request >= 1
