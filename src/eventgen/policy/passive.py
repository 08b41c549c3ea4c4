"""
Passive AI generation admission policy.

Decides, for one map viewport, whether AI events should be generated and how many.
The policy is pure: no I/O, no clock, no mutable state. The caller supplies the
viewport, the number of events already inside it, the timestamp of the previous
generation and the current time (epoch milliseconds), so any clock can be simulated
by passing numbers.

Gates, evaluated in order (first match decides):
1. cooldown: too soon after the previous generation -> Reject
2. zoom: viewport radius above the configured maximum -> Reject
3. density: viewport already holds `threshold` events or more -> Reject
4. deficit: Accept(min(threshold - existing, max_events_per_request))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from eventgen.config.settings import PolicyConfig, get_settings
from eventgen.core.geo import ViewportGeometry


@dataclass(frozen=True)
class Reject:
    """Do not generate."""


@dataclass(frozen=True)
class Accept:
    """Generate up to `events_to_generate` events."""

    events_to_generate: int

    def __post_init__(self) -> None:
        if self.events_to_generate < 1:
            raise ValueError("events_to_generate must be >= 1")


Decision = Union[Reject, Accept]

REJECT = Reject()


def density_threshold(radius_km: float, min_spacing_km: float) -> int:
    """Number of events the viewport can hold at `min_spacing_km` separation.

    The viewport is treated as a circle of radius R and every event as owning an
    exclusion circle of radius d, so roughly (R / d)^2 events fit. Never below 1,
    so a tiny viewport still admits a single event.
    """
    return max(1, int((radius_km / min_spacing_km) ** 2))


class PassiveAIGenPolicy:
    """Admission control for passive (map-movement triggered) AI event generation."""

    def __init__(self, config: PolicyConfig | None = None):
        self._config = config if config is not None else get_settings().policy

    @property
    def config(self) -> PolicyConfig:
        return self._config

    def evaluate(
        self,
        viewport: ViewportGeometry,
        num_existing_events: int,
        last_gen_timestamp: int,
        now: int,
    ) -> Decision:
        cfg = self._config

        if now - last_gen_timestamp < cfg.request_cooldown_ms:
            return REJECT

        radius_km = viewport.radius_km
        # NaN compares False against everything, so check finiteness explicitly.
        if not math.isfinite(radius_km) or radius_km > cfg.max_viewport_radius_km:
            return REJECT

        threshold = density_threshold(radius_km, cfg.min_event_spacing_km)
        if num_existing_events >= threshold:
            return REJECT

        capped = min(threshold - num_existing_events, cfg.max_events_per_request)
        if capped <= 0:
            return REJECT
        return Accept(events_to_generate=capped)
