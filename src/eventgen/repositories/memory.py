"""
In-memory stores.

Used by the test-suite and the CLI demo so the orchestrator can run without a
database. Nothing here survives the process.
"""

from __future__ import annotations

import uuid

from eventgen.core.geo import ViewportGeometry
from eventgen.domain.errors import EventNotFoundError, UserNotFoundError
from eventgen.domain.models import Event, UserProfile


class InMemoryEventRepository:
    """Event store backed by an insertion-ordered list.

    `get_all_events` and `get_event` are inspection helpers beyond `EventRepository`.
    """

    def __init__(self, events: list[Event] | None = None):
        self._events: list[Event] = list(events or [])

    async def get_all_events(self) -> list[Event]:
        # Copy, so callers can hold it as a snapshot.
        return list(self._events)

    async def get_event(self, event_id: str) -> Event:
        for event in self._events:
            if event.id == event_id:
                return event
        raise EventNotFoundError(f"No event found with id: {event_id}")

    async def add_event(self, event: Event) -> None:
        self._events.append(event)

    async def delete_event(self, event_id: str) -> None:
        for i, event in enumerate(self._events):
            if event.id == event_id:
                del self._events[i]
                return
        raise EventNotFoundError(f"No event found with id: {event_id}")

    async def count_events_in_viewport(self, viewport: ViewportGeometry) -> int:
        return sum(1 for e in self._events if viewport.contains(e.location.latitude, e.location.longitude))

    async def new_id(self) -> str:
        return str(uuid.uuid4())


class InMemoryUserRepository:
    """User store keyed by uid."""

    def __init__(self, users: list[UserProfile] | None = None):
        self._users: dict[str, UserProfile] = {u.uid: u for u in users or []}

    async def get_user(self, uid: str) -> UserProfile:
        try:
            return self._users[uid]
        except KeyError:
            raise UserNotFoundError(f"No user found with uid: {uid}") from None

    async def add_user(self, profile: UserProfile) -> None:
        self._users[profile.uid] = profile
