"""
Collaborator interfaces consumed by the orchestrator.

Concrete backends (Firestore, SQL, ...) live outside this package; anything that
structurally matches these protocols can be injected.
"""

from __future__ import annotations

from typing import Protocol

from eventgen.core.geo import ViewportGeometry
from eventgen.domain.models import Event, UserProfile


class EventRepository(Protocol):
    async def add_event(self, event: Event) -> None: ...

    async def delete_event(self, event_id: str) -> None: ...

    async def count_events_in_viewport(self, viewport: ViewportGeometry) -> int: ...

    async def new_id(self) -> str:
        """Return a fresh id; must stay unique under concurrent calls."""
        ...


class UserRepository(Protocol):
    async def get_user(self, uid: str) -> UserProfile:
        """Return the profile for `uid`; raise `UserNotFoundError` if absent."""
        ...

    async def add_user(self, profile: UserProfile) -> None: ...
