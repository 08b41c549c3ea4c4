from datetime import date, datetime

import pytest

from eventgen.core.geo import ViewportGeometry
from eventgen.domain.errors import EventNotFoundError, UserNotFoundError
from eventgen.domain.models import Event, Location, UserProfile
from eventgen.repositories.memory import InMemoryEventRepository, InMemoryUserRepository


def _event(event_id: str, lat: float, lon: float) -> Event:
    return Event(
        id=event_id,
        title=f"Event {event_id}",
        date=datetime(2025, 3, 21, 20, 0),
        location=Location(latitude=lat, longitude=lon),
    )


@pytest.mark.asyncio
async def test_event_store_add_get_delete():
    repo = InMemoryEventRepository()
    await repo.add_event(_event("a", 46.52, 6.63))

    assert (await repo.get_event("a")).title == "Event a"

    await repo.delete_event("a")
    with pytest.raises(EventNotFoundError):
        await repo.get_event("a")
    with pytest.raises(EventNotFoundError):
        await repo.delete_event("a")


@pytest.mark.asyncio
async def test_get_all_events_returns_a_snapshot():
    repo = InMemoryEventRepository([_event("a", 46.52, 6.63)])

    snapshot = await repo.get_all_events()
    await repo.add_event(_event("b", 46.52, 6.63))

    assert [e.id for e in snapshot] == ["a"]
    assert [e.id for e in await repo.get_all_events()] == ["a", "b"]


@pytest.mark.asyncio
async def test_count_events_in_viewport():
    repo = InMemoryEventRepository(
        [
            _event("center", 46.52, 6.63),
            _event("near", 46.521, 6.631),  # ~135 m away
            _event("far", 46.20, 6.14),  # Geneva
        ]
    )

    assert await repo.count_events_in_viewport(ViewportGeometry(46.52, 6.63, 0.2)) == 2
    assert await repo.count_events_in_viewport(ViewportGeometry(46.52, 6.63, 0.0)) == 1
    assert await repo.count_events_in_viewport(ViewportGeometry(46.52, 6.63, 100.0)) == 3


@pytest.mark.asyncio
async def test_new_id_is_unique():
    repo = InMemoryEventRepository()
    ids = {await repo.new_id() for _ in range(100)}
    assert len(ids) == 100


@pytest.mark.asyncio
async def test_user_store_lookup():
    user = UserProfile(
        uid="u1",
        username="hans",
        first_name="Hans",
        last_name="P",
        country="CH",
        date_of_birth=date(2000, 1, 1),
    )
    repo = InMemoryUserRepository()

    with pytest.raises(UserNotFoundError):
        await repo.get_user("u1")

    await repo.add_user(user)
    assert await repo.get_user("u1") == user
