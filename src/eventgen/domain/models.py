"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- stored/generated events (`Event`)
- the requesting user (`UserProfile`)
- the generation request handed to the AI collaborator (`EventQuery`)

Events and locations are frozen so a candidate and its persisted copy can be compared
field by field, and so nobody downstream mutates the list returned to the caller.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventgen.core.geo import ViewportGeometry


def _normalize_tags(tags: Any) -> tuple[str, ...]:
    if tags is None:
        return ()
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, Iterable):
        raise ValueError("tags must be an iterable of strings")
    return tuple(sorted({str(t).strip() for t in tags if t and str(t).strip()}))


class Location(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Event(BaseModel):
    """An event shown on the map, either user-created or AI-generated."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    date: datetime
    tags: tuple[str, ...] = ()
    location: Location
    creator: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize(cls, tags: Any) -> tuple[str, ...]:
        return _normalize_tags(tags)

    def with_id(self, new_id: str) -> "Event":
        """Return a copy carrying `new_id`; every other field is unchanged."""
        return self.model_copy(update={"id": new_id})


class UserProfile(BaseModel):
    """Read-only view of the requesting user."""

    model_config = ConfigDict(frozen=True)

    uid: str
    username: str
    first_name: str
    last_name: str
    country: str = Field(..., description="ISO 3166-1 alpha-2 code")
    description: str | None = None
    date_of_birth: date
    tags: tuple[str, ...] = ()

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize(cls, tags: Any) -> tuple[str, ...]:
        return _normalize_tags(tags)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def age_on(self, day: date) -> int:
        """Age in whole years on `day`."""
        years = day.year - self.date_of_birth.year
        if (day.month, day.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return years


class TaskConfig(BaseModel):
    """What to generate: how many events, and whether they must follow the user's interests."""

    event_count: int | None = Field(default=None, ge=1)
    require_relevant_tags: bool = True


class ContextConfig(BaseModel):
    """Where and when to generate: map area, time window, and the reference date."""

    location: str | None = None
    coordinates: tuple[float, float] | None = None
    radius_km: float | None = Field(default=None, ge=0)
    time_frame: str | None = "today"
    current_date: date

    @classmethod
    def from_viewport(
        cls,
        viewport: ViewportGeometry,
        *,
        current_date: date,
        time_frame: str | None = "today",
    ) -> "ContextConfig":
        return cls(
            coordinates=(viewport.center_lat, viewport.center_lon),
            radius_km=viewport.radius_km,
            time_frame=time_frame,
            current_date=current_date,
        )


class EventQuery(BaseModel):
    """Everything the AI generator needs: who is asking, what to generate, and where."""

    user: UserProfile
    task: TaskConfig = Field(default_factory=TaskConfig)
    context: ContextConfig
