"""
Model output parsing.

A malformed envelope (not JSON, not an object, no `events` array) is a generation
failure and raises `GenerationError`. Individual events that fail validation are
dropped with a warning so one bad item does not discard the whole batch.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from eventgen.core.time import parse_local_datetime
from eventgen.domain.errors import GenerationError
from eventgen.domain.models import Event, Location

logger = logging.getLogger(__name__)

PROVISIONAL_ID_PREFIX = "provisional-"


class GeneratedEventPayload(BaseModel):
    """One item of the model's `events` array, validated before conversion."""

    title: str
    description: str
    date: datetime
    tags: list[str] = []
    location: Location

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> datetime:
        if not isinstance(value, str):
            raise ValueError("date must be an ISO-8601 string")
        return parse_local_datetime(value)


def strip_code_fences(raw: str) -> str:
    cleaned = raw.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_events(raw: str, *, creator: str = "OpenAI") -> list[Event]:
    """Parse the model's JSON content into candidate events with provisional ids."""
    cleaned = strip_code_fences(raw)
    try:
        root = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise GenerationError(f"Model output is not valid JSON: {exc.msg}") from exc
    if not isinstance(root, dict):
        raise GenerationError("Model output root must be a JSON object.")

    items = root.get("events")
    if not isinstance(items, list):
        raise GenerationError("Model output is missing an 'events' array.")

    events: list[Event] = []
    for index, item in enumerate(items):
        try:
            payload = GeneratedEventPayload.model_validate(item)
        except ValidationError as exc:
            logger.warning("Dropping generated event #%d: %s", index, exc.errors(include_url=False))
            continue
        events.append(
            Event(
                id=f"{PROVISIONAL_ID_PREFIX}{len(events)}",
                title=payload.title,
                description=payload.description,
                date=payload.date,
                tags=payload.tags,
                location=payload.location,
                creator=creator,
            )
        )

    logger.debug("Parsed %d/%d generated events", len(events), len(items))
    return events
