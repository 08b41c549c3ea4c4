"""JSON schema sent as `response_format` so the model returns a strict `events` array."""

from __future__ import annotations

from typing import Any

EVENT_SCHEMA: dict[str, Any] = {
    "name": "EventList",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "required": ["events"],
        "properties": {
            "events": {
                "type": "array",
                "items": {
                    "type": "object",
                    "additionalProperties": False,
                    "required": ["title", "description", "date", "tags", "location"],
                    "properties": {
                        "title": {"type": "string"},
                        "description": {"type": "string"},
                        "date": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$"},
                        "tags": {"type": "array", "items": {"type": "string"}},
                        "location": {
                            "type": "object",
                            "additionalProperties": False,
                            "required": ["latitude", "longitude"],
                            "properties": {
                                "latitude": {"type": "number"},
                                "longitude": {"type": "number"},
                            },
                        },
                    },
                },
            }
        },
    },
}
