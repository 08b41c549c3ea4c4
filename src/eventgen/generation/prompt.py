"""
Prompt construction (strict JSON mode).

Both messages are compact JSON documents:
1. system: output rules (discipline, realism, environment, geography, time, tags, schema)
2. user: the task, the requesting user, and the map context
"""

from __future__ import annotations

import json
from typing import Any

from eventgen.domain.models import ContextConfig, TaskConfig, UserProfile

SYSTEM_RULES: tuple[str, ...] = (
    # Output discipline
    'Always output a JSON object with a top-level "events" array that matches EXACTLY the provided JSON schema.',
    "No markdown, no commentary, no prose. ONLY the JSON object.",
    # Realism
    "All events must be public, open, casual, and drop-in friendly. They must NOT require an organizer, "
    "reservations, instructors, or paid facilities.",
    "Do NOT generate classes, workshops, lessons, tours, coached activities, or anything requiring staff, "
    "equipment rental, or venue booking.",
    "Events must represent spontaneous, community-friendly, self-organizable activities people can simply "
    "show up to, such as outdoor gatherings, walks, picnics, casual sports, local meetups, or open "
    "public-space activities.",
    "If the user's interest normally requires a facility, convert it into a realistic public variant "
    "appropriate for the environment (e.g., outdoor fitness meetup, running group, sketching meetup).",
    "Realism takes priority over user interests. If an interest is not feasible in the location, "
    "reinterpret it into a related, physically plausible public activity.",
    # Environment & location
    "Events must be consistent with the environment implied by the coordinates and radiusKm.",
    "Do NOT invent non-existent infrastructure (e.g., indoor gyms, beaches, ski slopes, concert halls).",
    "Use ONLY plausible public spaces: parks, lakesides, plazas, streets, promenades, small squares, "
    "viewpoints, playgrounds, trails, or known city areas typical for the region.",
    # Geography
    "Event coordinates must lie within radiusKm, but should not be identical to the context coordinates "
    "unless no other plausible point exists.",
    # Time
    "All event dates must be strictly in the future relative to currentDate.",
    "Dates must fall between 1 hour from now and 60 days in the future.",
    # Tags
    "When requireRelevantTags = true, integrate user interests ONLY when they can be expressed as public, "
    "open, organizer-free activities.",
    "Interests should inspire the theme, mood, or activity style, not the venue type.",
    # Schema
    "Do not add or omit fields. Do not include nulls unless the schema explicitly allows them.",
)


def _dumps(obj: dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def build_system_message() -> str:
    return _dumps({"role": "EventCuratorGPT", "rules": list(SYSTEM_RULES)})


def build_user_message(profile: UserProfile, task: TaskConfig, context: ContextConfig) -> str:
    task_obj: dict[str, Any] = {
        "goal": (
            "generate public, drop-in, realistic events that match the environment "
            "and the user's interests when feasible."
        ),
        "requireRelevantTags": task.require_relevant_tags,
    }
    if task.event_count is not None:
        task_obj["eventsToGenerate"] = task.event_count

    user_obj: dict[str, Any] = {
        "uid": profile.uid,
        "name": profile.full_name,
        "age": profile.age_on(context.current_date),
        "country": profile.country,
        "interests": list(profile.tags),
    }
    if profile.description:
        user_obj["description"] = profile.description

    context_obj: dict[str, Any] = {}
    if context.location:
        context_obj["location"] = context.location
    if context.coordinates is not None:
        lat, lon = context.coordinates
        context_obj["coordinates"] = {"lat": lat, "lon": lon}
    if context.radius_km is not None:
        context_obj["radiusKm"] = round(context.radius_km, 3)
    if context.time_frame:
        context_obj["timeFrame"] = context.time_frame
    context_obj["currentDate"] = context.current_date.isoformat()

    return _dumps({"task": task_obj, "user": user_obj, "context": context_obj})
