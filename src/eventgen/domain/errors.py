"""
Error taxonomy.

A policy rejection is a normal negative decision and is never raised. Everything
below is a failure the caller should see (and may log or ignore without crashing
the session).
"""

from __future__ import annotations


class EventGenError(Exception):
    """Base class for eventgen failures."""


class UserNotFoundError(EventGenError, LookupError):
    """The user store has no profile for the requested uid."""


class EventNotFoundError(EventGenError, LookupError):
    """The event store has no event with the requested id."""


class GenerationError(EventGenError):
    """The AI generator failed (transport error, bad status, malformed payload)."""


class PersistenceError(EventGenError):
    """A batch of generated events could not be persisted; the batch was rolled back."""


class InvalidRequestError(EventGenError, ValueError):
    """A caller-supplied argument cannot be used (e.g. a timestamp outside the calendar range)."""
