"""
Passive AI event generation orchestrator.

Sequence for one `maybe_generate` call, each step awaited before the next:
1. count the events already inside the viewport (event store)
2. ask the admission policy
3. on Reject: return [] with no further collaborator calls
4. on Accept(n): load the user profile, build the `EventQuery`, call the AI generator
5. persist every candidate under a fresh store id (all-or-nothing, also on cancellation)
6. return the candidates as generated (provisional ids) for immediate display

The orchestrator keeps no clock or "last generation" state; `last_gen` and `now`
(epoch milliseconds) come from the caller, who also records when a generation
happened and debounces invocations.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from eventgen.config.settings import Settings, get_settings
from eventgen.core.geo import ViewportGeometry
from eventgen.core.time import local_date_from_ms
from eventgen.domain.errors import InvalidRequestError, PersistenceError
from eventgen.domain.models import ContextConfig, Event, EventQuery, TaskConfig
from eventgen.generation.generator import EventGenerator
from eventgen.policy.passive import Accept, PassiveAIGenPolicy
from eventgen.repositories.base import EventRepository, UserRepository

logger = logging.getLogger(__name__)


class AIEventGenOrchestrator:
    def __init__(
        self,
        ai: EventGenerator,
        events: EventRepository,
        users: UserRepository,
        policy: PassiveAIGenPolicy,
        *,
        settings: Settings | None = None,
    ):
        self._ai = ai
        self._events = events
        self._users = users
        self._policy = policy
        self._settings = settings or get_settings()

    async def maybe_generate(
        self,
        current_user_id: str,
        viewport: ViewportGeometry,
        last_gen: int,
        now: int,
    ) -> list[Event]:
        """Generate and persist events for `viewport` if the policy admits it.

        Returns [] on policy rejection. Lookup, generation and persistence failures
        propagate to the caller; a `now` outside the calendar range raises
        `InvalidRequestError`.
        """
        num_existing = await self._events.count_events_in_viewport(viewport)
        decision = self._policy.evaluate(viewport, num_existing, last_gen, now)
        if not isinstance(decision, Accept):
            logger.debug(
                "Passive generation rejected (radius_km=%.3f existing=%d since_last_ms=%d)",
                viewport.radius_km,
                num_existing,
                now - last_gen,
            )
            return []

        wanted = decision.events_to_generate
        logger.info(
            "Passive generation accepted for user=%s: %d event(s) around (%.5f, %.5f) r=%.3fkm",
            current_user_id,
            wanted,
            viewport.center_lat,
            viewport.center_lon,
            viewport.radius_km,
        )

        user = await self._users.get_user(current_user_id)
        query = EventQuery(
            user=user,
            task=TaskConfig(
                event_count=wanted,
                require_relevant_tags=self._settings.generation.require_relevant_tags,
            ),
            context=ContextConfig.from_viewport(
                viewport,
                current_date=self._current_date(now),
                time_frame=self._settings.generation.time_frame,
            ),
        )

        generated = await self._ai.generate_events(query)
        if len(generated) > wanted:
            logger.warning("Generator returned %d events; keeping the first %d", len(generated), wanted)
            generated = generated[:wanted]

        await self._persist_all(generated)
        logger.info("Persisted %d generated event(s) for user=%s", len(generated), current_user_id)
        return generated

    def _current_date(self, now: int) -> date:
        try:
            return local_date_from_ms(now, self._settings.app.timezone)
        except (OverflowError, ValueError, OSError) as exc:
            raise InvalidRequestError(f"Timestamp now={now} is outside the supported date range") from exc

    async def _persist_all(self, candidates: list[Event]) -> None:
        """Store every candidate under a new id, or none of them."""
        stored_ids: list[str] = []
        try:
            for candidate in candidates:
                new_id = await self._events.new_id()
                await self._events.add_event(candidate.with_id(new_id))
                stored_ids.append(new_id)
        except asyncio.CancelledError:
            logger.warning(
                "Persisting generated events cancelled after %d/%d; rolling back",
                len(stored_ids),
                len(candidates),
            )
            await self._rollback(stored_ids)
            raise
        except Exception as exc:
            logger.error(
                "Persisting generated events failed after %d/%d; rolling back",
                len(stored_ids),
                len(candidates),
            )
            await self._rollback(stored_ids)
            raise PersistenceError(
                f"Failed to persist generated events ({len(stored_ids)}/{len(candidates)} stored before failure)"
            ) from exc

    async def _rollback(self, stored_ids: list[str]) -> None:
        for event_id in reversed(stored_ids):
            try:
                await self._events.delete_event(event_id)
            except Exception:
                logger.exception("Rollback could not delete generated event %s", event_id)
