"""
AI event generation over a chat-completions service.

Pipeline:
1. Prompt construction: system + user messages from the `EventQuery`.
2. Response format: the strict `EVENT_SCHEMA` as `response_format`.
3. API invocation through the injected `ChatCompletionService`.
4. Output validation: at least one choice with non-blank content.
5. Parsing into candidate `Event`s (provisional ids).

Transport and response-shape failures surface as `GenerationError`. There is no
retry here; retry/backoff belongs to the caller.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from eventgen.config.settings import Settings, get_settings
from eventgen.domain.errors import GenerationError
from eventgen.domain.models import Event, EventQuery
from eventgen.generation.openai import ChatCompletionRequest, ChatCompletionService, ChatMessage, ResponseFormat
from eventgen.generation.parser import parse_events
from eventgen.generation.prompt import build_system_message, build_user_message
from eventgen.generation.schema import EVENT_SCHEMA

logger = logging.getLogger(__name__)


class EventGenerator(Protocol):
    async def generate_events(self, query: EventQuery) -> list[Event]: ...


class ChatEventGenerator:
    """`EventGenerator` backed by an OpenAI-compatible chat-completions service."""

    def __init__(self, service: ChatCompletionService, settings: Settings | None = None):
        self._service = service
        self._settings = settings or get_settings()

    def build_request(self, query: EventQuery) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=self._settings.openai.model,
            messages=[
                ChatMessage(role="system", content=build_system_message()),
                ChatMessage(role="user", content=build_user_message(query.user, query.task, query.context)),
            ],
            max_completion_tokens=self._settings.openai.max_completion_tokens,
            response_format=ResponseFormat(type="json_schema", json_schema=EVENT_SCHEMA),
        )

    async def generate_events(self, query: EventQuery) -> list[Event]:
        request = self.build_request(query)
        logger.debug(
            "Chat request model=%s max_tokens=%s user=%s",
            request.model,
            request.max_completion_tokens,
            request.messages[-1].content,
        )

        try:
            response = await self._service.chat_completion(request)
        except httpx.HTTPStatusError as exc:
            raise GenerationError(
                f"AI provider returned HTTP {exc.response.status_code}: {exc.response.text[:300]}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers undecodable bodies and pydantic response validation.
            raise GenerationError(f"AI provider request failed: {exc}") from exc

        if not response.choices:
            raise GenerationError("AI provider returned no choices.")

        choice = response.choices[0]
        raw = choice.message.content or ""
        if not raw.strip():
            usage = response.usage
            raise GenerationError(
                "AI provider returned empty content. "
                f"finish_reason={choice.finish_reason}, "
                f"prompt_tokens={usage.prompt_tokens if usage else None}, "
                f"completion_tokens={usage.completion_tokens if usage else None}"
            )

        return parse_events(raw, creator=self._settings.generation.creator)
