"""
OpenAI chat-completions client.

Only the wire models and a thin transport live here; prompt building and output
parsing belong to `eventgen.generation.prompt` / `eventgen.generation.parser`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import BaseModel, Field

from eventgen.config.settings import OpenAISettings
from eventgen.core.http import post_json

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    role: str
    content: str | None = None


class ResponseFormat(BaseModel):
    type: str = "json_schema"
    json_schema: dict[str, Any] | None = None


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    temperature: float | None = None
    max_completion_tokens: int | None = None
    response_format: ResponseFormat | None = None


class Choice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionResponse(BaseModel):
    id: str = ""
    created: int = 0
    model: str = ""
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None


class ChatCompletionService(Protocol):
    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse: ...


class OpenAIChatService:
    """POSTs chat-completion requests to an OpenAI-compatible endpoint."""

    def __init__(self, settings: OpenAISettings):
        self._settings = settings

    @property
    def url(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/chat/completions"

    def _headers(self) -> dict[str, str]:
        api_key = self._settings.api_key
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is not set; add it to the environment or .env.")
        return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        headers = self._headers()
        logger.debug("POST %s model=%s", self.url, request.model)
        data = await post_json(
            self.url,
            payload=request.model_dump(mode="json", exclude_none=True),
            headers=headers,
            timeout_seconds=self._settings.timeout_seconds,
        )
        return ChatCompletionResponse.model_validate(data)
