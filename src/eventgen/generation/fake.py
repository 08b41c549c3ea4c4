"""
Deterministic stand-in for the OpenAI endpoint.

Returns one well-formed event ("Fake Rock Concert") in the exact envelope the parser
expects. No network; every request is recorded for inspection.
"""

from __future__ import annotations

import json

from eventgen.generation.openai import ChatCompletionRequest, ChatCompletionResponse, ChatMessage, Choice

FAKE_EVENTS_PAYLOAD = {
    "events": [
        {
            "title": "Fake Rock Concert",
            "description": "A generated test event",
            "date": "2025-03-21T20:00",
            "tags": ["Rock", "Music"],
            "location": {"latitude": 46.52, "longitude": 6.63},
        }
    ]
}


class FakeChatCompletionService:
    def __init__(self, content: str | None = None):
        self._content = content if content is not None else json.dumps(FAKE_EVENTS_PAYLOAD)
        self.requests: list[ChatCompletionRequest] = []

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        self.requests.append(request)
        return ChatCompletionResponse(
            id="fake-id",
            created=0,
            model="fake-model",
            choices=[Choice(index=0, message=ChatMessage(role="assistant", content=self._content), finish_reason="stop")],
        )
