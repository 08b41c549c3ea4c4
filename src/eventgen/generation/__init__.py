from eventgen.generation.fake import FakeChatCompletionService
from eventgen.generation.generator import ChatEventGenerator, EventGenerator
from eventgen.generation.openai import OpenAIChatService

__all__ = ["ChatEventGenerator", "EventGenerator", "FakeChatCompletionService", "OpenAIChatService"]
