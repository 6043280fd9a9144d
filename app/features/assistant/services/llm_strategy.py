import logging
from typing import Optional

from openai import AsyncOpenAI

from app.features.assistant.schemas.assistant import AssistantContext, AssistantResponse
from app.features.assistant.services.action_suggester import suggest_actions
from app.features.assistant.services.prompt_builder import build_messages
from app.platform.config import settings

logger = logging.getLogger(__name__)


class EmptyCompletionError(Exception):
    """Raised when the provider answers without any usable text."""


class LLMResponder:
    """Answers a chat turn with a single chat-completion call. Errors propagate."""

    INTENT = "llm"

    def __init__(
        self,
        client: AsyncOpenAI,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self.client = client
        self.model = model or settings.OPENAI_MODEL
        self.temperature = settings.OPENAI_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or settings.OPENAI_MAX_TOKENS

    @classmethod
    def from_settings(cls) -> "LLMResponder":
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, base_url=settings.OPENAI_BASE_URL)
        return cls(client=client)

    async def respond(self, message: str, context: AssistantContext, mode) -> AssistantResponse:
        messages = build_messages(context, message, mode)

        logger.info(
            f"Calling {self.model}: {len(messages)} messages, platform={context.site.platform}, "
            f"issues={len(context.top_issues)}"
        )

        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        if not completion.choices:
            raise EmptyCompletionError("Completion returned no choices")
        text = completion.choices[0].message.content or ""
        if not text.strip():
            raise EmptyCompletionError("Completion returned empty content")

        usage = getattr(completion, "usage", None)
        logger.info(
            f"Completion received: {len(text)} chars, "
            f"tokens={getattr(usage, 'total_tokens', 'unknown')}"
        )

        return AssistantResponse(
            intent=self.INTENT,
            content=text,
            actions=suggest_actions(text, context, mode),
        )
