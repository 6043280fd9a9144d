import logging
from dataclasses import dataclass
from typing import Optional

from app.features.assistant.schemas.assistant import AssistantContext, AssistantResponse
from app.features.assistant.services.intent_router import IntentRouter, default_router
from app.features.assistant.services.llm_strategy import LLMResponder
from app.platform.config import Settings, settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
    """Whether a language-model provider is configured. Decided once at startup."""
    provider_available: bool

    @classmethod
    def from_settings(cls, config: Settings) -> "ProviderConfig":
        return cls(provider_available=bool(config.OPENAI_API_KEY))


class ResponseStrategySelector:
    """
    Chooses between the language model and the deterministic intent router.

    Without a provider every turn is deterministic. With one, each turn tries
    the model once; any failure falls back to the router for that turn, so a
    caller never sees a provider error.
    """

    def __init__(
        self,
        config: ProviderConfig,
        router: Optional[IntentRouter] = None,
        llm: Optional[LLMResponder] = None,
    ):
        self.config = config
        self.router = router or default_router
        if config.provider_available and llm is None:
            llm = LLMResponder.from_settings()
        self.llm = llm if config.provider_available else None

    @property
    def uses_llm(self) -> bool:
        return self.llm is not None

    async def respond(self, message: str, context: AssistantContext, mode) -> AssistantResponse:
        if not self.uses_llm:
            logger.info("Using deterministic responder (no provider configured)")
            return self.router.route(message, context, mode)

        try:
            return await self.llm.respond(message, context, mode)
        except Exception as e:
            logger.error(f"Language model call failed, falling back to deterministic: {str(e)}")
            return self.router.route(message, context, mode)


_selector: Optional[ResponseStrategySelector] = None


def get_strategy_selector() -> ResponseStrategySelector:
    """FastAPI dependency returning the process-wide selector."""
    global _selector

    if _selector is None:
        _selector = ResponseStrategySelector(ProviderConfig.from_settings(settings))
        if _selector.uses_llm:
            logger.info(f"Assistant provider configured ({settings.OPENAI_MODEL})")
        else:
            logger.warning("No OPENAI_API_KEY set, assistant will use deterministic responses")
    return _selector
