from typing import Optional

from fastapi import APIRouter, Depends, status
from openai import AsyncOpenAI

from app.features.assistant.schemas.assistant import (
    ChatMetadata,
    ChatRequest,
    ChatResponse,
    SuggestionsRequest,
)
from app.features.assistant.services.context_builder import context_builder
from app.features.assistant.services.intent_handlers import connection_trouble_response
from app.features.assistant.services.strategy_selector import (
    ResponseStrategySelector,
    get_strategy_selector,
)
from app.features.assistant.services.suggestions import SuggestionsService, get_suggestions_client
from app.features.platform_detection.services.detection_store import (
    DetectionStore,
    get_detection_store,
)
from app.features.platform_detection.utils.guides import has_guides
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger("assistant_routes")
router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.post("/chat", summary="Ask the accessibility assistant")
async def chat(
    data: ChatRequest,
    selector: ResponseStrategySelector = Depends(get_strategy_selector),
    store: DetectionStore = Depends(get_detection_store),
):
    """
    Answer one chat turn about a scan.

    The platform stored with the scan is used when the client sends one or
    when a detection is cached for ``scanId``; otherwise it is detected from
    the site URL. Unexpected failures return the connection-trouble reply
    instead of an error.
    """
    if not data.message or data.context is None:
        return api_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Message and context required",
        )

    raw_context = data.context
    mode = raw_context.mode
    logger.info(
        f"Chat request: scan={raw_context.scan_id}, mode={mode.value}, "
        f"message_length={len(data.message)}, history={len(data.conversation_history)}"
    )

    try:
        if raw_context.platform is None and raw_context.scan_id:
            stored = await store.get(raw_context.scan_id)
            if stored is not None:
                raw_context = raw_context.model_copy(
                    update={"platform": stored.model_dump(mode="json")}
                )

        context = context_builder.build(raw_context, data.conversation_history)
        logger.info(
            f"Platform for scan {raw_context.scan_id}: {context.site.platform} "
            f"(confidence={context.platform_confidence}, source={context.detected_from}, "
            f"guides={has_guides(context.site.platform)})"
        )

        response = await selector.respond(data.message, context, mode)
        platform: Optional[str] = context.site.platform
        confidence = context.platform_confidence
    except Exception as e:
        logger.error(f"Assistant failed for scan {raw_context.scan_id}: {str(e)}", exc_info=True)
        response = connection_trouble_response(mode)
        platform = None
        confidence = None

    logger.info(f"Chat response: intent={response.intent}, actions={len(response.actions)}")

    chat_response = ChatResponse(
        message=response.content,
        actions=response.actions,
        metadata=ChatMetadata(platform=platform, confidence=confidence, intent=response.intent),
    )
    return api_response(data=chat_response, message="Response generated")


@router.post("/suggestions", summary="AI remediation summary for violations")
async def suggestions(
    data: SuggestionsRequest,
    client: Optional[AsyncOpenAI] = Depends(get_suggestions_client),
):
    if client is None:
        return api_response(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            message="AI suggestions are not available. OpenAI API key is not configured.",
        )

    if not isinstance(data.violations, list):
        return api_response(status_code=status.HTTP_400_BAD_REQUEST, message="Invalid request body")

    try:
        result = await SuggestionsService.generate(data.violations, data.url, client)
    except Exception as e:
        logger.error(f"Error generating suggestions for {data.url}: {str(e)}", exc_info=True)
        return api_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Failed to generate suggestions",
        )

    return api_response(data=result, message="Suggestions generated")

