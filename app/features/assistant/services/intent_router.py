import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from app.features.assistant.schemas.assistant import AssistantContext, AssistantResponse
from app.features.assistant.services.intent_handlers import (
    handle_clarification,
    handle_code,
    handle_email,
    handle_explain,
    handle_fix,
    handle_github,
    handle_greeting,
    handle_platform_guide,
    handle_priorities,
    nothing_to_fix,
)

logger = logging.getLogger(__name__)

Handler = Callable[[str, AssistantContext, object], AssistantResponse]
Matcher = Callable[[str, AssistantContext], bool]


def contains_any(*keywords: str) -> Matcher:
    return lambda message, context: any(keyword in message for keyword in keywords)


def contains_all(*keywords: str) -> Matcher:
    return lambda message, context: all(keyword in message for keyword in keywords)


def mentions_platform(message: str, context: AssistantContext) -> bool:
    platform = (context.site.platform or "").lower()
    return bool(platform) and platform in message


@dataclass(frozen=True)
class IntentRule:
    intent: str
    matches: Matcher
    handler: Handler


# Checked in order against the lower-cased message; first match wins.
# "priorit" covers priority, priorities and prioritize.
INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule("priorities", contains_any("priorit", "first", "start", "top"), handle_priorities),
    IntentRule("fix", contains_all("how", "fix"), handle_fix),
    IntentRule("github", contains_any("github", "issue", "pr"), handle_github),
    IntentRule("email", contains_any("email", "designer", "send"), handle_email),
    IntentRule("code", contains_any("code", "snippet"), handle_code),
    IntentRule("explain", contains_any("what", "explain", "tell"), handle_explain),
    IntentRule("platform-guide", mentions_platform, handle_platform_guide),
)


class IntentRouter:
    """Keyword-driven responder. Needs no external service and never raises on valid input."""

    def __init__(self, rules: Optional[Sequence[IntentRule]] = None):
        self.rules = tuple(INTENT_RULES if rules is None else rules)

    def match(self, message: str, context: AssistantContext) -> Optional[IntentRule]:
        message_lower = (message or "").lower()
        for rule in self.rules:
            if rule.matches(message_lower, context):
                return rule
        return None

    def route(self, message: str, context: AssistantContext, mode) -> AssistantResponse:
        rule = self.match(message, context)
        is_first_message = not context.conversation_history

        if rule is not None:
            intent = rule.intent
        else:
            intent = "greeting" if is_first_message else "clarification"

        logger.info(
            f"Intent detected: {intent} (first_message={is_first_message}, "
            f"message={(message or '')[:50]!r})"
        )

        if not context.top_issues:
            return nothing_to_fix(intent, mode)

        if rule is not None:
            return rule.handler(message, context, mode)
        if is_first_message:
            return handle_greeting(message, context, mode)
        return handle_clarification(message, context, mode)


default_router = IntentRouter()
