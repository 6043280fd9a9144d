import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from app.features.assistant.schemas.assistant import (
    AssistantContext,
    ChatContext,
    HistoryMessage,
    Issue,
    ScanSummary,
    SiteInfo,
    UserInfo,
)
from app.features.platform_detection.schemas.platform import CapabilityVector, PageSignals
from app.features.platform_detection.services.capabilities import get_capabilities
from app.features.platform_detection.services.classifier import PlatformClassifier, default_classifier
from app.platform.config import settings

logger = logging.getLogger(__name__)

SEVERITY_RANK: Dict[str, int] = {
    "critical": 0,
    "serious": 1,
    "moderate": 2,
    "minor": 3,
}
UNKNOWN_SEVERITY_RANK = 4

STORED_FROM_SCAN = "stored-from-scan"
FALLBACK_DETECTION = "fallback-detection"

# Confidence assumed for a bare platform label stored without one
DEFAULT_STORED_CONFIDENCE = 0.8


def severity_rank(impact: Optional[str]) -> int:
    return SEVERITY_RANK.get((impact or "").lower(), UNKNOWN_SEVERITY_RANK)


def sort_issues(issues: Iterable[Issue]) -> List[Issue]:
    """Most severe first. Stable, so equal severities keep their input order."""
    return sorted(issues, key=lambda issue: severity_rank(issue.impact))


def count_by_severity(issues: Iterable[Issue]) -> Dict[str, int]:
    """
    Count issues per severity. The four known severities are always present;
    ``unknown`` only appears when some issue has an unrecognised impact.
    """
    counts = {severity: 0 for severity in SEVERITY_RANK}
    unknown = 0
    for issue in issues:
        severity = (issue.impact or "").lower()
        if severity in counts:
            counts[severity] += 1
        else:
            unknown += 1
    if unknown:
        counts["unknown"] = unknown
    return counts


class ResolvedPlatform(BaseModel):
    model_config = ConfigDict(frozen=True)

    platform: str
    confidence: Optional[float] = None
    capabilities: CapabilityVector
    detected_from: str


class ContextBuilder:
    """
    Turns the client's scan context into the bounded AssistantContext.

    build() is pure: the same input always produces an equal context.
    """

    def __init__(
        self,
        issue_limit: Optional[int] = None,
        history_window: Optional[int] = None,
        classifier: Optional[PlatformClassifier] = None,
    ):
        self.issue_limit = settings.CONTEXT_ISSUE_LIMIT if issue_limit is None else issue_limit
        self.history_window = (
            settings.CONVERSATION_HISTORY_WINDOW if history_window is None else history_window
        )
        self.classifier = classifier or default_classifier

    def resolve_platform(self, context: ChatContext) -> ResolvedPlatform:
        """
        Use the platform stored with the scan when there is one. Otherwise
        classify from the site URL alone.
        """
        raw = context.platform

        if isinstance(raw, str) and raw.strip():
            label = raw.strip()
            return ResolvedPlatform(
                platform=label,
                confidence=(
                    context.platform_confidence
                    if context.platform_confidence is not None
                    else DEFAULT_STORED_CONFIDENCE
                ),
                capabilities=get_capabilities(label),
                detected_from=STORED_FROM_SCAN,
            )

        if isinstance(raw, dict) and raw.get("platform"):
            label = str(raw["platform"])
            confidence = raw.get("confidence", context.platform_confidence)
            return ResolvedPlatform(
                platform=label,
                confidence=float(confidence) if confidence is not None else None,
                capabilities=self._stored_capabilities(label, raw.get("capabilities")),
                detected_from=STORED_FROM_SCAN,
            )

        detection = self.classifier.classify(PageSignals(url=context.site_url))
        return ResolvedPlatform(
            platform=detection.platform.value,
            confidence=detection.confidence,
            capabilities=detection.capabilities,
            detected_from=FALLBACK_DETECTION,
        )

    @staticmethod
    def _stored_capabilities(label: str, raw: Any) -> CapabilityVector:
        if isinstance(raw, dict):
            try:
                return CapabilityVector.model_validate(raw)
            except ValidationError:
                logger.warning(f"Ignoring malformed stored capabilities for {label}")
        return get_capabilities(label)

    def build(
        self,
        context: Union[ChatContext, Dict[str, Any]],
        conversation_history: Optional[Iterable[Union[HistoryMessage, Dict[str, Any]]]] = None,
    ) -> AssistantContext:
        if not isinstance(context, ChatContext):
            context = ChatContext.model_validate(context or {})

        platform = self.resolve_platform(context)
        issues = sort_issues(context.top_issues)

        history = [
            message if isinstance(message, HistoryMessage) else HistoryMessage.model_validate(message)
            for message in (conversation_history or [])
        ]
        history = history[-self.history_window:] if self.history_window > 0 else []

        return AssistantContext(
            site=SiteInfo(
                url=context.site_url,
                name=context.site_name,
                platform=platform.platform,
                capabilities=platform.capabilities,
            ),
            scan=ScanSummary(
                id=context.scan_id,
                verdict=context.verdict,
                total_issues=len(issues),
                counts_by_severity=count_by_severity(issues),
                categories=list(context.categories),
            ),
            user=UserInfo(mode=context.mode, team_id=context.team_id),
            top_issues=issues[: max(self.issue_limit, 0)],
            conversation_history=history,
            platform_confidence=platform.confidence,
            detected_from=platform.detected_from,
        )


context_builder = ContextBuilder()
