"""
Assistant Schemas

Wire models for the chat endpoint and the value objects passed between the
context builder, the response strategies and the action suggester.
"""
import enum
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.features.platform_detection.schemas.platform import CapabilityVector


class Mode(str, enum.Enum):
    """Audience persona that selects vocabulary and depth"""
    founder = "founder"
    developer = "developer"


class Issue(BaseModel):
    """A scan finding as the assistant sees it. Read-only."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    rule_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("rule_id", "ruleId", "rule")
    )
    description: str = ""
    impact: Optional[str] = None
    wcag_refs: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("wcag_refs", "wcagRefs", "wcag")
    )
    selector: Optional[str] = None

    @field_validator("id", "rule_id", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("wcag_refs", mode="before")
    @classmethod
    def _wcag_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @property
    def rule(self) -> str:
        return self.rule_id or self.id or "unknown-rule"


class HistoryMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class ChatContext(BaseModel):
    """Scan context sent by the client with every chat turn."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    scan_id: Optional[str] = None
    team_id: Optional[str] = None
    site_url: str = ""
    site_name: str = ""
    verdict: Optional[str] = None
    mode: Mode = Mode.founder
    # Either a bare label stored with the scan or a full detection object
    platform: Optional[Union[str, Dict[str, Any]]] = None
    platform_confidence: Optional[float] = None
    top_issues: List[Issue] = Field(default_factory=list)
    categories: List[Any] = Field(default_factory=list)

    @field_validator("scan_id", "team_id", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("site_url", "site_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("top_issues", "categories", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class ChatRequest(BaseModel):
    """
    One chat turn. ``message`` and ``context`` are checked by the route so a
    missing one is reported as a plain client error.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "What should I fix first?",
                "context": {
                    "scanId": "019ac123-4567-89ab-cdef-0123456789ab",
                    "teamId": "team_1",
                    "siteUrl": "https://acme.webflow.io",
                    "siteName": "Acme",
                    "verdict": "at-risk",
                    "mode": "founder",
                    "platform": "webflow",
                    "platformConfidence": 0.9,
                    "topIssues": [
                        {
                            "id": "1",
                            "rule_id": "image-alt",
                            "description": "Images must have alternate text",
                            "impact": "critical",
                            "wcag": ["1.1.1"],
                            "selector": "img.hero",
                        }
                    ],
                    "categories": [],
                },
                "conversationHistory": [],
            }
        },
    )

    message: Optional[str] = None
    context: Optional[ChatContext] = None
    conversation_history: List[HistoryMessage] = Field(default_factory=list)


# ============================================================================
# Assistant Context
# ============================================================================

class SiteInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    name: str
    platform: str
    capabilities: CapabilityVector


class ScanSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    verdict: Optional[str] = None
    total_issues: int = 0
    counts_by_severity: Dict[str, int] = Field(default_factory=dict)
    categories: List[Any] = Field(default_factory=list)

    def count(self, severity: str) -> int:
        return self.counts_by_severity.get(severity, 0)


class UserInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Mode
    team_id: Optional[str] = None


class AssistantContext(BaseModel):
    """Bounded, request-scoped view of a scan handed to the strategies."""
    model_config = ConfigDict(frozen=True)

    site: SiteInfo
    scan: ScanSummary
    user: UserInfo
    top_issues: List[Issue] = Field(default_factory=list)
    conversation_history: List[HistoryMessage] = Field(default_factory=list)
    platform_confidence: Optional[float] = None
    # "stored-from-scan" or "fallback-detection"
    detected_from: str = "stored-from-scan"


# ============================================================================
# Responses
# ============================================================================

class ActionSuggestion(BaseModel):
    """Follow-up the UI may offer. ``icon`` is a plain identifier, not a component."""
    model_config = ConfigDict(frozen=True)

    label: str
    action: str
    icon: str


class AssistantResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent: str
    content: str
    actions: List[ActionSuggestion] = Field(default_factory=list)


class ChatMetadata(BaseModel):
    platform: Optional[str] = None
    confidence: Optional[float] = None
    intent: str


class ChatResponse(BaseModel):
    message: str
    actions: List[ActionSuggestion] = Field(default_factory=list)
    metadata: ChatMetadata


# ============================================================================
# AI Suggestions
# ============================================================================

class SuggestionsRequest(BaseModel):
    url: Optional[str] = None
    violations: Any = None


class SuggestionsResult(BaseModel):
    summary: Any = None
    fixes: List[Any] = Field(default_factory=list)
    impact: Optional[float] = None
