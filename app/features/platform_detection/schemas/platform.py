"""
Platform Detection Schemas

Value objects shared by the detectors, the classifier and the capability
resolver, plus the request/response models of the detection endpoints.
"""
import enum
from typing import Any, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.platform.config import settings


class Platform(str, enum.Enum):
    """Authoring platforms the classifier can name"""
    webflow = "webflow"
    wordpress = "wordpress"
    framer = "framer"
    nextjs = "nextjs"
    react = "react"
    vue = "vue"
    squarespace = "squarespace"
    wix = "wix"
    shopify = "shopify"
    wix_studio = "wix-studio"
    carrd = "carrd"
    gatsby = "gatsby"
    angular = "angular"
    svelte = "svelte"
    hugo = "hugo"
    jekyll = "jekyll"
    drupal = "drupal"
    joomla = "joomla"
    ghost = "ghost"
    custom = "custom"


class EvidenceSource(str, enum.Enum):
    """Evidence category that first contributed to a detection"""
    url = "url"
    meta = "meta"
    html = "html"
    script = "script"


class CodeAccessLevel(str, enum.Enum):
    full = "full"
    limited = "limited"
    none = "none"


class MetaTag(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    content: Optional[str] = None


class PageSignals(BaseModel):
    """
    Snapshot of a loaded page, produced once per scan by the signal collector.

    Every field is optional so detectors can run against partial evidence
    (a bare URL, an HTML dump, ...). ``None`` values are coerced to empties.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "url": "https://acme.webflow.io/",
                "html_excerpt": "<html class=\"w-mod-js\">...",
                "meta_tags": [{"name": "generator", "content": "Webflow"}],
                "script_urls": ["https://assets.website-files.com/js/webflow.js"],
                "html_classes": "w-mod-js",
                "data_attribute_names": ["data-wf-page", "data-wf-site"],
            }
        },
    )

    url: str = ""
    html_excerpt: str = ""
    meta_tags: List[MetaTag] = Field(default_factory=list)
    script_urls: List[str] = Field(default_factory=list)
    stylesheet_urls: List[str] = Field(default_factory=list)
    body_classes: str = ""
    html_classes: str = ""
    data_attribute_names: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("url", "html_excerpt", "body_classes", "html_classes", mode="before")
    @classmethod
    def _none_to_empty_str(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("html_excerpt")
    @classmethod
    def _cap_html_excerpt(cls, value: str) -> str:
        return value[: settings.HTML_EXCERPT_LIMIT]

    @field_validator("meta_tags", "script_urls", "stylesheet_urls", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: Any) -> Any:
        if value is None:
            return []
        return [item for item in value if item is not None]

    @field_validator("data_attribute_names", mode="before")
    @classmethod
    def _none_to_empty_set(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        return frozenset(item for item in value if item)

    def generator(self) -> Optional[str]:
        """Content of the first ``<meta name="generator">`` tag, if any."""
        for tag in self.meta_tags:
            if tag.name == "generator":
                return tag.content or ""
        return None


class CapabilityVector(BaseModel):
    """What remediation is technically feasible on a platform."""
    model_config = ConfigDict(frozen=True)

    has_api: bool = False
    can_auto_fix: bool = False
    requires_plugin: bool = False
    has_visual_editor: bool = False
    code_access_level: CodeAccessLevel = CodeAccessLevel.full


class PlatformActionProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_create_pr: bool
    can_email_designer: bool
    can_generate_code: bool
    can_deep_link: bool
    recommended_approach: str


class PlatformDetectionResult(BaseModel):
    """Winning detection for a scan. Created once and never mutated."""
    model_config = ConfigDict(frozen=True)

    platform: Platform
    confidence: float = Field(ge=0.0, le=1.0)
    evidence_source: EvidenceSource
    capabilities: CapabilityVector
    guides_available: bool = False


# ============================================================================
# Endpoint Schemas
# ============================================================================

class DetectionRequest(BaseModel):
    """Classify a page snapshot, optionally caching the result for a scan."""
    scan_id: Optional[str] = None
    signals: PageSignals

    class Config:
        json_schema_extra = {
            "example": {
                "scan_id": "019ac123-4567-89ab-cdef-0123456789ab",
                "signals": {"url": "https://acme.webflow.io/"},
            }
        }


class PlatformGuideResponse(BaseModel):
    platform: str
    issue_type: str
    mode: str
    guide: str
    has_guides: bool = False
    actions: PlatformActionProfile
    capabilities: CapabilityVector