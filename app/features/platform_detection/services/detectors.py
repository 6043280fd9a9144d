"""
Per-platform detectors.

A detector scores one platform against a PageSignals snapshot. Confidence is
the clamped sum of the weights of every evidence rule that matched, and the
evidence source is the category of the first rule that matched (rules are
evaluated in declaration order). Detectors are pure and independent of each
other, so the classifier may run them in any order.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from app.features.platform_detection.schemas.platform import (
    EvidenceSource,
    PageSignals,
    Platform,
    PlatformDetectionResult,
)
from app.features.platform_detection.services.capabilities import get_capabilities

Predicate = Callable[[PageSignals], bool]


@dataclass(frozen=True)
class EvidenceRule:
    """One independent piece of evidence and how much it is worth."""
    source: EvidenceSource
    weight: float
    matches: Predicate
    description: str = ""


@dataclass(frozen=True)
class PlatformDetector:
    platform: Platform
    rules: Tuple[EvidenceRule, ...] = field(default_factory=tuple)
    # None means no remediation guides exist for this platform
    guides_threshold: Optional[float] = None

    def detect(self, signals: PageSignals) -> PlatformDetectionResult:
        confidence = 0.0
        sources: List[EvidenceSource] = []

        for rule in self.rules:
            if rule.matches(signals):
                confidence += rule.weight
                sources.append(rule.source)

        confidence = round(min(confidence, 1.0), 2)

        return PlatformDetectionResult(
            platform=self.platform,
            confidence=confidence,
            evidence_source=sources[0] if sources else EvidenceSource.html,
            capabilities=get_capabilities(self.platform),
            guides_available=(
                self.guides_threshold is not None and confidence > self.guides_threshold
            ),
        )


# ----------------------------------------------------------------------------
# Predicate builders
# ----------------------------------------------------------------------------

def url_contains(*needles: str) -> Predicate:
    return lambda s: any(n in s.url for n in needles)


def html_contains(*needles: str) -> Predicate:
    return lambda s: any(n in s.html_excerpt for n in needles)


def script_contains(*needles: str) -> Predicate:
    return lambda s: any(n in src for src in s.script_urls for n in needles)


def stylesheet_contains(*needles: str) -> Predicate:
    return lambda s: any(n in href for href in s.stylesheet_urls for n in needles)


def body_class_contains(*needles: str) -> Predicate:
    return lambda s: any(n in s.body_classes for n in needles)


def page_class_contains(*needles: str) -> Predicate:
    """Match against both the <html> and <body> class lists."""
    return lambda s: any(n in s.html_classes or n in s.body_classes for n in needles)


def generator_contains(*needles: str, case_sensitive: bool = False) -> Predicate:
    """Match on the generator meta tag, ignoring case unless ``case_sensitive``."""
    def _match(s: PageSignals) -> bool:
        generator = s.generator() or ""
        if case_sensitive:
            return bool(generator) and any(n in generator for n in needles)
        generator = generator.lower()
        return bool(generator) and any(n.lower() in generator for n in needles)
    return _match


def meta_named(name: str) -> Predicate:
    return lambda s: any(tag.name == name for tag in s.meta_tags)


def data_attribute_prefix(*prefixes: str) -> Predicate:
    return lambda s: any(attr.startswith(p) for attr in s.data_attribute_names for p in prefixes)


def data_attribute_contains(needle: str) -> Predicate:
    return lambda s: any(needle in attr for attr in s.data_attribute_names)


def any_of(*predicates: Predicate) -> Predicate:
    return lambda s: any(p(s) for p in predicates)
