import logging
from typing import Iterable, Optional

from app.features.platform_detection.schemas.platform import (
    EvidenceSource,
    PageSignals,
    Platform,
    PlatformDetectionResult,
)
from app.features.platform_detection.services.capabilities import get_capabilities
from app.features.platform_detection.services.detectors import PlatformDetector
from app.features.platform_detection.services.registry import DETECTORS

logger = logging.getLogger(__name__)


class PlatformClassifier:
    """
    Runs every registered detector over a page snapshot and picks a winner.

    - Strictly greatest confidence wins; exact ties go to the detector
      registered first.
    - A winner under LOW_CONFIDENCE_THRESHOLD is relabelled ``custom`` but
      keeps its numeric confidence for diagnostics.
    - A page with no evidence at all, or any internal failure, yields the
      undetected default (``custom`` at 0.3 from ``url``).

    classify() never raises.
    """

    LOW_CONFIDENCE_THRESHOLD = 0.4
    UNDETECTED_CONFIDENCE = 0.3

    def __init__(self, detectors: Optional[Iterable[PlatformDetector]] = None):
        self.detectors = tuple(DETECTORS if detectors is None else detectors)

    @classmethod
    def undetected(cls) -> PlatformDetectionResult:
        return PlatformDetectionResult(
            platform=Platform.custom,
            confidence=cls.UNDETECTED_CONFIDENCE,
            evidence_source=EvidenceSource.url,
            capabilities=get_capabilities(Platform.custom),
            guides_available=False,
        )

    def classify(self, signals: PageSignals) -> PlatformDetectionResult:
        try:
            return self._classify(signals)
        except Exception as e:
            logger.error(f"Platform detection failed, defaulting to custom: {str(e)}", exc_info=True)
            return self.undetected()

    def _classify(self, signals: PageSignals) -> PlatformDetectionResult:
        results = [detector.detect(signals) for detector in self.detectors]

        ranked = sorted(results, key=lambda r: r.confidence, reverse=True)
        logger.info(
            "Platform detection candidates: "
            + ", ".join(f"{r.platform.value}={r.confidence:.2f}" for r in ranked)
        )

        best = results[0]
        for result in results[1:]:
            if result.confidence > best.confidence:
                best = result

        if best.confidence < self.LOW_CONFIDENCE_THRESHOLD:
            logger.warning(
                f"No platform detected with confidence (best {best.platform.value}="
                f"{best.confidence:.2f}), defaulting to custom. Page signals: "
                f"scripts={len(signals.script_urls)}, stylesheets={len(signals.stylesheet_urls)}, "
                f"meta={len(signals.meta_tags)}, url={signals.url[:100]!r}"
            )
            if best.confidence == 0:
                return self.undetected()

            best = PlatformDetectionResult(
                platform=Platform.custom,
                confidence=best.confidence,
                evidence_source=best.evidence_source,
                capabilities=get_capabilities(Platform.custom),
                guides_available=False,
            )

        logger.info(
            f"Platform detected: {best.platform.value} "
            f"(confidence={best.confidence:.2f}, from={best.evidence_source.value})"
        )
        return best


default_classifier = PlatformClassifier()


def classify_platform(signals: PageSignals) -> PlatformDetectionResult:
    return default_classifier.classify(signals)
