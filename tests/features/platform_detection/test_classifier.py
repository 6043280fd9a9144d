"""
Tests for PlatformClassifier aggregation.
"""

from unittest.mock import MagicMock

import pytest

from app.features.platform_detection.schemas.platform import (
    EvidenceSource,
    PageSignals,
    Platform,
)
from app.features.platform_detection.services.classifier import (
    PlatformClassifier,
    classify_platform,
)
from app.features.platform_detection.services.detectors import EvidenceRule, PlatformDetector


def fixed_detector(platform: Platform, weight: float, source=EvidenceSource.html) -> PlatformDetector:
    return PlatformDetector(
        platform=platform,
        rules=(EvidenceRule(source, weight, lambda s: True),),
        guides_threshold=0.5,
    )


class TestPlatformClassifier:

    def test_webflow_hosting_url(self):
        result = classify_platform(PageSignals(url="https://acme.webflow.io/about"))
        assert result.platform == Platform.webflow
        assert result.confidence >= 0.5
        assert result.evidence_source == EvidenceSource.url

    def test_blank_signals_default_to_custom(self):
        result = classify_platform(
            PageSignals(url="", html_excerpt="", meta_tags=[], script_urls=[], stylesheet_urls=[])
        )
        assert result.platform == Platform.custom
        assert result.confidence == 0.3
        assert result.evidence_source == EvidenceSource.url
        assert result.guides_available is False

    def test_wordpress_generator(self):
        signals = PageSignals(
            url="https://blog.example.com",
            meta_tags=[{"name": "generator", "content": "WordPress 6.4.2"}],
            script_urls=["https://blog.example.com/wp-includes/js/jquery.js"],
        )
        result = classify_platform(signals)
        assert result.platform == Platform.wordpress
        assert result.confidence == 0.8
        assert result.evidence_source == EvidenceSource.meta
        assert result.guides_available is True
        assert result.capabilities.requires_plugin is True

    def test_exact_tie_goes_to_first_registered(self):
        classifier = PlatformClassifier(
            detectors=[
                fixed_detector(Platform.react, 0.6),
                fixed_detector(Platform.vue, 0.6),
            ]
        )
        assert classifier.classify(PageSignals()).platform == Platform.react

        reversed_classifier = PlatformClassifier(
            detectors=[
                fixed_detector(Platform.vue, 0.6),
                fixed_detector(Platform.react, 0.6),
            ]
        )
        assert reversed_classifier.classify(PageSignals()).platform == Platform.vue

    def test_strictly_greater_wins(self):
        classifier = PlatformClassifier(
            detectors=[fixed_detector(Platform.react, 0.5), fixed_detector(Platform.vue, 0.7)]
        )
        assert classifier.classify(PageSignals()).platform == Platform.vue

    def test_low_confidence_becomes_custom_but_keeps_confidence(self):
        signals = PageSignals(html_excerpt='<div id="root"></div>')
        result = classify_platform(signals)
        assert result.platform == Platform.custom
        assert result.confidence == 0.3
        assert result.evidence_source == EvidenceSource.html
        assert result.guides_available is False

    def test_low_confidence_threshold_is_inclusive_of_point_four(self):
        classifier = PlatformClassifier(detectors=[fixed_detector(Platform.vue, 0.4)])
        assert classifier.classify(PageSignals()).platform == Platform.vue

    def test_below_threshold_custom_capabilities(self):
        classifier = PlatformClassifier(detectors=[fixed_detector(Platform.webflow, 0.2)])
        result = classifier.classify(PageSignals())
        assert result.platform == Platform.custom
        assert result.confidence == 0.2
        assert result.capabilities.has_api is False
        assert result.capabilities.code_access_level.value == "full"

    def test_failing_detector_yields_default(self):
        broken = MagicMock()
        broken.detect.side_effect = RuntimeError("boom")
        result = PlatformClassifier(detectors=[broken]).classify(PageSignals(url="https://x.com"))
        assert result == PlatformClassifier.undetected()

    def test_classification_is_deterministic(self):
        signals = PageSignals(
            url="https://store.myshopify.com",
            html_excerpt="<div class='shopify-section'></div>",
        )
        assert classify_platform(signals) == classify_platform(signals)

    @pytest.mark.parametrize(
        "signals,expected",
        [
            (PageSignals(url="https://me.carrd.co"), Platform.carrd),
            (PageSignals(url="https://studio.framer.website"), Platform.framer),
            (PageSignals(url="https://acme.wixsite.com/home"), Platform.wix),
            (PageSignals(url="https://shop.myshopify.com"), Platform.shopify),
            (PageSignals(meta_tags=[{"name": "generator", "content": "Ghost 5.0"}]), Platform.ghost),
            (PageSignals(meta_tags=[{"name": "generator", "content": "Hugo 0.120"}]), Platform.hugo),
            (PageSignals(data_attribute_names=["data-framer-name", "data-framer-component-type"]), Platform.framer),
        ],
    )
    def test_recognises_platforms(self, signals, expected):
        assert classify_platform(signals).platform == expected

    def test_confidence_bounds_hold(self):
        signals = PageSignals(
            url="https://acme.webflow.io",
            html_excerpt='<html class="w-mod-js"><div class="w-container"></div>',
            meta_tags=[{"name": "generator", "content": "Webflow"}],
            script_urls=["https://assets/webflow.js", "https://x/_next/a.js", "react.js", "vue.js"],
            html_classes="w-mod-js",
        )
        result = classify_platform(signals)
        assert 0.0 <= result.confidence <= 1.0
        assert result.platform == Platform.webflow
