"""
Detector registry.

Registration order is part of the contract: when two detectors report the
exact same confidence the one registered first wins. Keep new platforms at
the end of DETECTORS unless the tie-break order is meant to change.

Weights reflect how reliable each category is: hosting URLs and generator
tags are near-conclusive, structural HTML and asset hints are supporting
evidence only.
"""
from typing import Dict, Optional, Tuple

from app.features.platform_detection.schemas.platform import EvidenceSource, Platform
from app.features.platform_detection.services.detectors import (
    EvidenceRule,
    PlatformDetector,
    any_of,
    body_class_contains,
    data_attribute_contains,
    data_attribute_prefix,
    generator_contains,
    html_contains,
    meta_named,
    page_class_contains,
    script_contains,
    stylesheet_contains,
    url_contains,
)

URL = EvidenceSource.url
META = EvidenceSource.meta
HTML = EvidenceSource.html
SCRIPT = EvidenceSource.script

# Confidence a detection must exceed before platform guides are offered.
# Code frameworks and the first-party builders use 0.5, the hosted builders
# whose guides are generic use 0.4. Needs product confirmation before unifying.
GUIDE_THRESHOLDS: Dict[Platform, Optional[float]] = {
    Platform.webflow: 0.5,
    Platform.wordpress: 0.5,
    Platform.framer: 0.5,
    Platform.nextjs: 0.5,
    Platform.react: 0.5,
    Platform.vue: 0.5,
    Platform.squarespace: 0.4,
    Platform.wix: 0.4,
    Platform.shopify: 0.4,
}


def _detector(platform: Platform, *rules: EvidenceRule) -> PlatformDetector:
    return PlatformDetector(
        platform=platform,
        rules=tuple(rules),
        guides_threshold=GUIDE_THRESHOLDS.get(platform),
    )


DETECTORS: Tuple[PlatformDetector, ...] = (
    _detector(
        Platform.webflow,
        EvidenceRule(URL, 0.5, url_contains(".webflow.io", "webflow.com"), "hosting domain"),
        EvidenceRule(META, 0.4, generator_contains("Webflow", case_sensitive=True), "generator tag"),
        EvidenceRule(HTML, 0.3, page_class_contains("w-mod-js"), "w-mod-js class"),
        EvidenceRule(SCRIPT, 0.3, script_contains("webflow"), "webflow.js"),
        EvidenceRule(HTML, 0.2, html_contains('class="w-', "w-container"), "w- classes"),
    ),
    _detector(
        Platform.wordpress,
        EvidenceRule(URL, 0.4, url_contains("/wp-content/", "/wp-includes/"), "wp path"),
        EvidenceRule(META, 0.5, generator_contains("WordPress", case_sensitive=True), "generator tag"),
        EvidenceRule(SCRIPT, 0.3, script_contains("wp-content", "wp-includes"), "wp scripts"),
        EvidenceRule(SCRIPT, 0.2, stylesheet_contains("wp-content", "wp-includes"), "wp styles"),
        EvidenceRule(HTML, 0.2, body_class_contains("wp-", "wordpress"), "body classes"),
        EvidenceRule(HTML, 0.2, html_contains("wp-json", "/wp/v2/"), "REST API links"),
    ),
    _detector(
        Platform.framer,
        EvidenceRule(URL, 0.6, url_contains(".framer.website", ".framer.app"), "hosting domain"),
        EvidenceRule(META, 0.4, generator_contains("Framer", case_sensitive=True), "generator tag"),
        EvidenceRule(HTML, 0.4, data_attribute_prefix("data-framer"), "data-framer attributes"),
        EvidenceRule(SCRIPT, 0.3, script_contains("framer"), "framer scripts"),
        EvidenceRule(HTML, 0.2, html_contains("data-framer-", "framer-"), "framer markup"),
    ),
    _detector(
        Platform.nextjs,
        EvidenceRule(SCRIPT, 0.5, script_contains("/_next/"), "_next assets"),
        EvidenceRule(HTML, 0.4, html_contains("__NEXT_DATA__", "__next"), "__NEXT_DATA__"),
        EvidenceRule(META, 0.3, generator_contains("Next.js", case_sensitive=True), "generator tag"),
        EvidenceRule(HTML, 0.3, html_contains('id="__next"'), "__next root"),
    ),
    _detector(
        Platform.react,
        EvidenceRule(HTML, 0.3, data_attribute_contains("react"), "react data attributes"),
        EvidenceRule(HTML, 0.3, html_contains('id="root"', "data-reactroot"), "react root"),
        EvidenceRule(SCRIPT, 0.3, script_contains("react"), "react bundle"),
    ),
    _detector(
        Platform.vue,
        EvidenceRule(HTML, 0.4, data_attribute_prefix("data-v-"), "scoped style attributes"),
        EvidenceRule(HTML, 0.3, html_contains("v-cloak", "v-app"), "vue directives"),
        EvidenceRule(SCRIPT, 0.3, script_contains("vue"), "vue bundle"),
    ),
    _detector(
        Platform.squarespace,
        EvidenceRule(URL, 0.6, url_contains("squarespace.com"), "hosting domain"),
        EvidenceRule(META, 0.5, generator_contains("squarespace"), "generator tag"),
        EvidenceRule(SCRIPT, 0.4, script_contains("squarespace"), "squarespace scripts"),
        EvidenceRule(
            HTML, 0.3,
            any_of(html_contains("squarespace"), body_class_contains("squarespace-")),
            "squarespace markup",
        ),
        EvidenceRule(
            HTML, 0.3, html_contains('data-controller="Squarespace', "sqs-"), "sqs- blocks"
        ),
    ),
    _detector(
        Platform.wix,
        EvidenceRule(
            URL, 0.7, url_contains("wixsite.com", "wix.com", "editorx.com"), "hosting domain"
        ),
        EvidenceRule(META, 0.5, generator_contains("wix"), "generator tag"),
        EvidenceRule(
            SCRIPT, 0.4, script_contains("wixstatic.com", "parastorage.com"), "wix static assets"
        ),
        EvidenceRule(HTML, 0.3, html_contains("wix-", "_wix", "data-wix-"), "wix markup"),
        EvidenceRule(HTML, 0.2, data_attribute_contains("wix"), "wix data attributes"),
    ),
    _detector(
        Platform.shopify,
        EvidenceRule(URL, 0.7, url_contains("myshopify.com", "shopifycdn.com"), "hosting domain"),
        EvidenceRule(META, 0.5, generator_contains("shopify"), "generator tag"),
        EvidenceRule(SCRIPT, 0.4, script_contains("shopify", "cdn.shopify.com"), "shopify cdn"),
        EvidenceRule(HTML, 0.3, html_contains("Shopify.", "shopify-section"), "shopify sections"),
        EvidenceRule(META, 0.3, meta_named("shopify-checkout-api-token"), "checkout token"),
    ),
    _detector(
        Platform.wix_studio,
        EvidenceRule(
            URL, 0.7, any_of(url_contains("wixstudio.com"), html_contains("wix-studio")),
            "studio domain or markup",
        ),
        EvidenceRule(SCRIPT, 0.4, script_contains("wixstudio"), "studio scripts"),
    ),
    _detector(
        Platform.carrd,
        EvidenceRule(URL, 0.8, url_contains("carrd.co"), "hosting domain"),
        EvidenceRule(SCRIPT, 0.4, script_contains("carrd.co"), "carrd scripts"),
        EvidenceRule(
            HTML, 0.3, any_of(html_contains("carrd-"), body_class_contains("carrd")), "carrd markup"
        ),
    ),
    _detector(
        Platform.gatsby,
        EvidenceRule(META, 0.6, generator_contains("gatsby"), "generator tag"),
        EvidenceRule(SCRIPT, 0.4, script_contains("gatsby"), "gatsby bundle"),
        EvidenceRule(HTML, 0.3, html_contains("___gatsby", "gatsby-"), "gatsby markup"),
        EvidenceRule(HTML, 0.3, html_contains('id="___gatsby"'), "___gatsby root"),
    ),
    _detector(
        Platform.angular,
        EvidenceRule(HTML, 0.5, html_contains("ng-version", "ng-app"), "ng-version"),
        EvidenceRule(SCRIPT, 0.4, script_contains("angular", "@angular"), "angular bundle"),
        EvidenceRule(HTML, 0.3, data_attribute_prefix("data-ng-", "ng-"), "ng attributes"),
    ),
    _detector(
        Platform.svelte,
        EvidenceRule(SCRIPT, 0.5, script_contains("svelte"), "svelte bundle"),
        EvidenceRule(
            HTML, 0.4, any_of(html_contains("svelte-"), body_class_contains("svelte-")),
            "svelte scoped classes",
        ),
        EvidenceRule(META, 0.5, generator_contains("svelte", "sveltekit"), "generator tag"),
    ),
    _detector(
        Platform.hugo,
        EvidenceRule(META, 0.7, generator_contains("hugo"), "generator tag"),
        EvidenceRule(HTML, 0.3, html_contains("hugo-"), "hugo markup"),
    ),
    _detector(
        Platform.jekyll,
        EvidenceRule(META, 0.7, generator_contains("jekyll"), "generator tag"),
        EvidenceRule(HTML, 0.3, html_contains("jekyll-"), "jekyll markup"),
    ),
    _detector(
        Platform.drupal,
        EvidenceRule(META, 0.6, generator_contains("drupal"), "generator tag"),
        EvidenceRule(
            HTML, 0.4, html_contains("Drupal.", "/sites/default/files/", "/sites/all/"),
            "drupal paths",
        ),
        EvidenceRule(SCRIPT, 0.3, script_contains("/sites/default/", "drupal"), "drupal scripts"),
        EvidenceRule(HTML, 0.2, body_class_contains("drupal-"), "body classes"),
    ),
    _detector(
        Platform.joomla,
        EvidenceRule(META, 0.6, generator_contains("joomla"), "generator tag"),
        EvidenceRule(HTML, 0.4, html_contains("joomla", "/components/com_"), "joomla components"),
        EvidenceRule(SCRIPT, 0.3, script_contains("joomla", "/media/system/"), "joomla scripts"),
    ),
    _detector(
        Platform.ghost,
        EvidenceRule(META, 0.7, generator_contains("ghost"), "generator tag"),
        EvidenceRule(SCRIPT, 0.4, script_contains("ghost", "/ghost/"), "ghost scripts"),
        EvidenceRule(
            HTML, 0.3, any_of(html_contains("ghost-"), body_class_contains("ghost-")),
            "ghost markup",
        ),
    ),
)
