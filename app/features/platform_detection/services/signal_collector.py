import logging
from typing import Any, Dict, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service

from app.features.platform_detection.schemas.platform import PageSignals
from app.platform.config import settings

logger = logging.getLogger(__name__)

# Data attributes are sampled from <html>, <body> and the first 50 body children.
COLLECT_SIGNALS_SCRIPT = """
const collectDataAttributes = (element) => {
  const attrs = [];
  for (let i = 0; i < element.attributes.length; i++) {
    const name = element.attributes[i].name;
    if (name.startsWith('data-')) attrs.push(name);
  }
  return attrs;
};
const dataAttributes = new Set();
const children = document.body ? Array.from(document.body.children).slice(0, 50) : [];
[document.documentElement, document.body, ...children].forEach((el) => {
  if (el) collectDataAttributes(el).forEach((attr) => dataAttributes.add(attr));
});
return {
  url: window.location.href,
  html: document.documentElement.outerHTML.substring(0, arguments[0]),
  metaTags: Array.from(document.querySelectorAll('meta')).map((meta) => ({
    name: meta.getAttribute('name') || meta.getAttribute('property'),
    content: meta.getAttribute('content')
  })),
  scripts: Array.from(document.querySelectorAll('script[src]')).map((s) => s.src),
  stylesheets: Array.from(document.querySelectorAll('link[rel="stylesheet"]')).map((l) => l.href),
  bodyClasses: document.body ? document.body.className : '',
  htmlClasses: document.documentElement ? document.documentElement.className : '',
  dataAttributes: Array.from(dataAttributes)
};
"""


class SignalCollectorService:
    """Loads a page in headless Chrome and snapshots the evidence detectors need."""

    @staticmethod
    def build_driver() -> webdriver.Chrome:
        chrome_options = Options()
        chrome_options.add_argument("--headless")
        chrome_options.add_argument("--disable-gpu")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-dev-shm-usage")
        chrome_options.add_argument("--disable-blink-features=AutomationControlled")

        if settings.CHROMEDRIVER_PATH:
            driver_service = Service(executable_path=settings.CHROMEDRIVER_PATH)
            return webdriver.Chrome(service=driver_service, options=chrome_options)
        return webdriver.Chrome(options=chrome_options)

    @staticmethod
    def to_page_signals(raw: Optional[Dict[str, Any]], html_limit: Optional[int] = None) -> PageSignals:
        """Convert the in-page script payload into PageSignals, tolerating missing keys."""
        raw = raw or {}
        html_limit = html_limit or settings.HTML_EXCERPT_LIMIT

        meta_tags = [
            {"name": tag.get("name"), "content": tag.get("content")}
            for tag in raw.get("metaTags") or []
            if isinstance(tag, dict)
        ]

        return PageSignals(
            url=raw.get("url") or "",
            html_excerpt=(raw.get("html") or "")[:html_limit],
            meta_tags=meta_tags,
            script_urls=[s for s in raw.get("scripts") or [] if s],
            stylesheet_urls=[s for s in raw.get("stylesheets") or [] if s],
            body_classes=raw.get("bodyClasses") or "",
            html_classes=raw.get("htmlClasses") or "",
            data_attribute_names=raw.get("dataAttributes") or [],
        )

    @staticmethod
    def extract_signals(driver: webdriver.Chrome, html_limit: Optional[int] = None) -> PageSignals:
        html_limit = html_limit or settings.HTML_EXCERPT_LIMIT
        raw = driver.execute_script(COLLECT_SIGNALS_SCRIPT, html_limit)
        return SignalCollectorService.to_page_signals(raw, html_limit)

    @staticmethod
    def collect(url: str, timeout: Optional[int] = None) -> PageSignals:
        """
        Load ``url`` and return its PageSignals. The driver is always closed.

        Raises:
            TimeoutException: If the page takes longer than ``timeout`` seconds
            WebDriverException: If the browser fails to load the page
        """
        timeout = timeout or settings.PAGE_LOAD_TIMEOUT
        driver = SignalCollectorService.build_driver()

        try:
            driver.set_page_load_timeout(timeout)
            logger.info(f"Collecting platform signals from {url}")
            driver.get(url)
            signals = SignalCollectorService.extract_signals(driver)
            logger.info(
                f"Collected signals for {url}: {len(signals.script_urls)} scripts, "
                f"{len(signals.meta_tags)} meta tags, {len(signals.data_attribute_names)} data attributes"
            )
            return signals
        except TimeoutException:
            raise TimeoutException(f"Page load timeout after {timeout} seconds for URL: {url}")
        finally:
            driver.quit()
