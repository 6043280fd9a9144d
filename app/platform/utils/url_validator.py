from typing import Tuple
from urllib.parse import urlparse

ALLOWED_SCHEMES = ("http", "https")


def normalize_url(url: str) -> Tuple[str, bool]:
    """Strip whitespace and default to https. Returns (url, was_modified)."""
    url = url.strip()
    if not urlparse(url).scheme:
        return f"https://{url}", True
    return url, False


def validate_url(url: str) -> Tuple[bool, str, str]:
    """
    Check that ``url`` is something a headless browser can load.

    Returns (is_valid, normalized_url, error_message).
    """
    if not url or not url.strip():
        return False, "", "URL cannot be empty"

    normalized_url, _ = normalize_url(url)

    try:
        parsed = urlparse(normalized_url)
    except ValueError as e:
        return False, normalized_url, f"URL parsing error: {str(e)}"

    if parsed.scheme not in ALLOWED_SCHEMES:
        return False, normalized_url, f"Invalid URL scheme: {parsed.scheme} (must be http or https)"

    if not parsed.netloc or any(ch.isspace() for ch in parsed.netloc):
        return False, normalized_url, "Invalid URL format: missing or malformed domain"

    return True, normalized_url, ""
