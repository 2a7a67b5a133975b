"""Long URL sanitization and validation."""

import re
from typing import List, Tuple

from pydantic import HttpUrl, TypeAdapter, ValidationError

from urlshortener.models.url import LONG_URL_MAX_LENGTH

# Schemes rejected outright, matched as case-insensitive prefixes
DISALLOWED_SCHEMES = ("javascript:", "data:", "vbscript:", "file:", "ftp:")

_WHITESPACE_RE = re.compile(r"\s+")
_http_url_adapter = TypeAdapter(HttpUrl)


def sanitize_url(raw_url: str) -> str:
    """Trim the URL and drop every whitespace character inside it."""
    return _WHITESPACE_RE.sub("", raw_url.strip())


def _is_absolute_http_url(url: str) -> bool:
    try:
        parsed = _http_url_adapter.validate_python(url)
    except ValidationError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def check_long_url(url: str) -> Tuple[bool, List[str]]:
    """
    Validate an already sanitized long URL.

    Returns:
        Tuple of (is_valid, reasons); reasons is empty when valid.
    """
    if not url:
        return False, ["URL is required"]

    reasons = []
    if len(url) > LONG_URL_MAX_LENGTH:
        reasons.append(f"URL too long (maximum {LONG_URL_MAX_LENGTH} characters)")
    if not _is_absolute_http_url(url):
        reasons.append("Invalid URL. Use http:// or https://")

    if url.lower().startswith(DISALLOWED_SCHEMES):
        reasons.append("Protocol not allowed")

    return not reasons, reasons
