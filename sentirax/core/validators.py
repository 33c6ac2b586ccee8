from __future__ import annotations

from urllib.parse import urlsplit

from sentirax.core.errors import InvalidUrl

ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_valid_url(value: str) -> bool:
    """True for absolute http(s) URLs with a host; False for anything else."""
    if not value or not isinstance(value, str):
        return False
    try:
        parts = urlsplit(value)
        # .port raises ValueError for out-of-range or non-numeric ports
        parts.port
    except ValueError:
        return False
    # Spaces in the path or query are allowed; a browser percent-encodes them.
    if any(ch.isspace() for ch in parts.netloc):
        return False
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return False
    return bool(parts.hostname)


def require_valid_url(value: str) -> str:
    """Trim the input and return it, or raise InvalidUrl."""
    url = (value or "").strip()
    if not is_valid_url(url):
        raise InvalidUrl(url)
    return url
