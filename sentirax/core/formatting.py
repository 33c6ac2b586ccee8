"""
Pure string helpers for the results view: durations, filenames, extensions.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

DEFAULT_FILENAME = "instagram-media"

MEDIA_EXTENSIONS = ("mp4", "mov", "webm", "mp3", "m4a", "wav", "jpg", "jpeg", "png", "webp")

# Extension must sit right before a query string, fragment, or the end of the URL.
_EXTENSION_RE = re.compile(
    r"\.(" + "|".join(MEDIA_EXTENSIONS) + r")(?:\?|#|$)",
    re.IGNORECASE,
)

_DEFAULT_EXTENSIONS = {
    "video": ".mp4",
    "audio": ".mp3",
    "image": ".jpg",
}

_UNSAFE_RUN_RE = re.compile(r"[^a-z0-9._-]+")
_HYPHEN_RUN_RE = re.compile(r"-+")
_EDGE_RE = re.compile(r"^[-.]+|[-.]+$")


def to_seconds(value: Any) -> float:
    """Coerce a backend duration to float seconds; NaN when missing or non-numeric."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        # json gives arbitrarily large ints; past float range they read as infinite
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def format_duration(seconds: float) -> str:
    """
    Format seconds as MM:SS, or H:MM:SS once there is at least one hour.

    Non-finite input gives an empty string. Negative and fractional values
    are floored and clamped to zero.
    """
    if seconds is None or not math.isfinite(seconds):
        return ""
    total = max(0, math.floor(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def sanitize_filename(value: Optional[str]) -> str:
    """Lowercase slug safe for a download filename; may be empty."""
    text = str(value or "").lower()
    text = _UNSAFE_RUN_RE.sub("-", text)
    text = _HYPHEN_RUN_RE.sub("-", text)
    return _EDGE_RE.sub("", text)


def guess_extension(link: Optional[str], media_type: str) -> str:
    """Extension (with dot) taken from the link, else a default for the media type."""
    match = _EXTENSION_RE.search(link or "")
    if match:
        return f".{match.group(1).lower()}"
    return _DEFAULT_EXTENSIONS.get(media_type, ".bin")


def build_filename(
    title: Optional[str],
    link: Optional[str],
    media_type: str,
    *,
    fallback: str = DEFAULT_FILENAME,
    suffix: str = "",
) -> str:
    """Slug of the title (or fallback when it slugs to nothing), suffix, then extension."""
    base = sanitize_filename(title) or fallback
    return f"{base}{suffix}{guess_extension(link, media_type)}"
