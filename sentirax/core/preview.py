"""
Preview target selection.

Decides what the preview overlay should show for a result, without touching
any widget: an embedded YouTube player, an audio player, an image, or a
generic video player with the thumbnail as poster.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from sentirax.core.dto.preview import PreviewDTO
from sentirax.core.dto.result import ResultViewDTO

YOUTUBE_HOSTS = frozenset({
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtube-nocookie.com",
    "www.youtube-nocookie.com",
})
YOUTUBE_SHORT_HOSTS = frozenset({"youtu.be", "www.youtu.be"})

# Path markers followed by the video id, e.g. /embed/<id>, /shorts/<id>
_ID_MARKERS = ("embed", "shorts")
_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{6,}$")

EMBED_URL_TEMPLATE = "https://www.youtube.com/embed/{video_id}"
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"


def is_youtube_url(url: Optional[str]) -> bool:
    if not url:
        return False
    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return False
    return host in YOUTUBE_HOSTS or host in YOUTUBE_SHORT_HOSTS


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """
    Video id from a YouTube-family URL.

    Looks at, in order: the youtu.be trailing path segment, the "v" query
    parameter, then the /embed/ and /shorts/ markers.
    """
    if not is_youtube_url(url):
        return None
    parts = urlsplit(url)
    host = (parts.hostname or "").lower()
    segments = [s for s in parts.path.split("/") if s]

    candidate = None
    if host in YOUTUBE_SHORT_HOSTS:
        candidate = segments[-1] if segments else None
    if not candidate:
        values = parse_qs(parts.query).get("v")
        candidate = values[0] if values else None
    if not candidate:
        for marker in _ID_MARKERS:
            if marker in segments:
                idx = segments.index(marker)
                if idx + 1 < len(segments):
                    candidate = segments[idx + 1]
                    break

    if candidate and _VIDEO_ID_RE.match(candidate):
        return candidate
    return None


def select_preview_url(result: ResultViewDTO) -> Optional[str]:
    """Download URL, then source URL, then thumbnail URL."""
    return result.download_url or result.source_url or result.thumbnail_url or None


def build_preview(result: ResultViewDTO) -> Optional[PreviewDTO]:
    """
    Preview for a result, or None when there is nothing to show.
    """
    url = select_preview_url(result)
    if not url:
        return None

    for candidate in (url, result.source_url):
        video_id = extract_youtube_id(candidate)
        if video_id:
            return PreviewDTO(
                kind="embed",
                url=candidate,
                poster_url=result.thumbnail_url,
                embed_url=EMBED_URL_TEMPLATE.format(video_id=video_id),
                video_id=video_id,
            )

    if result.media_type == "audio":
        return PreviewDTO(kind="audio", url=url, poster_url=result.thumbnail_url)
    if result.media_type == "image":
        return PreviewDTO(kind="image", url=url)
    return PreviewDTO(kind="video", url=url, poster_url=result.thumbnail_url)
