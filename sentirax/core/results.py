"""
Result derivation: stored submission -> everything the results view shows.

Pure functions, no I/O. Backend aliases are resolved by normalize_info
before anything here looks at the payload.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sentirax.core.api.downloader import normalize_info
from sentirax.core.dto.info import MediaInfoDTO
from sentirax.core.dto.result import ResultViewDTO
from sentirax.core.dto.submission import SubmissionResultDTO
from sentirax.core.formatting import build_filename, format_duration

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Download ready"
DEFAULT_HOSTING = "Instagram"
DEFAULT_MEDIA_TYPE = "video"
THUMBNAIL_FALLBACK_NAME = "thumbnail"


def resolve_download_url(
    info: MediaInfoDTO,
    source_url: str,
    page_url_fallback_hosts: Iterable[str] = ("youtube",),
) -> Optional[str]:
    """
    Direct media URL, or the source page URL for hosts the backend never
    resolves to a file. Host match is exact and case-sensitive.
    """
    if info.download_url:
        return info.download_url
    if source_url and info.hosting in tuple(page_url_fallback_hosts):
        logger.info(f"No direct media for {info.hosting}; using source page URL")
        return source_url
    return None


def derive_result(
    submission: SubmissionResultDTO,
    *,
    page_url_fallback_hosts: Iterable[str] = ("youtube",),
) -> ResultViewDTO:
    info = normalize_info(submission.data)
    source_url = submission.source_url or ""

    title = info.title or DEFAULT_TITLE
    hosting = info.hosting or DEFAULT_HOSTING
    media_type = info.media_type or DEFAULT_MEDIA_TYPE
    download_url = resolve_download_url(info, source_url, page_url_fallback_hosts)
    thumbnail_url = info.thumbnail_url

    display_image_url = thumbnail_url
    if not display_image_url and media_type == "image" and download_url:
        display_image_url = download_url

    filename = build_filename(title, download_url or thumbnail_url, media_type)

    thumbnail_filename = None
    if thumbnail_url:
        thumbnail_filename = build_filename(
            title,
            thumbnail_url,
            "image",
            fallback=THUMBNAIL_FALLBACK_NAME,
            suffix="-thumb",
        )

    return ResultViewDTO(
        source_url=source_url,
        title=title,
        hosting=hosting,
        media_type=media_type,
        meta_text=f"Source: {hosting} • {media_type.upper()}",
        duration_text=format_duration(info.duration),
        download_url=download_url,
        thumbnail_url=thumbnail_url,
        display_image_url=display_image_url,
        filename=filename,
        thumbnail_filename=thumbnail_filename,
        primary_title="Image" if media_type == "image" else "Video",
        primary_subtitle="Audio" if media_type == "audio" else "Highest Quality",
        status="ready" if download_url else "unavailable",
    )
