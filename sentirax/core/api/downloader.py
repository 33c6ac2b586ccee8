from __future__ import annotations

import logging
from typing import Any, Dict, Mapping
from urllib.parse import urlencode

from sentirax.core.dto.info import MediaInfoDTO
from sentirax.core.errors import RequestFailed
from sentirax.core.formatting import to_seconds

from .base import BaseAPIClient

# Aliases the backend has used over time for the same concept, most specific first.
DOWNLOAD_URL_KEYS = ("download_url", "downloadLink", "download_link", "url")
THUMBNAIL_URL_KEYS = ("thumb_best", "thumb", "thumbnail")
TITLE_KEYS = ("caption", "title")


def _first(raw: Mapping[str, Any], keys) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def normalize_info(raw: Any) -> MediaInfoDTO:
    """
    Convert a raw /api/info payload -> MediaInfoDTO.

    The only place that knows about backend field aliases. Falsy values
    count as absent, so an empty "download_url" falls through to the next
    alias.
    """
    if not isinstance(raw, Mapping):
        raw = {}
    media_type = raw.get("type")
    title = _first(raw, TITLE_KEYS)
    hosting = raw.get("hosting")
    download_url = _first(raw, DOWNLOAD_URL_KEYS)
    thumbnail_url = _first(raw, THUMBNAIL_URL_KEYS)
    return MediaInfoDTO(
        title=str(title) if title else None,
        hosting=str(hosting) if hosting else None,
        media_type=str(media_type).lower() if media_type else None,
        download_url=str(download_url) if download_url else None,
        thumbnail_url=str(thumbnail_url) if thumbnail_url else None,
        duration=to_seconds(raw.get("duration")),
    )


class DownloaderClient(BaseAPIClient):
    BASE_URL = "https://sentirax-downloader-backend.onrender.com"
    _logger = logging.getLogger(__name__)

    # --------------------------------------------------
    # Info
    # --------------------------------------------------

    def fetch_info(self, url: str) -> Dict[str, Any]:
        data = self._request(
            "POST",
            "/api/info",
            json_body={"url": url, "db_cache": False},
            headers={"Content-Type": "application/json"},
        )
        if not isinstance(data, dict):
            raise RequestFailed("Malformed response from info endpoint")
        self._logger.info(f"Info resolved for {url}: hosting={data.get('hosting')!r} type={data.get('type')!r}")
        return data

    # --------------------------------------------------
    # Download proxy
    # --------------------------------------------------

    def build_download_url(self, media_url: str, filename: str) -> str:
        query = urlencode({"url": media_url, "filename": filename})
        return f"{self.BASE_URL}/api/download?{query}"
