"""
Download trigger.

Builds the backend proxy URL for a media file and hands it to an opener
(the system browser in the desktop app). The proxy answers with a
Content-Disposition header, so the browser saves the file under the
suggested name. Reachability is not checked here.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sentirax.core.api.base import BaseAPIClient

logger = logging.getLogger(__name__)

UrlOpener = Callable[[str], object]


class DownloadTrigger:
    def __init__(self, api_client: BaseAPIClient, opener: Optional[UrlOpener] = None):
        self._api = api_client
        self._opener = opener

    def set_opener(self, opener: UrlOpener) -> None:
        self._opener = opener

    def build_url(self, media_url: str, filename: str) -> str:
        return self._api.build_download_url(media_url, filename)

    def trigger(self, media_url: str, filename: str) -> Optional[str]:
        """
        Open the proxy URL for media_url.

        Returns:
            The URL handed to the opener, or None when there is nothing to open
        """
        if not media_url:
            logger.debug("Download trigger ignored: no media URL")
            return None
        url = self.build_url(media_url, filename)
        logger.info(f"Download requested: {filename}")
        logger.debug(f"Download proxy URL: {url}")
        if self._opener is None:
            logger.warning("No URL opener configured; download not started")
            return url
        try:
            self._opener(url)
        except Exception as e:
            # Same as a failed browser navigation: visible to the user, not to us.
            logger.warning(f"Opener failed for {filename}: {e}")
        return url
