from __future__ import annotations

import logging
from typing import Optional

from sentirax.core.api import DownloaderClient
from sentirax.core.config import AppConfig
from sentirax.core.downloads import DownloadTrigger, UrlOpener
from sentirax.core.flows import ResultsFlow, SubmissionFlow
from sentirax.core.http_client import HttpClient, create_http_client, set_http_client
from sentirax.core.session_store import SessionStore
from sentirax.core.static_server import StaticAssetServer

logger = logging.getLogger(__name__)


class CoreContext:
    """
    Owns every core service for one app process.

    UI code gets flows, the download trigger and the HTTP client from here
    and never builds its own.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        *,
        http_client: Optional[HttpClient] = None,
        opener: Optional[UrlOpener] = None,
    ):
        self.config = config or AppConfig.from_env()
        logger.info(f"Backend: {self.config.api_base}")

        self.http_client = http_client or create_http_client(self.config.request_timeout)
        set_http_client(self.http_client)

        self.api = DownloaderClient(
            self.http_client.get_sync_session(),
            base_url=self.config.api_base,
            timeout=self.http_client.config.timeout,
        )
        self.store = SessionStore()
        self.submission_flow = SubmissionFlow(self.api, self.store)
        self.results_flow = ResultsFlow(
            self.store,
            page_url_fallback_hosts=self.config.page_url_fallback_hosts,
        )
        self.downloads = DownloadTrigger(self.api, opener)
        self._static_server: Optional[StaticAssetServer] = None
        self._closed = False

    @property
    def static_server(self) -> StaticAssetServer:
        if self._static_server is None:
            self._static_server = StaticAssetServer(
                self.config.web_root,
                host=self.config.host,
                port=self.config.port,
            )
        return self._static_server

    def start_static_server(self) -> Optional[str]:
        """Start serving the browser build in the background; returns its URL."""
        try:
            self.static_server.start()
        except (OSError, RuntimeError) as e:
            logger.warning(f"Static asset server not started on port {self.config.port}: {e}")
            return None
        return self.static_server.base_url

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.info("Closing core context")
        if self._static_server is not None:
            self._static_server.stop()
        self.http_client.close()
