"""
Centralized HTTP client configuration.

Provides one configured requests.Session for talking to the downloader
backend and fetching thumbnails, with:
- Browser-like headers (User-Agent, Accept, etc.)
- Shared connect/read timeouts
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)


USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/144.0.0.0 Safari/537.36"

# Headers for JSON API requests to the backend
API_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
}

# Headers for media/thumbnail fetches from CDNs
MEDIA_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Sec-Fetch-Dest": "image",
    "Sec-Fetch-Mode": "no-cors",
}


class HttpClientConfig:
    """Central HTTP client configuration."""

    def __init__(
        self,
        max_connections: int = 10,
        connect_timeout: int = 20,
        read_timeout: int = 120,
    ):
        self.max_connections = max_connections
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout

    @property
    def timeout(self) -> Tuple[int, int]:
        """(connect, read) tuple as accepted by requests."""
        return (self.connect_timeout, self.read_timeout)


class HttpClient:
    """
    Centralized HTTP session factory.

    The backend is slow to wake (free-tier hosting), so the read timeout is
    generous while the connect timeout stays short.
    """

    def __init__(self, config: Optional[HttpClientConfig] = None):
        self.config = config or HttpClientConfig()
        self._sync_session: Optional[requests.Session] = None

    def create_sync_session(self, headers: Optional[Dict[str, str]] = None) -> requests.Session:
        """
        Create a configured requests.Session.

        Args:
            headers: Optional headers to use (defaults to API_HEADERS)

        Returns:
            Configured requests.Session
        """
        session = requests.Session()
        session.headers.update(headers or API_HEADERS)

        adapter = HTTPAdapter(
            pool_connections=self.config.max_connections,
            pool_maxsize=self.config.max_connections,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        self._sync_session = session
        return session

    def get_sync_session(self) -> requests.Session:
        """Get existing session or create new one."""
        if self._sync_session is None:
            return self.create_sync_session()
        return self._sync_session

    def fetch_bytes(self, url: str) -> bytes:
        """
        Download a small resource (thumbnail) in one piece.

        Raises:
            requests.RequestException: on transport errors or non-2xx status
        """
        session = self.get_sync_session()
        logger.debug(f"Fetching {url}")
        resp = session.get(url, headers=MEDIA_HEADERS, timeout=self.config.timeout)
        resp.raise_for_status()
        return resp.content

    def close(self):
        """Close the session."""
        if self._sync_session:
            self._sync_session.close()
            self._sync_session = None


def create_http_client(read_timeout: int) -> HttpClient:
    """Create an HttpClient whose read timeout follows the app config."""
    return HttpClient(HttpClientConfig(read_timeout=read_timeout))


# Singleton instance (initialized by CoreContext)
_http_client: Optional[HttpClient] = None


def get_http_client() -> Optional[HttpClient]:
    """Get the global HTTP client instance."""
    return _http_client


def set_http_client(client: HttpClient):
    """Set the global HTTP client instance."""
    global _http_client
    _http_client = client
