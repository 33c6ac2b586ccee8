"""
Backend API contract.

This module is UI-agnostic. Backend quirks (field aliases, error body shapes)
are normalized inside the client so the rest of the app sees one structure.

Contract goals:
- One request per call: no retries, no caching
- Errors surface as RequestFailed carrying the best message the backend gave
- Returns plain dict payloads (DTO creation belongs to normalize_* helpers)
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import requests

from sentirax.core.errors import RequestFailed
from sentirax.core.http_client import API_HEADERS

logger = logging.getLogger(__name__)

# Keys checked, in order, for a human-readable error in a failed response body.
ERROR_MESSAGE_KEYS = ("detail", "message", "error")


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def extract_error_message(body: Any, reason: Optional[str]) -> str:
    """Pick detail, then message, then error, then the HTTP reason phrase."""
    if isinstance(body, dict):
        for key in ERROR_MESSAGE_KEYS:
            value = body.get(key)
            if value:
                return _stringify(value)
    return reason or "Request failed"


def parse_body(raw: str) -> Tuple[Any, bool]:
    """
    Parse a response body as JSON.

    Returns:
        (data, is_json). Non-JSON text comes back wrapped as {"error": raw}.
    """
    try:
        return json.loads(raw), True
    except ValueError:
        return {"error": raw}, False


class BaseAPIClient(ABC):
    """
    Authoritative backend API contract.

    UI must NOT call the session directly; flows should call the client.
    """

    BASE_URL: str  # e.g. https://backend.example.com

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Any = 120,
    ):
        self.session = session or requests.Session()
        if base_url:
            self.BASE_URL = base_url.rstrip("/")
        self.timeout = timeout
        self._configure_session()

    # ------------------------------------------------------------------
    # Session / Request helpers
    # ------------------------------------------------------------------

    def _configure_session(self) -> None:
        self.session.headers.update(API_HEADERS)

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.BASE_URL}{path}"
        logger.info(f"API Request: {method} {url}")
        if json_body is not None:
            logger.debug(f"Request body: {json_body}")

        try:
            resp = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"  └─ transport error: {e}")
            raise RequestFailed(str(e) or "Request failed") from e

        raw = resp.text
        data, is_json = parse_body(raw)

        if not resp.ok:
            message = extract_error_message(data, resp.reason)
            logger.warning(f"  └─ HTTP {resp.status_code}: {message}")
            raise RequestFailed(message, status=resp.status_code)

        if not is_json:
            logger.warning(f"  └─ HTTP {resp.status_code} with non-JSON body")
            raise RequestFailed("Malformed response from backend", status=resp.status_code)

        logger.info(f"  └─ HTTP {resp.status_code} ({len(raw)} bytes)")
        return data

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @abstractmethod
    def fetch_info(self, url: str) -> Dict[str, Any]:
        """
        Resolve a post URL to its raw info payload.
        Raises RequestFailed on any failure.
        """

    @abstractmethod
    def build_download_url(self, media_url: str, filename: str) -> str:
        """Return the proxy URL that streams media_url back as filename."""
