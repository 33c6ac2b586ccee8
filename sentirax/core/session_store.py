"""
Single-slot keyed store standing in for the browser tab's sessionStorage.

Values are kept as serialized strings so a results view reading a payload
behaves the same whether it was written by this process or restored from
elsewhere. Lives as long as the app process (the desktop "tab").
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)

RESULT_STORAGE_KEY = "sentirax_result"


class SessionStore:
    """
    Keyed string store with get/set/clear plus take (read-and-clear).

    Ownership of RESULT_STORAGE_KEY: SubmissionFlow is the only writer,
    ResultsFlow the only reader, and it clears on read.
    """

    def __init__(self):
        self._items: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value
        logger.debug(f"Session store: set {key} ({len(value)} chars)")

    def clear(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def take(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._items.pop(key, None)
        if value is not None:
            logger.debug(f"Session store: took {key}")
        return value

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._items
