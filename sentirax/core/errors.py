"""
Domain errors shared by the core and both front ends.

Every error here is recoverable: the UI shows a message or navigates home,
and the static server turns lookups into a 404.
"""

from __future__ import annotations

from typing import Optional


class SentiraxError(Exception):
    """Base class for all application errors."""


class InvalidUrl(SentiraxError, ValueError):
    """Raised when user input is not an absolute http(s) URL."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Not a valid http(s) URL: {value!r}")


class RequestFailed(SentiraxError):
    """Raised for info endpoint transport errors, non-2xx statuses and malformed bodies."""

    def __init__(self, message: str, *, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)


class StorageMissingOrCorrupt(SentiraxError):
    """Raised when the results view finds no stored submission, or cannot parse it."""


class AssetNotFound(SentiraxError):
    """Raised when a static path is outside the allow-list or its file cannot be read."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Asset not found: {path}")
