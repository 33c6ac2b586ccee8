"""
Background worker threads for the views.
"""
from PyQt6.QtCore import QThread, pyqtSignal
from typing import Optional
import logging

from sentirax.core.errors import RequestFailed
from sentirax.core.flows import SubmissionFlow
from sentirax.core.http_client import HttpClient, get_http_client

logger = logging.getLogger(__name__)


class SubmissionWorker(QThread):
    """
    Background worker for the info request behind a submission.

    Signals:
        succeeded(token, submission): SubmissionResultDTO, already stored
        failed(token, message, is_request_error): message is user-facing when
            is_request_error is True
    """
    succeeded = pyqtSignal(int, object)
    failed = pyqtSignal(int, str, bool)

    def __init__(self, *, token: int, flow: SubmissionFlow, url: str):
        super().__init__()
        self._token = token
        self._flow = flow
        self._url = url
        self._cancelled = False

    @property
    def token(self) -> int:
        return self._token

    def cancel(self) -> None:
        self._cancelled = True

    def run(self) -> None:
        try:
            result = self._flow.fetch(self._url)
        except RequestFailed as e:
            if not self._cancelled:
                self.failed.emit(self._token, e.message, True)
            return
        except Exception as e:
            logger.exception(f"Unexpected error fetching info for {self._url}")
            if not self._cancelled:
                self.failed.emit(self._token, str(e), False)
            return
        if not self._cancelled:
            self.succeeded.emit(self._token, result)


class ImageFetchWorker(QThread):
    """
    Background worker for downloading a thumbnail or preview image.

    Signals:
        loaded(url, data): Emitted with the raw image bytes
        failed(url, error): Emitted on failure
    """
    loaded = pyqtSignal(str, bytes)
    failed = pyqtSignal(str, str)

    def __init__(self, url: str, *, http_client: Optional[HttpClient] = None, parent=None):
        super().__init__(parent)
        self._url = url
        self._http_client = http_client
        self._cancelled = False

    @property
    def url(self) -> str:
        return self._url

    def cancel(self) -> None:
        """Cancel the worker. Safe to call multiple times."""
        self._cancelled = True

    def run(self) -> None:
        client = self._http_client or get_http_client() or HttpClient()
        try:
            data = client.fetch_bytes(self._url)
        except Exception as e:
            if not self._cancelled:
                logger.warning(f"Image fetch failed for {self._url}: {e}")
                self.failed.emit(self._url, str(e))
            return
        if not self._cancelled:
            self.loaded.emit(self._url, data)


# Workers outlive the widget that asked for them (a preview can close
# mid-download), so references are held here until the thread finishes.
_running: set = set()


def start_detached(worker: QThread) -> None:
    """Start a worker with no parent; it is released once finished."""
    _running.add(worker)
    worker.finished.connect(lambda: _running.discard(worker))
    worker.finished.connect(worker.deleteLater)
    worker.start()
