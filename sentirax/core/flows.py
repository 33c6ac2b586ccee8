"""
Submission and results flows.

These are the two halves of the view-to-view handoff: SubmissionFlow turns
user input into a stored SubmissionResultDTO, ResultsFlow consumes it and
derives the results view state. Widgets call these and only handle
presentation.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sentirax.core.api.base import BaseAPIClient
from sentirax.core.dto.result import ResultViewDTO
from sentirax.core.dto.submission import SubmissionResultDTO
from sentirax.core.errors import StorageMissingOrCorrupt
from sentirax.core.results import derive_result
from sentirax.core.session_store import RESULT_STORAGE_KEY, SessionStore
from sentirax.core.validators import require_valid_url

logger = logging.getLogger(__name__)


class SubmissionFlow:
    """Validate -> fetch info -> store. The only writer of the result slot."""

    def __init__(self, api_client: BaseAPIClient, store: SessionStore, *, key: str = RESULT_STORAGE_KEY):
        self._api = api_client
        self._store = store
        self._key = key

    def validate(self, raw_url: str) -> str:
        """Trimmed URL, or InvalidUrl before any network call."""
        return require_valid_url(raw_url)

    def fetch(self, url: str) -> SubmissionResultDTO:
        """
        Blocking info request for an already validated URL; stores the result.

        Raises:
            RequestFailed: the store is left untouched
        """
        data = self._api.fetch_info(url)
        result = SubmissionResultDTO(source_url=url, data=data)
        self._store.set(self._key, result.to_json())
        logger.info(f"Submission stored for {url}")
        return result

    def submit(self, raw_url: str) -> SubmissionResultDTO:
        return self.fetch(self.validate(raw_url))


class ResultsFlow:
    """Read-and-clear the result slot, then derive what the results view shows."""

    def __init__(
        self,
        store: SessionStore,
        *,
        key: str = RESULT_STORAGE_KEY,
        page_url_fallback_hosts: Iterable[str] = ("youtube",),
    ):
        self._store = store
        self._key = key
        self._fallback_hosts = tuple(page_url_fallback_hosts)

    def take_submission(self) -> SubmissionResultDTO:
        raw: Optional[str] = self._store.take(self._key)
        if not raw:
            raise StorageMissingOrCorrupt("No stored result")
        try:
            return SubmissionResultDTO.from_json(raw)
        except ValueError as e:
            logger.warning(f"Stored result could not be parsed: {e}")
            raise StorageMissingOrCorrupt("Stored result is not valid JSON") from e

    def load(self) -> ResultViewDTO:
        submission = self.take_submission()
        return derive_result(submission, page_url_fallback_hosts=self._fallback_hosts)
