from __future__ import annotations

import json
import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SubmissionResultDTO:
    """
    Message passed from the submission flow to the results flow.

    Serialized with the same camelCase keys the browser build keeps in
    sessionStorage, so both front ends read each other's payloads.
    """

    source_url: str
    data: Dict[str, Any]
    fetched_at: int = field(default_factory=_now_ms)

    def to_json(self) -> str:
        return json.dumps(
            {
                "sourceUrl": self.source_url,
                "data": self.data,
                "fetchedAt": self.fetched_at,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "SubmissionResultDTO":
        """
        Parse a stored payload.

        Raises:
            ValueError: if the text is not JSON or not an object
        """
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError("stored submission is not an object")
        data = payload.get("data") or {}
        if not isinstance(data, dict):
            data = {}
        fetched_at = payload.get("fetchedAt")
        return cls(
            source_url=str(payload.get("sourceUrl") or ""),
            data=data,
            fetched_at=int(fetched_at) if isinstance(fetched_at, (int, float)) and math.isfinite(fetched_at) else 0,
        )
