from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MediaInfoDTO:
    """Canonical form of an /api/info response, after alias resolution."""

    title: Optional[str]
    hosting: Optional[str]
    media_type: Optional[str]   # lowercased, as sent; unknown types are kept
    download_url: Optional[str]
    thumbnail_url: Optional[str]
    duration: float             # seconds, NaN when absent
