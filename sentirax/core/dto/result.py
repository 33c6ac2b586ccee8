from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

ResultStatus = Literal["ready", "unavailable"]


@dataclass(frozen=True)
class ResultViewDTO:
    source_url: str

    title: str
    hosting: str
    media_type: str
    meta_text: str
    duration_text: str

    download_url: Optional[str]
    thumbnail_url: Optional[str]
    display_image_url: Optional[str]

    filename: str
    thumbnail_filename: Optional[str]

    primary_title: str
    primary_subtitle: str
    status: ResultStatus

    @property
    def can_download(self) -> bool:
        return bool(self.download_url)

    @property
    def status_text(self) -> str:
        return "Ready to download" if self.status == "ready" else "Download unavailable"
