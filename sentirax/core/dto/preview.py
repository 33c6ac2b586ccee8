from dataclasses import dataclass
from typing import Literal, Optional

PreviewKind = Literal["embed", "audio", "image", "video"]


@dataclass(frozen=True)
class PreviewDTO:
    kind: PreviewKind
    url: str
    poster_url: Optional[str] = None
    embed_url: Optional[str] = None
    video_id: Optional[str] = None
