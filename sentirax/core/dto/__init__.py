from sentirax.core.dto.info import MediaInfoDTO
from sentirax.core.dto.submission import SubmissionResultDTO
from sentirax.core.dto.result import ResultViewDTO, ResultStatus
from sentirax.core.dto.preview import PreviewDTO, PreviewKind

__all__ = [
    "MediaInfoDTO",
    "SubmissionResultDTO",
    "ResultViewDTO",
    "ResultStatus",
    "PreviewDTO",
    "PreviewKind",
]
