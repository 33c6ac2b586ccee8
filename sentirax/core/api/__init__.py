from sentirax.core.api.base import BaseAPIClient, extract_error_message
from sentirax.core.api.downloader import DownloaderClient, normalize_info

__all__ = [
    "BaseAPIClient",
    "DownloaderClient",
    "extract_error_message",
    "normalize_info",
]
