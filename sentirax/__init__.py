"""Sentirax Downloader: paste a post URL, preview it, download it through the backend proxy."""

__version__ = "1.0.0"
