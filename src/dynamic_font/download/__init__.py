"""Font Download Module
====================

Streaming download of remote fonts and the persistent cache in front of it.
"""

from .cache import (
    CacheStore,
    FontCache,
    cache_filename,
    download_font,
    download_font_to,
    url_filename,
)
from .downloader import DownloadProgress, ProgressThrottle, StreamingDownloader

__all__ = [
    "CacheStore",
    "DownloadProgress",
    "FontCache",
    "ProgressThrottle",
    "StreamingDownloader",
    "cache_filename",
    "download_font",
    "download_font_to",
    "url_filename",
]
