"""Dynamic Font Loading
====================

Loads fonts from bundled assets, local files or remote URLs and hands the
bytes to a rendering engine. Remote fonts are cached on local storage so
later loads skip the download.

Example:
    >>> from dynamic_font import FontResource
    >>> font = FontResource.url("Lobster", "https://example.com/fonts/Lobster.ttf")
    >>> loaded = await font.load(on_progress=print)
"""

__version__ = "1.0.0"
__author__ = "Dynamic Font Team"

from .core.config import FontSettings
from .core.exceptions import (
    CacheWriteError,
    DownloadError,
    DownloadTimeoutError,
    DynamicFontError,
    HttpStatusError,
    RegistrationError,
)
from .core.models import FontOrigin, LoadResult
from .download import StreamingDownloader, download_font, download_font_to
from .fonts import (
    FontEnvironment,
    FontResource,
    InMemoryFontRegistry,
    PillowFontRegistry,
    get_default_environment,
    set_default_environment,
)

__all__ = [
    "CacheWriteError",
    "DownloadError",
    "DownloadTimeoutError",
    "DynamicFontError",
    "FontEnvironment",
    "FontOrigin",
    "FontResource",
    "FontSettings",
    "HttpStatusError",
    "InMemoryFontRegistry",
    "LoadResult",
    "PillowFontRegistry",
    "RegistrationError",
    "StreamingDownloader",
    "download_font",
    "download_font_to",
    "get_default_environment",
    "set_default_environment",
]
