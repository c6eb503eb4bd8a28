"""Core components for dynamic font loading."""

from .config import FontSettings
from .exceptions import (
    AssetLoadError,
    CacheError,
    CacheWriteError,
    ConfigurationError,
    DownloadError,
    DownloadTimeoutError,
    DynamicFontError,
    FontFileNotFoundError,
    FontFileReadError,
    FontSourceError,
    HttpStatusError,
    RegistrationError,
    TransportError,
    ValidationError,
)
from .models import FontOrigin, FontPayload, LoadResult, ProgressCallback

__all__ = [
    "AssetLoadError",
    "CacheError",
    "CacheWriteError",
    "ConfigurationError",
    "DownloadError",
    "DownloadTimeoutError",
    "DynamicFontError",
    "FontFileNotFoundError",
    "FontFileReadError",
    "FontOrigin",
    "FontPayload",
    "FontSettings",
    "FontSourceError",
    "HttpStatusError",
    "LoadResult",
    "ProgressCallback",
    "RegistrationError",
    "TransportError",
    "ValidationError",
]
