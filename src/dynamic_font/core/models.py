"""
Core data models for font acquisition.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .exceptions import CacheWriteError, DynamicFontError

ProgressCallback = Callable[[float], None]


class FontOrigin(Enum):
    """Where a font's bytes come from."""

    ASSET = "asset"
    FILE = "file"
    URL = "url"


@dataclass
class FontPayload:
    """Acquired font bytes together with where they were read from."""

    data: bytes
    path: Path | None = None
    from_cache: bool = False
    cache_error: CacheWriteError | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass
class LoadResult:
    """Structured outcome of a single font load."""

    success: bool
    family: str
    origin: FontOrigin
    error: DynamicFontError | None = None
    from_cache: bool = False
    size_bytes: int = 0
    cache_error: CacheWriteError | None = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def error_kind(self) -> str | None:
        """Short name of the failure kind, or None on success."""
        if self.error is None:
            return None
        return self.error.kind

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for reporting."""
        return {
            "success": self.success,
            "family": self.family,
            "origin": self.origin.value,
            "error_kind": self.error_kind,
            "error": str(self.error) if self.error else None,
            "from_cache": self.from_cache,
            "size_bytes": self.size_bytes,
            "cache_error": str(self.cache_error) if self.cache_error else None,
        }
