"""Resolves a font origin and locator to raw bytes."""

import asyncio
import logging
from pathlib import Path

from ..core.exceptions import FontFileNotFoundError, FontFileReadError, ValidationError
from ..core.models import FontOrigin, FontPayload, ProgressCallback
from ..download.cache import FontCache
from .bundle import AssetBundle

logger = logging.getLogger(__name__)


class ByteSourceResolver:
    """Single dispatch point over ``FontOrigin``."""

    def __init__(self, bundle: AssetBundle, font_cache: FontCache):
        self.bundle = bundle
        self.font_cache = font_cache

    async def acquire(
        self,
        origin: FontOrigin,
        locator: str,
        overwrite: bool = False,
        on_progress: ProgressCallback | None = None,
    ) -> FontPayload:
        """
        Acquire the bytes named by ``locator``.

        ``overwrite`` and ``on_progress`` only apply to URL origins.

        Raises:
            AssetLoadError: Asset key missing or unreadable
            FontFileNotFoundError: File origin path is not an existing file
            FontFileReadError: File origin path is a file but cannot be read
            DownloadError: URL origin fetch failed
        """
        if origin is FontOrigin.ASSET:
            data = await self.bundle.load(locator)
            return FontPayload(data=data)
        if origin is FontOrigin.FILE:
            return await self._read_file(locator)
        if origin is FontOrigin.URL:
            return await self.font_cache.get(locator, overwrite=overwrite, on_progress=on_progress)
        raise ValidationError(f"Unsupported font origin: {origin!r}")

    async def _read_file(self, locator: str) -> FontPayload:
        path = Path(locator)
        if not await asyncio.to_thread(path.is_file):
            raise FontFileNotFoundError(locator)

        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise FontFileReadError(locator, str(e)) from e

        return FontPayload(data=data, path=path)
