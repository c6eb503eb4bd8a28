"""
Font Download Cache
===================

Maps font URLs to files in a persistent directory and decides, per the
overwrite flag, whether a download is needed. Cache files are written
in place (create or truncate); there is no locking or atomic rename.
"""

import asyncio
import hashlib
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Literal
from urllib.parse import unquote, urlparse

from ..core.exceptions import CacheReadError, CacheWriteError, InvalidFontUrlError
from ..core.models import FontPayload, ProgressCallback
from .downloader import StreamingDownloader

logger = logging.getLogger(__name__)

CacheNaming = Literal["segment", "hashed"]


def url_filename(url: str) -> str:
    """Return the decoded final path segment of ``url``."""
    segment = unquote(urlparse(url).path.rsplit("/", 1)[-1])
    if not segment or segment in {".", ".."} or "/" in segment or "\\" in segment:
        raise InvalidFontUrlError(url)
    return segment


def cache_filename(url: str, naming: CacheNaming = "segment") -> str:
    """
    Derive the cache file name for ``url``.

    ``segment`` uses the final path segment as is, so two URLs ending in the
    same segment share one file. ``hashed`` prefixes a digest of the full URL.
    """
    filename = url_filename(url)
    if naming == "hashed":
        url_hash = hashlib.sha256(url.encode()).hexdigest()[:16]
        return f"{url_hash}_{filename}"
    return filename


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def write_file(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` off the event loop."""
    try:
        await asyncio.to_thread(_write_bytes, path, data)
    except OSError as e:
        raise CacheWriteError(str(path), str(e)) from e


class CacheStore:
    """Filesystem operations on the font cache directory."""

    def __init__(self, directory_provider: Callable[[], Path], naming: CacheNaming = "segment"):
        """
        Initialize cache store.

        Args:
            directory_provider: Returns the persistent cache directory
            naming: Cache file naming strategy
        """
        self.directory_provider = directory_provider
        self.naming = naming

    def resolve_path(self, url: str) -> Path:
        """Get cache file path for URL."""
        return Path(self.directory_provider()) / cache_filename(url, self.naming)

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(path.is_file)

    async def read(self, path: Path) -> bytes:
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise CacheReadError(str(path), str(e)) from e

    async def write(self, path: Path, data: bytes) -> None:
        await write_file(path, data)


class FontCache:
    """
    Cache policy in front of the streaming downloader.

    - ``overwrite=False`` and a cached file exists: return it, no network access.
    - ``overwrite=False`` and no cached file: download, then write back.
    - ``overwrite=True``: always download, then write back over any cached file.

    Write-back failures are logged and reported on the returned payload; the
    downloaded bytes are returned either way.
    """

    def __init__(
        self,
        store: CacheStore,
        downloader: StreamingDownloader,
        deduplicate: bool = False,
    ):
        self.store = store
        self.downloader = downloader
        self.deduplicate = deduplicate
        self._inflight: dict[Path, asyncio.Future] = {}

    async def get(
        self,
        url: str,
        overwrite: bool = False,
        on_progress: ProgressCallback | None = None,
    ) -> FontPayload:
        """
        Return the font bytes for ``url``, downloading when the policy requires it.

        Raises:
            InvalidFontUrlError: If no cache file name can be derived
            CacheReadError: If an existing cache file cannot be read
            DownloadError: If the download fails
        """
        path = self.store.resolve_path(url)

        # A file under an in-flight download may still be partially written.
        if self.deduplicate and path in self._inflight:
            return await self._shared_download(url, path, on_progress)

        if not overwrite and await self.store.exists(path):
            data = await self.store.read(path)
            logger.info(f"Using cached font {path} ({len(data)} bytes)")
            return FontPayload(data=data, path=path, from_cache=True)

        if self.deduplicate:
            return await self._shared_download(url, path, on_progress)
        return await self._download_and_store(url, path, on_progress)

    async def _download_and_store(
        self, url: str, path: Path, on_progress: ProgressCallback | None
    ) -> FontPayload:
        data = await self.downloader.fetch(url, on_progress)

        cache_error = None
        try:
            await self.store.write(path, data)
            logger.debug(f"Cached font {url} at {path}")
        except CacheWriteError as e:
            logger.warning(f"Font downloaded but not cached: {e}")
            cache_error = e

        return FontPayload(data=data, path=path, from_cache=False, cache_error=cache_error)

    async def _shared_download(
        self, url: str, path: Path, on_progress: ProgressCallback | None
    ) -> FontPayload:
        # Callers joining an in-flight download do not receive progress callbacks.
        future = self._inflight.get(path)
        if future is None:
            future = asyncio.ensure_future(self._download_and_store(url, path, on_progress))
            self._inflight[path] = future
            future.add_done_callback(lambda done: self._forget(path, done))
        else:
            logger.debug(f"Joining in-flight download for {path}")

        return await asyncio.shield(future)

    def _forget(self, path: Path, future: asyncio.Future) -> None:
        if self._inflight.get(path) is future:
            del self._inflight[path]

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)


async def download_font(
    url: str,
    overwrite: bool = False,
    on_progress: ProgressCallback | None = None,
    cache: FontCache | None = None,
) -> bytes:
    """
    Download a font through the cache and return its bytes.

    Uses the default font environment when ``cache`` is not given. Errors
    propagate to the caller.
    """
    if cache is None:
        from ..fonts.environment import get_default_environment

        cache = get_default_environment().font_cache

    payload = await cache.get(url, overwrite=overwrite, on_progress=on_progress)
    return payload.data


async def download_font_to(
    url: str,
    filepath: str | Path,
    overwrite: bool = False,
    on_progress: ProgressCallback | None = None,
    downloader: StreamingDownloader | None = None,
) -> Path:
    """
    Download a font straight to ``filepath``.

    Returns without network access when the file exists and ``overwrite`` is
    false. A failed write raises ``CacheWriteError``.
    """
    path = Path(filepath)
    if not overwrite and await asyncio.to_thread(path.is_file):
        logger.info(f"Font already present at {path}")
        return path

    downloader = downloader or StreamingDownloader()
    data = await downloader.fetch(url, on_progress)
    await write_file(path, data)
    logger.info(f"Saved font from {url} to {path}")
    return path
