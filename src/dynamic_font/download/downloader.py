"""
Font Downloader
===============

Streams font payloads over HTTP with a bounded wait for the initial
response and throttled fractional progress reporting.
"""

import asyncio
import logging
import time

import httpx
from tqdm import tqdm

from ..core.config import DEFAULT_PROGRESS_COMPLETE, DEFAULT_PROGRESS_STEP, FontSettings
from ..core.exceptions import DownloadTimeoutError, HttpStatusError, TransportError
from ..core.models import ProgressCallback

logger = logging.getLogger(__name__)


class ProgressThrottle:
    """Turns byte counts into bounded-frequency fractional progress callbacks.

    A value is reported when it has moved more than ``step`` past the last
    reported value, or when it exceeds ``complete``.
    """

    def __init__(
        self,
        total: int | None,
        callback: ProgressCallback | None = None,
        step: float = DEFAULT_PROGRESS_STEP,
        complete: float = DEFAULT_PROGRESS_COMPLETE,
    ):
        self.total = total if total and total > 0 else None
        self.callback = callback
        self.step = step
        self.complete = complete
        self.last_reported = 0.0
        self.reports = 0

    @property
    def enabled(self) -> bool:
        return self.total is not None

    def update(self, received: int) -> float | None:
        """Record ``received`` bytes; return the progress value if it was reported."""
        if self.total is None:
            return None

        progress = min(received / self.total, 1.0)
        if progress - self.last_reported > self.step or progress > self.complete:
            if self.callback is not None:
                self.callback(progress)
            self.last_reported = progress
            self.reports += 1
            return progress
        return None


class DownloadProgress:
    """Console progress bar usable as a fractional progress callback."""

    def __init__(self, description: str = "Downloading"):
        self.start_time = time.time()
        self.pbar = tqdm(
            total=100,
            unit="%",
            desc=description,
            bar_format="{l_bar}{bar}| {n:.0f}%",
        )

    def __call__(self, progress: float):
        self.pbar.update(progress * 100 - self.pbar.n)

    def close(self):
        """Close progress bar."""
        self.pbar.close()

    @property
    def elapsed_time(self) -> float:
        """Get elapsed time in seconds."""
        return time.time() - self.start_time


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        length = int(value)
    except ValueError:
        logger.debug(f"Ignoring invalid Content-Length header: {value!r}")
        return None
    return length if length > 0 else None


class StreamingDownloader:
    """
    Downloads font payloads into memory.

    One GET per fetch. The response timeout bounds only the wait for the
    status line and headers; the body is consumed without a deadline.
    """

    def __init__(
        self,
        settings: FontSettings | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or FontSettings()
        self._client = client
        self._transport = transport

    def _create_client(self) -> httpx.AsyncClient:
        """Create HTTP client with appropriate configuration."""
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=None,
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent},
        )

    async def fetch(self, url: str, on_progress: ProgressCallback | None = None) -> bytes:
        """
        Download ``url`` and return the full body.

        Args:
            url: Font URL
            on_progress: Optional callback receiving progress in [0, 1]

        Returns:
            Downloaded bytes

        Raises:
            DownloadTimeoutError: If no response arrives in time
            HttpStatusError: If the status code is not 200
            TransportError: If the connection or the stream fails
        """
        if self._client is not None:
            return await self._fetch_with(self._client, url, on_progress)

        async with self._create_client() as client:
            return await self._fetch_with(client, url, on_progress)

    async def _fetch_with(
        self, client: httpx.AsyncClient, url: str, on_progress: ProgressCallback | None
    ) -> bytes:
        timeout = self.settings.response_timeout_seconds
        logger.info(f"Downloading font from {url}")

        try:
            request = client.build_request("GET", url)
            response = await asyncio.wait_for(client.send(request, stream=True), timeout=timeout)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise DownloadTimeoutError(url, timeout) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(url, str(e)) from e

        try:
            if response.status_code != httpx.codes.OK:
                raise HttpStatusError(url, response.status_code)

            throttle = ProgressThrottle(
                _content_length(response),
                on_progress,
                step=self.settings.progress_step,
                complete=self.settings.progress_complete,
            )
            buffer = bytearray()

            async for chunk in response.aiter_bytes(self.settings.chunk_size):
                buffer.extend(chunk)
                if throttle.enabled:
                    throttle.update(len(buffer))
                else:
                    logger.debug(f"download font: {len(buffer)} bytes")

        except httpx.HTTPError as e:
            raise TransportError(url, str(e)) from e
        finally:
            await response.aclose()

        logger.info(f"Download completed: {len(buffer)} bytes from {url}")
        return bytes(buffer)
