"""
Font Resource
=============

A font family together with where its bytes come from. Loading acquires the
bytes, hands them to the registration engine and reports a boolean outcome;
failure details are logged and available through ``load_result``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..core.exceptions import DynamicFontError, RegistrationError
from ..core.models import FontOrigin, LoadResult, ProgressCallback
from .environment import FontEnvironment, get_default_environment
from .resolver import ByteSourceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontResource:
    """
    Identity and origin of one logical font.

    Build instances with ``FontResource.asset``, ``FontResource.file`` or
    ``FontResource.url``. ``overwrite`` only matters for URL origins: when
    true every load downloads again, replacing the cached file.
    """

    family: str
    origin: FontOrigin
    locator: str
    overwrite: bool = False

    def __post_init__(self):
        if not isinstance(self.origin, FontOrigin):
            object.__setattr__(self, "origin", FontOrigin(self.origin))

    @classmethod
    def asset(cls, family: str, key: str) -> "FontResource":
        """Use the font stored under ``key`` in the asset bundle."""
        return cls(family=family, origin=FontOrigin.ASSET, locator=key)

    @classmethod
    def file(cls, family: str, filepath: str | Path) -> "FontResource":
        """Use the font at ``filepath``."""
        return cls(family=family, origin=FontOrigin.FILE, locator=str(filepath))

    @classmethod
    def url(cls, family: str, url: str, overwrite: bool = False) -> "FontResource":
        """Download the font, keep it in the cache directory and use it from there."""
        return cls(family=family, origin=FontOrigin.URL, locator=url, overwrite=overwrite)

    async def load(
        self,
        on_progress: ProgressCallback | None = None,
        environment: FontEnvironment | None = None,
    ) -> bool:
        """Load and register the font; True on success, False on any failure."""
        result = await self.load_result(on_progress=on_progress, environment=environment)
        return result.success

    async def load_result(
        self,
        on_progress: ProgressCallback | None = None,
        environment: FontEnvironment | None = None,
    ) -> LoadResult:
        """
        Load and register the font, returning a structured outcome.

        Never raises for acquisition or registration failures; the error is
        logged with its traceback and attached to the result.

        Args:
            on_progress: Download progress callback, URL origins only
            environment: Collaborators to use instead of the default environment
        """
        env = environment or get_default_environment()
        resolver = ByteSourceResolver(env.bundle, env.font_cache)

        try:
            payload = await resolver.acquire(
                self.origin, self.locator, overwrite=self.overwrite, on_progress=on_progress
            )
        except DynamicFontError as e:
            logger.exception(f"Font {self.origin.value} error for '{self.family}': {e}")
            return self._failed(e)
        except Exception as e:
            logger.exception(f"Unexpected error loading font '{self.family}'")
            return self._failed(DynamicFontError(f"Unexpected error: {e}", details=e))

        try:
            await env.registry.register(self.family, payload.data)
        except RegistrationError as e:
            logger.exception(f"Font registration failed for '{self.family}'")
            return self._failed(e)
        except Exception as e:
            logger.exception(f"Font registration failed for '{self.family}'")
            return self._failed(RegistrationError(self.family, str(e)))

        logger.info(
            f"Loaded font '{self.family}' from {self.origin.value} ({payload.size_bytes} bytes)"
        )
        return LoadResult(
            success=True,
            family=self.family,
            origin=self.origin,
            from_cache=payload.from_cache,
            size_bytes=payload.size_bytes,
            cache_error=payload.cache_error,
        )

    def _failed(self, error: DynamicFontError) -> LoadResult:
        return LoadResult(success=False, family=self.family, origin=self.origin, error=error)

    def cache_path(self, environment: FontEnvironment | None = None) -> Path | None:
        """Get the cache file path for URL origins, None otherwise."""
        if self.origin is not FontOrigin.URL:
            return None
        env = environment or get_default_environment()
        return env.cache_store.resolve_path(self.locator)

    async def is_downloaded(self, environment: FontEnvironment | None = None) -> bool:
        """Whether the cache file exists; always False for asset and file origins."""
        if self.origin is not FontOrigin.URL:
            return False

        env = environment or get_default_environment()
        try:
            path = env.cache_store.resolve_path(self.locator)
        except DynamicFontError as e:
            logger.warning(f"Cannot derive cache path for '{self.family}': {e}")
            return False
        return await env.cache_store.exists(path)

    def test_loaded(self, environment: FontEnvironment | None = None) -> bool:
        """Ask the registry whether the family renders sample text."""
        env = environment or get_default_environment()
        return env.registry.test_loaded(self.family)
