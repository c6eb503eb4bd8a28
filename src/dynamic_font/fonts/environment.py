"""
Font Environment
================

Wires the collaborators a ``FontResource`` needs: settings, the asset
bundle, the registration engine and the download cache.
"""

import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import httpx

from ..core.config import FontSettings
from ..download.cache import CacheStore, FontCache
from ..download.downloader import StreamingDownloader
from .bundle import AssetBundle, DirectoryAssetBundle
from .registry import FontRegistry, InMemoryFontRegistry

logger = logging.getLogger(__name__)


def default_cache_dir(app_name: str = "dynamic-font") -> Path:
    """Get the platform's per-user application data directory for fonts."""
    home = Path.home()

    if sys.platform == "darwin":
        base = home / "Library" / "Application Support"
    elif os.name == "nt":
        base = Path(os.environ.get("APPDATA") or home / "AppData" / "Roaming")
    else:
        base = Path(os.environ.get("XDG_DATA_HOME") or home / ".local" / "share")

    return base / app_name / "fonts"


def directory_provider(settings: FontSettings) -> Callable[[], Path]:
    """Build the persistent-directory provider for ``settings``."""

    def provide() -> Path:
        return settings.cache_dir or default_cache_dir(settings.app_name)

    return provide


@dataclass
class FontEnvironment:
    """Collaborators shared by font loads."""

    settings: FontSettings
    bundle: AssetBundle
    registry: FontRegistry
    cache_store: CacheStore
    font_cache: FontCache

    @classmethod
    def create(
        cls,
        settings: FontSettings | None = None,
        bundle: AssetBundle | None = None,
        registry: FontRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
        cache_dir_provider: Callable[[], Path] | None = None,
    ) -> "FontEnvironment":
        """
        Create an environment, filling unspecified collaborators from settings.

        Args:
            settings: Font settings (loaded from env/.env if omitted)
            bundle: Asset bundle for ``asset`` fonts
            registry: Registration engine
            transport: HTTP transport for the downloader's own clients
            client: Shared HTTP client, used instead of per-fetch clients
            cache_dir_provider: Overrides the persistent-directory provider
        """
        settings = settings or FontSettings()
        store = CacheStore(
            cache_dir_provider or directory_provider(settings), naming=settings.cache_naming
        )
        downloader = StreamingDownloader(settings, client=client, transport=transport)

        return cls(
            settings=settings,
            bundle=bundle or DirectoryAssetBundle(settings.assets_dir or Path.cwd()),
            registry=registry or InMemoryFontRegistry(),
            cache_store=store,
            font_cache=FontCache(store, downloader, deduplicate=settings.deduplicate_downloads),
        )

    @property
    def cache_dir(self) -> Path:
        return Path(self.cache_store.directory_provider())


_default_environment: FontEnvironment | None = None


def get_default_environment() -> FontEnvironment:
    """Get the process-wide environment, creating it on first use."""
    global _default_environment
    if _default_environment is None:
        _default_environment = FontEnvironment.create()
        logger.debug(f"Created default font environment (cache: {_default_environment.cache_dir})")
    return _default_environment


def set_default_environment(environment: FontEnvironment | None) -> None:
    """Replace the process-wide environment; ``None`` resets it."""
    global _default_environment
    _default_environment = environment
