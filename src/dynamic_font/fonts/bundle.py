"""Bundled Font Assets
===================

Asset bundles resolve a key to the raw bytes of a font shipped with the
application.
"""

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from ..core.exceptions import AssetLoadError

logger = logging.getLogger(__name__)


class AssetBundle(Protocol):
    """Resolves asset keys to bytes."""

    async def load(self, key: str) -> bytes:
        """Return the bytes stored under ``key`` or raise ``AssetLoadError``."""
        ...


class DirectoryAssetBundle:
    """Bundle backed by a directory; keys are paths relative to its root."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        """Get the file path for ``key``, rejecting keys outside the root."""
        root = self.root.resolve()
        path = (root / key).resolve()
        if not key or not path.is_relative_to(root):
            raise AssetLoadError(key, "key is outside the asset root")
        return path

    async def load(self, key: str) -> bytes:
        path = self.path_for(key)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise AssetLoadError(key, str(e)) from e

        logger.debug(f"Loaded font asset {key} ({len(data)} bytes)")
        return data


class MappingAssetBundle:
    """In-memory bundle, mostly useful for embedding and tests."""

    def __init__(self, assets: Mapping[str, bytes] | None = None):
        self.assets = dict(assets or {})

    def add(self, key: str, data: bytes) -> None:
        self.assets[key] = data

    async def load(self, key: str) -> bytes:
        try:
            return bytes(self.assets[key])
        except KeyError as e:
            raise AssetLoadError(key, "no such asset") from e
