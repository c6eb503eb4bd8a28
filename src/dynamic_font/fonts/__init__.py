"""Font Loading Module
===================

Font resources, the resolver that turns their origin into bytes, and the
collaborators (asset bundles, registries) they are loaded through.
"""

from .bundle import AssetBundle, DirectoryAssetBundle, MappingAssetBundle
from .environment import (
    FontEnvironment,
    default_cache_dir,
    get_default_environment,
    set_default_environment,
)
from .registry import FontRegistry, InMemoryFontRegistry, PillowFontRegistry
from .resolver import ByteSourceResolver
from .resource import FontResource

__all__ = [
    "AssetBundle",
    "ByteSourceResolver",
    "DirectoryAssetBundle",
    "FontEnvironment",
    "FontRegistry",
    "FontResource",
    "InMemoryFontRegistry",
    "MappingAssetBundle",
    "PillowFontRegistry",
    "default_cache_dir",
    "get_default_environment",
    "set_default_environment",
]
