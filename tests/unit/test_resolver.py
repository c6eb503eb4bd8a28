"""
Tests for byte source resolution and asset bundles.
"""

import asyncio

import pytest

from dynamic_font.core.exceptions import (
    AssetLoadError,
    FontFileNotFoundError,
    ValidationError,
)
from dynamic_font.core.models import FontOrigin
from dynamic_font.fonts.bundle import DirectoryAssetBundle, MappingAssetBundle
from dynamic_font.fonts.resolver import ByteSourceResolver

FONT_URL = "https://example.test/fonts/sample.ttf"


class TestDirectoryAssetBundle:
    """Test DirectoryAssetBundle."""

    @pytest.fixture
    def asset_root(self, tmp_path, font_bytes):
        root = tmp_path / "assets"
        (root / "fonts").mkdir(parents=True)
        (root / "fonts" / "Roboto.ttf").write_bytes(font_bytes)
        return root

    def test_load_existing_key(self, asset_root, font_bytes):
        bundle = DirectoryAssetBundle(asset_root)
        assert asyncio.run(bundle.load("fonts/Roboto.ttf")) == font_bytes

    def test_load_missing_key(self, asset_root):
        bundle = DirectoryAssetBundle(asset_root)

        with pytest.raises(AssetLoadError) as exc_info:
            asyncio.run(bundle.load("fonts/Missing.ttf"))

        assert exc_info.value.key == "fonts/Missing.ttf"
        assert exc_info.value.kind == "asset_load"

    @pytest.mark.parametrize("key", ["", "../outside.ttf", "fonts/../../outside.ttf"])
    def test_rejects_keys_outside_root(self, asset_root, key):
        (asset_root.parent / "outside.ttf").write_bytes(b"secret")
        bundle = DirectoryAssetBundle(asset_root)

        with pytest.raises(AssetLoadError):
            bundle.path_for(key)

    def test_directory_key_is_a_load_error(self, asset_root):
        bundle = DirectoryAssetBundle(asset_root)

        with pytest.raises(AssetLoadError):
            asyncio.run(bundle.load("fonts"))


class TestMappingAssetBundle:
    """Test MappingAssetBundle."""

    def test_load_and_add(self):
        bundle = MappingAssetBundle()
        bundle.add("a.ttf", b"abc")

        assert asyncio.run(bundle.load("a.ttf")) == b"abc"

    def test_missing_key(self):
        with pytest.raises(AssetLoadError, match="no such asset"):
            asyncio.run(MappingAssetBundle().load("a.ttf"))


class TestByteSourceResolver:
    """Test ByteSourceResolver dispatch."""

    @pytest.fixture
    def resolver(self, make_environment, serving_transport):
        env = make_environment(serving_transport)
        return ByteSourceResolver(env.bundle, env.font_cache)

    def test_asset_origin(self, resolver, font_bytes, serving_transport):
        payload = asyncio.run(resolver.acquire(FontOrigin.ASSET, "fonts/bundled.ttf"))

        assert payload.data == font_bytes
        assert payload.path is None
        assert serving_transport.request_count == 0

    def test_file_origin(self, resolver, tmp_path):
        font_file = tmp_path / "Local.ttf"
        font_file.write_bytes(b"local font")

        payload = asyncio.run(resolver.acquire(FontOrigin.FILE, str(font_file)))

        assert payload.data == b"local font"
        assert payload.path == font_file
        assert payload.from_cache is False

    def test_missing_file(self, resolver, tmp_path):
        missing = str(tmp_path / "nope.ttf")

        with pytest.raises(FontFileNotFoundError) as exc_info:
            asyncio.run(resolver.acquire(FontOrigin.FILE, missing))

        assert exc_info.value.path == missing

    def test_directory_is_not_a_font_file(self, resolver, tmp_path):
        directory = tmp_path / "Fonts.ttf"
        directory.mkdir()

        with pytest.raises(FontFileNotFoundError) as exc_info:
            asyncio.run(resolver.acquire(FontOrigin.FILE, str(directory)))

        assert exc_info.value.kind == "file_not_found"

    def test_url_origin(self, resolver, font_bytes, serving_transport, cache_dir):
        payload = asyncio.run(resolver.acquire(FontOrigin.URL, FONT_URL))

        assert payload.data == font_bytes
        assert payload.path == cache_dir / "sample.ttf"
        assert serving_transport.request_count == 1

    def test_overwrite_ignored_for_files(self, resolver, tmp_path):
        font_file = tmp_path / "Local.ttf"
        font_file.write_bytes(b"local font")

        payload = asyncio.run(resolver.acquire(FontOrigin.FILE, str(font_file), overwrite=True))

        assert payload.data == b"local font"

    def test_unknown_origin(self, resolver):
        with pytest.raises(ValidationError):
            asyncio.run(resolver.acquire("ftp", "x"))
