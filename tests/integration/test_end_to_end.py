"""
End-to-End Font Loading Tests
=============================

Drives FontResource.load through the real cache store, downloader and
registry with only the HTTP transport replaced.
"""

import asyncio

import httpx
import pytest

from dynamic_font import FontEnvironment, FontResource, FontSettings, InMemoryFontRegistry

FONT_URL = "https://example.test/fonts/sample.ttf"


class TestEndToEnd:
    """Full load cycle against a mocked font server."""

    @pytest.fixture
    def environment(self, tmp_path, counting_transport, font_bytes):
        transport = counting_transport(
            lambda request: httpx.Response(
                200,
                headers={"Content-Length": str(len(font_bytes))},
                content=font_bytes,
            )
        )
        settings = FontSettings(_env_file=None, cache_dir=tmp_path / "fresh-cache")
        env = FontEnvironment.create(
            settings=settings, registry=InMemoryFontRegistry(), transport=transport
        )
        return env, transport

    def test_fresh_cache_load(self, environment, font_bytes):
        env, transport = environment
        font = FontResource.url("Sample", FONT_URL)
        progress = []

        async def run():
            before = await font.is_downloaded(environment=env)
            loaded = await font.load(progress.append, environment=env)
            after = await font.is_downloaded(environment=env)
            return before, loaded, after

        before, loaded, after = asyncio.run(run())

        cached = env.cache_dir / "sample.ttf"
        assert before is False
        assert loaded is True
        assert after is True
        assert cached.read_bytes() == font_bytes
        assert len(cached.read_bytes()) == 2048
        assert sorted(p.name for p in env.cache_dir.iterdir()) == ["sample.ttf"]
        assert transport.request_count == 1
        assert progress and progress[-1] > 0.99
        assert progress == sorted(progress)
        assert font.test_loaded(environment=env)

    def test_second_load_served_from_cache(self, environment):
        env, transport = environment
        font = FontResource.url("Sample", FONT_URL)

        async def run():
            return await font.load(environment=env), await font.load(environment=env)

        assert asyncio.run(run()) == (True, True)
        assert transport.request_count == 1

    @pytest.mark.slow
    def test_default_timeout_expires(self, tmp_path, counting_transport):
        """A server that never answers fails the load after the default 5 seconds."""

        async def never_responds(request):
            await asyncio.sleep(30)
            return httpx.Response(200)

        transport = counting_transport(never_responds)
        env = FontEnvironment.create(
            settings=FontSettings(_env_file=None, cache_dir=tmp_path / "cache"),
            registry=InMemoryFontRegistry(),
            transport=transport,
        )

        result = asyncio.run(FontResource.url("Sample", FONT_URL).load_result(environment=env))

        assert result.success is False
        assert result.error_kind == "timeout"
        assert not (tmp_path / "cache" / "sample.ttf").exists()
