"""
Pytest configuration and fixtures for dynamic font tests.
"""

from pathlib import Path

import httpx
import pytest

from dynamic_font.core.config import FontSettings
from dynamic_font.fonts.bundle import MappingAssetBundle
from dynamic_font.fonts.environment import FontEnvironment, set_default_environment
from dynamic_font.fonts.registry import InMemoryFontRegistry

FONT_URL = "https://example.test/fonts/sample.ttf"


class CountingTransport(httpx.MockTransport):
    """Mock transport that records every request it serves."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def request_count(self) -> int:
        return len(self.requests)


@pytest.fixture(autouse=True)
def reset_default_environment():
    """Keep tests from sharing the process-wide environment."""
    set_default_environment(None)
    yield
    set_default_environment(None)


@pytest.fixture
def font_bytes():
    """2,048 bytes standing in for a font payload."""
    return bytes(range(256)) * 8


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Fresh (not yet created) cache directory."""
    return tmp_path / "cache"


@pytest.fixture
def settings(cache_dir):
    """Settings pointing at the temporary cache directory."""
    return FontSettings(_env_file=None, cache_dir=cache_dir)


@pytest.fixture
def serving_transport(font_bytes):
    """Transport answering every GET with 200 and the font payload."""
    return CountingTransport(lambda request: httpx.Response(200, content=font_bytes))


@pytest.fixture
def registry():
    return InMemoryFontRegistry()


@pytest.fixture
def bundle(font_bytes):
    return MappingAssetBundle({"fonts/bundled.ttf": font_bytes})


@pytest.fixture
def make_environment(settings, registry, bundle):
    """Factory building environments around a transport double."""

    def factory(transport=None, **overrides):
        env_settings = settings.model_copy(update=overrides) if overrides else settings
        return FontEnvironment.create(
            settings=env_settings,
            bundle=bundle,
            registry=registry,
            transport=transport,
        )

    return factory


@pytest.fixture
def counting_transport():
    """The CountingTransport class, for tests that need a custom handler."""
    return CountingTransport
