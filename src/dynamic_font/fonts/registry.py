"""Font Registries
===============

A registry is the rendering engine's side of font loading: it accepts a
family name plus a raw payload and makes the family usable for layout.
"""

import asyncio
import io
import logging
from typing import Protocol

from PIL import ImageFont

from ..core.exceptions import RegistrationError

logger = logging.getLogger(__name__)

SAMPLE_TEXT = "Hello, World!"


class FontRegistry(Protocol):
    """Registration boundary used by ``FontResource.load``."""

    async def register(self, family: str, data: bytes) -> None:
        """Make ``data`` available under ``family``; raise ``RegistrationError`` on failure."""
        ...

    def is_registered(self, family: str) -> bool:
        ...

    def test_loaded(self, family: str) -> bool:
        """Check that ``family`` lays out sample text with a non-empty box."""
        ...


class InMemoryFontRegistry:
    """Keeps the registered payloads keyed by family name."""

    def __init__(self):
        self.fonts: dict[str, bytes] = {}

    async def register(self, family: str, data: bytes) -> None:
        if not data:
            raise RegistrationError(family, "empty font payload")
        if family in self.fonts:
            logger.debug(f"Replacing registered font family '{family}'")
        self.fonts[family] = bytes(data)

    def is_registered(self, family: str) -> bool:
        return family in self.fonts

    def test_loaded(self, family: str) -> bool:
        return bool(self.fonts.get(family))

    def list_families(self) -> list[str]:
        return sorted(self.fonts)


class PillowFontRegistry:
    """
    Registry that parses payloads with Pillow's FreeType bindings.

    Registered families can be fetched with ``get_font`` for drawing with
    ``PIL.ImageDraw``.
    """

    def __init__(self, size: int = 24):
        self.size = size
        self.fonts: dict[str, ImageFont.FreeTypeFont] = {}

    async def register(self, family: str, data: bytes) -> None:
        try:
            font = await asyncio.to_thread(ImageFont.truetype, io.BytesIO(data), self.size)
        except (OSError, ValueError) as e:
            raise RegistrationError(family, str(e)) from e

        self.fonts[family] = font
        logger.debug(f"Registered font family '{family}' ({len(data)} bytes)")

    def get_font(self, family: str) -> ImageFont.FreeTypeFont | None:
        return self.fonts.get(family)

    def is_registered(self, family: str) -> bool:
        return family in self.fonts

    def test_loaded(self, family: str) -> bool:
        font = self.fonts.get(family)
        if font is None:
            return False

        left, top, right, bottom = font.getbbox(SAMPLE_TEXT)
        return right - left > 0 and bottom - top > 0
