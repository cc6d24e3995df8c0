"""Pytest configuration and shared fixtures for pdf-arabic tests."""

from __future__ import annotations

import io
from collections.abc import Iterable
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from pdf_arabic.fonts.fetcher import FontFetcher

# Paths
PROJECT_ROOT = Path(__file__).parent.parent

# Base letters plus the presentation forms the shaper emits for "سلام" and "لا".
ARABIC_CODEPOINTS = (
    0x0627, 0x0644, 0x0633, 0x0645,
    0xFE8D, 0xFEDF, 0xFEFB, 0xFEFC, 0xFEB3, 0xFEE1,
)
LATIN_CODEPOINTS = tuple(range(0x41, 0x5B))


def build_font(codepoints: Iterable[int], family: str = "TestArabic") -> bytes:
    """Build a minimal TrueType font with a square glyph for each code point."""
    codepoints = list(codepoints)
    glyph_names = [".notdef"] + [f"uni{cp:04X}" for cp in codepoints]

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_names)
    fb.setupCharacterMap({cp: f"uni{cp:04X}" for cp in codepoints})

    glyphs = {}
    for name in glyph_names:
        pen = TTGlyphPen(None)
        pen.moveTo((100, 0))
        pen.lineTo((100, 500))
        pen.lineTo((400, 500))
        pen.lineTo((400, 0))
        pen.closePath()
        glyphs[name] = pen.glyph()
    fb.setupGlyf(glyphs)

    fb.setupHorizontalMetrics({name: (500, 100) for name in glyph_names})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    buffer = io.BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


class FakeRenderer:
    """Renderer that records every call instead of drawing anything."""

    def __init__(self, reject: Iterable[str] = ()) -> None:
        self.calls: list[tuple] = []
        self.registered: dict[str, bytes] = {}
        self.fonts: dict[str, str] = {}
        self.active: tuple[str, str] | None = None
        self.reject = set(reject)

    def register_font_bytes(self, name: str, data: bytes) -> None:
        self.calls.append(("register_font_bytes", name))
        self.registered[name] = data

    def add_font(self, name: str, family: str, style: str = "") -> None:
        self.calls.append(("add_font", name, family, style))
        if family in self.reject:
            raise RuntimeError(f"cannot embed {family}")
        self.fonts[family] = name

    def set_active_font(self, family: str, style: str = "") -> None:
        self.calls.append(("set_active_font", family, style))
        self.active = (family, style)

    def set_whole_document_direction(self, rtl: bool) -> None:
        self.calls.append(("set_whole_document_direction", rtl))

    def set_language(self, language: str) -> None:
        self.calls.append(("set_language", language))


class StubFetcher:
    """Fetcher serving canned bytes or errors by location."""

    def __init__(self, responses: dict[str, bytes | Exception]) -> None:
        self.responses = responses
        self.fetched: list[str] = []

    async def fetch(self, location: str) -> bytes:
        self.fetched.append(location)
        response = self.responses[location]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(scope="session")
def arabic_font_bytes() -> bytes:
    """TrueType bytes of a font covering basic Arabic and lam-alef forms."""
    return build_font(ARABIC_CODEPOINTS)


@pytest.fixture(scope="session")
def latin_font_bytes() -> bytes:
    """TrueType bytes of a font with no Arabic coverage."""
    return build_font(LATIN_CODEPOINTS, family="TestLatin")


@pytest.fixture
def arabic_font_file(tmp_path: Path, arabic_font_bytes: bytes) -> Path:
    path = tmp_path / "TestArabic-Regular.ttf"
    path.write_bytes(arabic_font_bytes)
    return path


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user config, env overrides and cached font bytes out of tests."""
    for var in (
        "PDF_ARABIC_CONFIG",
        "PDF_ARABIC_FONT_DIR",
        "PDF_ARABIC_FONT_CACHE",
        "PDF_ARABIC_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    FontFetcher.clear_memory_cache()
