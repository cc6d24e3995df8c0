"""Unit tests for pdf_arabic.shaping.shaper.

Tests cover Arabic detection, the non-Arabic fast path, contextual forms and
mandatory ligatures, visual reordering, isolate wrapping, and the fallback to
unshaped text on malformed input.
"""

import re

import pytest

from pdf_arabic.shaping.isolates import (
    PDI,
    RLI,
    contains_dir_isolate,
    isolates_balanced,
    strip_isolates,
)
from pdf_arabic.shaping.shaper import (
    GlyphShaper,
    count_arabic_letters,
    has_arabic_letters,
)

LAM_ALEF_RE = re.compile("ل[اأإآ]")

ARABIC_SAMPLES = [
    "سلام",
    "لا",
    "تقرير المخزون",
    "إجمالي القيمة: 1500 ج.م",
    "الله",
    "مُحَمَّد",
    "Invoice فاتورة 42",
    "\uFEFB",
]

NON_ARABIC_SAMPLES = [
    "",
    "Total",
    "1,234.50",
    "Invoice #42 (paid)",
    "\u2066100.00\u2069",
    "שלום",
    "١٢٣",
    "\uFEFFheader",
]


@pytest.fixture(scope="module")
def logical_shaper() -> GlyphShaper:
    return GlyphShaper(visual_order=False)


@pytest.fixture(scope="module")
def visual_shaper() -> GlyphShaper:
    return GlyphShaper()


class TestDetection:
    """Tests for has_arabic_letters() and count_arabic_letters()."""

    @pytest.mark.parametrize("text", ARABIC_SAMPLES)
    def test_arabic_detected(self, text):
        assert has_arabic_letters(text)

    @pytest.mark.parametrize("text", NON_ARABIC_SAMPLES)
    def test_non_arabic_not_detected(self, text):
        assert not has_arabic_letters(text)

    def test_supplement_and_extended_ranges(self):
        assert has_arabic_letters("\u0750")
        assert has_arabic_letters("\u08A0")

    def test_count_ignores_harakat_and_digits(self):
        assert count_arabic_letters("مُحَمَّد") == 4
        assert count_arabic_letters("سلام 12") == 4


class TestFastPath:
    """Text without Arabic letters must come back unchanged."""

    @pytest.mark.parametrize("text", NON_ARABIC_SAMPLES)
    def test_unchanged(self, visual_shaper, text):
        assert visual_shaper.shape(text) == text

    def test_non_string_input_is_stringified(self, visual_shaper):
        assert visual_shaper.shape(1500) == "1500"


class TestContextualForms:
    """Presentation form selection in logical order."""

    def test_initial_lam_alef_final_isolated(self, logical_shaper):
        # seen initial, lam-alef final ligature, meem isolated
        assert logical_shaper.shape("سلام") == RLI + "\uFEB3\uFEFC\uFEE1" + PDI

    def test_isolated_lam_alef_ligature(self, logical_shaper):
        assert logical_shaper.shape("لا") == RLI + "\uFEFB" + PDI

    def test_harakat_do_not_break_joining(self, logical_shaper):
        shaped = strip_isolates(logical_shaper.shape("بَب"))
        assert "\uFE91" in shaped  # beh initial
        assert "\uFE90" in shaped  # beh final
        assert "\u064E" in shaped  # fatha kept

    def test_optional_word_ligatures_are_not_applied(self, logical_shaper):
        shaped = strip_isolates(logical_shaper.shape("الله"))
        assert "\uFDF2" not in shaped
        assert len(shaped) == 4

    @pytest.mark.parametrize("text", ARABIC_SAMPLES)
    def test_glyph_units_cover_letters(self, logical_shaper, text):
        shaped = strip_isolates(logical_shaper.shape(text))
        ligatures = len(LAM_ALEF_RE.findall(text))
        assert len(shaped) >= count_arabic_letters(text) - ligatures


class TestVisualOrder:
    """Visual reordering for renderers that draw left to right."""

    def test_pure_arabic_run_is_reversed(self, visual_shaper):
        assert visual_shaper.shape("سلام") == RLI + "\uFEE1\uFEFC\uFEB3" + PDI

    def test_digits_keep_their_order(self, visual_shaper):
        shaped = visual_shaper.shape("المجموع 1500")
        assert "1500" in shaped

    def test_latin_word_keeps_its_order(self, visual_shaper):
        shaped = visual_shaper.shape("فاتورة Invoice")
        assert "Invoice" in shaped

    def test_callable_alias(self, visual_shaper):
        assert visual_shaper("سلام") == visual_shaper.shape("سلام")


class TestIsolateWrapping:
    """Shaped output is always a balanced RLI/PDI run."""

    @pytest.mark.parametrize("text", ARABIC_SAMPLES)
    def test_wrapped(self, visual_shaper, text):
        shaped = visual_shaper.shape(text)
        assert shaped.startswith(RLI)
        assert shaped.endswith(PDI)
        assert contains_dir_isolate(shaped)
        assert isolates_balanced(shaped)


class TestMalformedInput:
    """Shaping failures fall back to the original text."""

    def test_lone_surrogate_returns_original(self, visual_shaper):
        text = "سلام\uD800"
        assert visual_shaper.shape(text) == text

    def test_reshaper_exception_returns_original(self):
        def broken(_text):
            raise IndexError("boom")

        shaper = GlyphShaper(reshape=broken)
        assert shaper.shape("سلام") == "سلام"

    def test_reshaper_non_string_returns_original(self):
        shaper = GlyphShaper(reshape=lambda _text: None)
        assert shaper.shape("سلام") == "سلام"

    def test_failure_is_logged(self, caplog):
        def broken(_text):
            raise ValueError("bad table")

        with caplog.at_level("WARNING", logger="pdf_arabic"):
            GlyphShaper(reshape=broken).shape("سلام")
        assert "unshaped" in caplog.text
