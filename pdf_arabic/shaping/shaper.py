"""Arabic glyph shaping for renderers without a shaping engine.

The PDF renderer draws code points one by one, left to right. For Arabic to
come out joined and readable every letter has to be replaced by its
contextual presentation form (isolated, initial, medial or final) and the run
has to be put in visual order before it reaches the renderer. The result is
wrapped in an RLI/PDI isolate so the renderer never reorders it again.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from arabic_reshaper import ArabicReshaper
from arabic_reshaper.ligatures import LIGATURES
from bidi.algorithm import get_display

from pdf_arabic.exceptions import ShapingError
from pdf_arabic.shaping.isolates import wrap_rtl

logger = logging.getLogger(__name__)

# Arabic, Arabic Supplement, Arabic Extended-A and both presentation form blocks.
ARABIC_LETTER_RE = re.compile(
    "[\u0621-\u064A\u0671-\u06D3\u06FA-\u06FF"
    "\u0750-\u077F\u08A0-\u08FF"
    "\uFB50-\uFDFF\uFE70-\uFEFC]"
)

ARABIC_LETTER_CLASS = re.compile(
    "[\u0621-\u064A\u0671-\u06D3\u06FA-\u06FF\u0750-\u077F\u08A0-\u08FF]"
)

# Lam + alef is the only ligature Arabic script requires.
MANDATORY_LIGATURES = frozenset(
    (
        "ARABIC LIGATURE LAM WITH ALEF",
        "ARABIC LIGATURE LAM WITH ALEF WITH MADDA ABOVE",
        "ARABIC LIGATURE LAM WITH ALEF WITH HAMZA ABOVE",
        "ARABIC LIGATURE LAM WITH ALEF WITH HAMZA BELOW",
    )
)


def has_arabic_letters(text: str) -> bool:
    return ARABIC_LETTER_RE.search(text) is not None


def count_arabic_letters(text: str) -> int:
    """Count letters from the logical (non presentation form) Arabic ranges."""
    return len(ARABIC_LETTER_CLASS.findall(text))


def _reshaper_configuration() -> dict[str, bool]:
    configuration: dict[str, bool] = {
        "delete_harakat": False,
        "delete_tatweel": False,
        "support_ligatures": True,
        "support_zwj": True,
        "shift_harakat_position": False,
    }
    for name, _forms in LIGATURES:
        configuration[name] = name in MANDATORY_LIGATURES
    return configuration


def default_reshape() -> Callable[[str], str]:
    """Build the contextual-form reshaper used by :class:`GlyphShaper`.

    Harakat are kept in place (joining is computed over the letters only, so
    a diacritic never breaks a chain) and every optional word or sentence
    ligature is switched off.
    """
    return ArabicReshaper(configuration=_reshaper_configuration()).reshape


class GlyphShaper:
    """Turn logical-order Arabic into isolate-wrapped presentation text.

    Args:
        visual_order: Reorder the reshaped run to visual order. Keep it on for
            renderers that draw code points left to right (fpdf2 with its
            shaping engine disabled).
        reshape: Contextual-form function, defaults to :func:`default_reshape`.
    """

    def __init__(
        self,
        visual_order: bool = True,
        reshape: Callable[[str], str] | None = None,
    ) -> None:
        self.visual_order = visual_order
        self._reshape = reshape or default_reshape()

    def shape(self, text: str) -> str:
        """Shape ``text`` for the renderer.

        Text without Arabic letters is returned untouched. On malformed input
        the original text is returned unshaped.
        """
        raw = str(text)
        if not has_arabic_letters(raw):
            return raw
        try:
            shaped = self._shape_run(raw)
        except ShapingError as e:
            logger.warning("Leaving text unshaped: %s", e)
            return raw
        return wrap_rtl(shaped)

    __call__ = shape

    def _shape_run(self, raw: str) -> str:
        try:
            raw.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ShapingError(
                "Text is not valid Unicode", details={"position": e.start}
            ) from e

        try:
            reshaped = self._reshape(raw)
        except Exception as e:
            raise ShapingError("Reshaper failed", details={"error": str(e)}) from e
        if not isinstance(reshaped, str):
            raise ShapingError(
                "Reshaper returned a non-string",
                details={"type": type(reshaped).__name__},
            )

        if not self.visual_order:
            return reshaped
        try:
            return get_display(reshaped, base_dir="R")
        except Exception as e:
            raise ShapingError("Reordering failed", details={"error": str(e)}) from e
