"""Text shaping for pdf-arabic.

This subpackage provides:
- Directional isolate helpers (LRI/RLI/PDI wrapping and detection)
- Arabic contextual-form reshaping with isolate wrapping
"""

from pdf_arabic.shaping.isolates import (
    FSI,
    LRI,
    PDI,
    RLI,
    contains_dir_isolate,
    isolates_balanced,
    strip_isolates,
    wrap_ltr,
    wrap_rtl,
)
from pdf_arabic.shaping.shaper import (
    GlyphShaper,
    count_arabic_letters,
    has_arabic_letters,
)

__all__ = [
    "LRI",
    "RLI",
    "FSI",
    "PDI",
    "contains_dir_isolate",
    "isolates_balanced",
    "strip_isolates",
    "wrap_ltr",
    "wrap_rtl",
    "GlyphShaper",
    "count_arabic_letters",
    "has_arabic_letters",
]
