"""Turn fetched bytes into a font the PDF renderer can embed.

fpdf2 embeds plain TrueType/OpenType (sfnt) data. WOFF and WOFF2 downloads
are unwrapped to sfnt, anything fontTools cannot parse is rejected, and so is
a font that lacks the Arabic letters we are going to draw with it.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from fontTools.ttLib import TTFont, TTLibError

from pdf_arabic.exceptions import FontDecodeError

logger = logging.getLogger(__name__)

# Alef and lam.
REQUIRED_CODEPOINTS = (0x0627, 0x0644)
# Lam-alef isolated and final, isolated alef, initial lam.
PRESENTATION_PROBE = (0xFEFB, 0xFEFC, 0xFE8D, 0xFEDF)

SFNT_MAGICS = (b"\x00\x01\x00\x00", b"OTTO", b"true", b"wOFF", b"wOF2", b"ttcf")


@dataclass(frozen=True)
class DecodedFont:
    """A validated font ready for registration."""

    data: bytes
    family_name: str | None
    flavor: str | None
    glyph_count: int
    presentation_forms: bool


def _family_name(font: TTFont) -> str | None:
    if "name" not in font:
        return None
    name = font["name"].getDebugName(1)
    return name or None


def cmap_codepoints(font: TTFont) -> set[int]:
    if "cmap" not in font:
        return set()
    best = font.getBestCmap() or {}
    return set(best)


def decode_font(
    raw: bytes,
    required_codepoints: tuple[int, ...] = REQUIRED_CODEPOINTS,
) -> DecodedFont:
    """Validate ``raw`` and return sfnt bytes for the renderer.

    Raises:
        FontDecodeError: If the bytes are not a font, cannot be unwrapped,
            or miss any of ``required_codepoints``.
    """
    if raw[:4] not in SFNT_MAGICS:
        # Typical case: an HTML error page served with status 200.
        raise FontDecodeError(
            "Not a font file", details={"magic": raw[:4].hex() or "empty"}
        )
    if raw[:4] == b"ttcf":
        raise FontDecodeError("Font collections are not supported")

    try:
        font = TTFont(io.BytesIO(raw), lazy=False)
        flavor = font.flavor
        codepoints = cmap_codepoints(font)
        family = _family_name(font)
        glyph_count = len(font.getGlyphOrder())
        if flavor is not None:
            font.flavor = None
            out = io.BytesIO()
            font.save(out)
            data = out.getvalue()
        else:
            data = raw
    except (TTLibError, ImportError) as e:
        raise FontDecodeError("Unreadable font", details={"error": str(e)}) from e
    except Exception as e:
        raise FontDecodeError("Corrupt font data", details={"error": str(e)}) from e

    missing = [cp for cp in required_codepoints if cp not in codepoints]
    if missing:
        raise FontDecodeError(
            "Font has no Arabic coverage",
            details={"missing": " ".join(f"U+{cp:04X}" for cp in missing)},
        )

    presentation_forms = all(cp in codepoints for cp in PRESENTATION_PROBE)
    if not presentation_forms:
        logger.debug("Font %s lacks Arabic presentation forms", family)

    return DecodedFont(
        data=data,
        family_name=family,
        flavor=flavor,
        glyph_count=glyph_count,
        presentation_forms=presentation_forms,
    )
