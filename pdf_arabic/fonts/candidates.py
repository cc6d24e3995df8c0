"""Candidate font sources, in priority order."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_FONT_DIR = Path("public") / "fonts"

NOTO_NASKH_URL = (
    "https://cdn.jsdelivr.net/gh/google/fonts/ofl/notonaskharabic/"
    "NotoNaskhArabic-Regular.ttf"
)
AMIRI_URL = "https://cdn.jsdelivr.net/gh/alif-type/amiri@0.121/font/ttf/Amiri-Regular.ttf"


@dataclass(frozen=True)
class FontCandidate:
    """One place an Arabic-capable font may be loaded from.

    Attributes:
        location: Local path, ``file://`` URL or ``http(s)://`` URL.
        registration_name: Name the font bytes are registered under.
        family: Family name the font is activated as.
        style: Renderer style string, empty for regular.
    """

    location: str
    registration_name: str
    family: str
    style: str = ""

    @property
    def is_remote(self) -> bool:
        return self.location.startswith(("http://", "https://"))


def default_candidates(font_dir: Path | str = DEFAULT_FONT_DIR) -> tuple[FontCandidate, ...]:
    """Bundled fonts first, then the same families from a CDN."""
    font_dir = Path(font_dir)
    return (
        FontCandidate(
            str(font_dir / "NotoNaskhArabic-Regular.ttf"),
            "NotoNaskhArabic-Regular.ttf",
            "NotoNaskhArabic",
        ),
        FontCandidate(
            str(font_dir / "Amiri-Regular.ttf"),
            "Amiri-Regular.ttf",
            "Amiri",
        ),
        FontCandidate(NOTO_NASKH_URL, "NotoNaskhArabic-Regular.ttf", "NotoNaskhArabic"),
        FontCandidate(AMIRI_URL, "Amiri-Regular.ttf", "Amiri"),
    )
