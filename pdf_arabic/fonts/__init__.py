"""Font handling for pdf-arabic.

This subpackage provides:
- Ordered font candidates (bundled files first, CDN copies after)
- Byte fetching from local paths and URLs with disk and memory caching
- Font validation and WOFF/WOFF2 unwrapping with fontTools
- The provisioner that registers the first usable font into a document
"""

from pdf_arabic.fonts.candidates import FontCandidate, default_candidates
from pdf_arabic.fonts.decoder import DecodedFont, decode_font
from pdf_arabic.fonts.fetcher import FontFetcher
from pdf_arabic.fonts.provisioner import (
    CandidateAttempt,
    FontProvisioner,
    FontResolution,
)

__all__ = [
    "FontCandidate",
    "default_candidates",
    "DecodedFont",
    "decode_font",
    "FontFetcher",
    "CandidateAttempt",
    "FontProvisioner",
    "FontResolution",
]
