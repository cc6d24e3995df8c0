"""pdf-arabic: Arabic text and mixed-direction numbers for PDF renderers.

This library prepares text for PDF engines that have no bidi or Arabic
shaping support of their own (fpdf2 with its shaping engine off):
- Contextual-form reshaping of Arabic runs, wrapped in directional isolates
- Numbers, percentages and currency as left-to-right islands
- Arabic-capable font discovery, fallback and embedding
- BOM-prefixed UTF-8 CSV export

Example:
    >>> from fpdf import FPDF
    >>> from pdf_arabic import setup_sync
    >>> pdf = FPDF()
    >>> session = setup_sync(pdf)
    >>> title = session.shape("تقرير المخزون")
"""

from pdf_arabic.config import Config
from pdf_arabic.exceptions import (
    ArabicPdfError,
    ConfigError,
    FontDecodeError,
    FontFetchError,
    FontRegistrationError,
    ShapingError,
)
from pdf_arabic.export import csv_lines, csv_utf8_blob, write_csv
from pdf_arabic.fonts import FontCandidate, FontFetcher, FontProvisioner, FontResolution
from pdf_arabic.formatting import fmt_currency_mix_egp, fmt_number_ltr, fmt_percent_ltr
from pdf_arabic.renderer import DocumentRenderer, FPDFRenderer
from pdf_arabic.session import ShapingSession, setup, setup_sync
from pdf_arabic.shaping import LRI, PDI, RLI, GlyphShaper, contains_dir_isolate

# Names used by report code ported from the original web tool.
fmtNumberLTR = fmt_number_ltr
fmtPercentLTR = fmt_percent_ltr
fmtCurrencyMixEGP = fmt_currency_mix_egp
containsDirIsolate = contains_dir_isolate
csvUtf8Blob = csv_utf8_blob

__version__ = "0.1.0"

__all__ = [
    # Main API
    "setup",
    "setup_sync",
    "ShapingSession",
    "Config",
    # Shaping and formatting
    "GlyphShaper",
    "LRI",
    "RLI",
    "PDI",
    "contains_dir_isolate",
    "fmt_number_ltr",
    "fmt_percent_ltr",
    "fmt_currency_mix_egp",
    "fmtNumberLTR",
    "fmtPercentLTR",
    "fmtCurrencyMixEGP",
    "containsDirIsolate",
    # Fonts and rendering
    "FontCandidate",
    "FontFetcher",
    "FontProvisioner",
    "FontResolution",
    "DocumentRenderer",
    "FPDFRenderer",
    # CSV
    "csv_utf8_blob",
    "csv_lines",
    "write_csv",
    "csvUtf8Blob",
    # Exceptions
    "ArabicPdfError",
    "ConfigError",
    "FontFetchError",
    "FontDecodeError",
    "FontRegistrationError",
    "ShapingError",
    # Metadata
    "__version__",
]
