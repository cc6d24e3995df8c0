"""Per-export shaping session.

Report code creates one session per document export::

    pdf = FPDF()
    session = setup_sync(pdf)
    pdf.add_page()
    pdf.cell(text=session.shape("تقرير المبيعات"))
    pdf.cell(text=session.fmt_currency(1250))

The session holds the font chosen for that document and the shaping and
formatting helpers bound to it. Nothing is stored at module level, so
concurrent exports each get their own font resolution.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pdf_arabic.config import Config
from pdf_arabic.fonts.candidates import FontCandidate
from pdf_arabic.fonts.fetcher import FontFetcher
from pdf_arabic.fonts.provisioner import CandidateAttempt, Fetcher, FontProvisioner
from pdf_arabic.formatting import (
    EGP_LABEL,
    Number,
    fmt_number_ltr,
    fmt_percent_ltr,
)
from pdf_arabic.renderer import DocumentRenderer, FPDFRenderer, as_renderer
from pdf_arabic.shaping.isolates import contains_dir_isolate, strip_isolates, wrap_rtl
from pdf_arabic.shaping.shaper import GlyphShaper

logger = logging.getLogger(__name__)

DEGRADED_FONT_WARNING = (
    "لم يتم تحميل خط عربي. سيتم تصدير PDF بخط افتراضي وقد تظهر الأحرف بشكل غير صحيح."
)


@dataclass(frozen=True)
class ShapingSession:
    """Font identity and text helpers for one document export."""

    font_family: str
    used_custom_font: bool
    shaper: GlyphShaper
    renderer: DocumentRenderer | None = None
    attempts: tuple[CandidateAttempt, ...] = ()
    currency_label: str = EGP_LABEL

    def shape(self, text: str) -> str:
        return self._for_font(self.shaper.shape(text))

    def shape_cell(self, text: Any) -> str:
        """Shape a table cell unless it already carries direction isolates.

        Formatter output is isolated already and must not be wrapped again.
        """
        value = str(text)
        if contains_dir_isolate(value):
            return self._for_font(value)
        return self.shape(value)

    def fmt_number(self, value: Number, fraction_digits: int = 2) -> str:
        return self._for_font(fmt_number_ltr(value, fraction_digits))

    def fmt_percent(self, value: Number, fraction_digits: int = 1) -> str:
        return self._for_font(fmt_percent_ltr(value, fraction_digits))

    def fmt_currency(self, value: Number, fraction_digits: int = 2) -> str:
        """Amount followed by the currency label, shaped like any other Arabic run.

        The label goes through the session shaper so it has the same ordering
        as text from :meth:`shape`.
        """
        label = self.shaper.shape(self.currency_label)
        if not contains_dir_isolate(label):
            label = wrap_rtl(label)
        return self._for_font(f"{fmt_number_ltr(value, fraction_digits)} {label}")

    def _for_font(self, text: str) -> str:
        if self.used_custom_font:
            return text
        # Built-in PDF fonts only encode Latin-1.
        return strip_isolates(text).encode("latin-1", "replace").decode("latin-1")

    @property
    def degraded_warning(self) -> str | None:
        """User-facing warning when no Arabic font could be embedded."""
        if self.used_custom_font:
            return None
        return DEGRADED_FONT_WARNING

    def close(self) -> None:
        """Release temporary font files. Call after the document is output."""
        if isinstance(self.renderer, FPDFRenderer):
            self.renderer.close()

    def __enter__(self) -> ShapingSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_fetcher(config: Config) -> FontFetcher:
    return FontFetcher(
        timeout=config.fonts.timeout,
        max_size=config.fonts.max_size,
        cache_dir=config.fonts.cache_dir,
    )


async def setup(
    document: Any,
    candidates: Sequence[FontCandidate] | None = None,
    *,
    config: Config | None = None,
    fetcher: Fetcher | None = None,
) -> ShapingSession:
    """Prepare ``document`` for Arabic text and return its session.

    Args:
        document: An ``fpdf.FPDF`` or any :class:`DocumentRenderer`.
        candidates: Font candidates in priority order. Defaults to the
            configured list, or the bundled-then-CDN defaults.
        config: Settings; loaded with :meth:`Config.load` when omitted.
        fetcher: Byte fetcher, defaults to a :class:`FontFetcher` built from
            ``config``.
    """
    config = config or Config.load()
    renderer = as_renderer(document)
    if candidates is None:
        candidates = config.fonts.resolved_candidates()

    provisioner = FontProvisioner(
        fetcher or build_fetcher(config),
        default_family=config.fonts.default_family,
        language=config.shaping.language,
    )
    resolution = await provisioner.resolve(candidates, renderer)
    logger.debug(
        "Session font %s (custom=%s)", resolution.font_family, resolution.used_custom_font
    )

    return ShapingSession(
        font_family=resolution.font_family,
        used_custom_font=resolution.used_custom_font,
        shaper=GlyphShaper(visual_order=config.shaping.visual_order),
        renderer=renderer,
        attempts=resolution.attempts,
        currency_label=config.formatting.currency_label,
    )


def setup_sync(
    document: Any,
    candidates: Sequence[FontCandidate] | None = None,
    *,
    config: Config | None = None,
    fetcher: Fetcher | None = None,
) -> ShapingSession:
    """Blocking :func:`setup` for code that is not running an event loop."""
    return asyncio.run(setup(document, candidates, config=config, fetcher=fetcher))
