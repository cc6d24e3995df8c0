"""Document renderer adapters.

The provisioner only needs a handful of operations from the PDF library.
:class:`DocumentRenderer` names them; :class:`FPDFRenderer` implements them on
top of an ``fpdf.FPDF`` document.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from fpdf import FPDF

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentRenderer(Protocol):
    def register_font_bytes(self, name: str, data: bytes) -> None: ...

    def add_font(self, name: str, family: str, style: str = "") -> None: ...

    def set_active_font(self, family: str, style: str = "") -> None: ...

    def set_whole_document_direction(self, rtl: bool) -> None: ...

    def set_language(self, language: str) -> None: ...


class FPDFRenderer:
    """Renderer protocol for an ``fpdf.FPDF`` document.

    fpdf2 loads fonts from files, so registered bytes are written to a
    temporary directory owned by this adapter. The files must stay around
    until the document has been output; call :meth:`close` afterwards.
    """

    def __init__(self, pdf: FPDF) -> None:
        self.pdf = pdf
        self._tmpdir: tempfile.TemporaryDirectory | None = None
        self._files: dict[str, Path] = {}

    def _font_dir(self) -> Path:
        if self._tmpdir is None:
            self._tmpdir = tempfile.TemporaryDirectory(prefix="pdf-arabic-")
        return Path(self._tmpdir.name)

    def register_font_bytes(self, name: str, data: bytes) -> None:
        path = self._font_dir() / Path(name).name
        path.write_bytes(data)
        self._files[name] = path
        logger.debug("Registered %d font bytes as %s", len(data), name)

    def add_font(self, name: str, family: str, style: str = "") -> None:
        try:
            path = self._files[name]
        except KeyError:
            raise KeyError(f"No font bytes registered as {name!r}") from None
        self.pdf.add_font(family, style, str(path))

    def set_active_font(self, family: str, style: str = "") -> None:
        self.pdf.set_font(family, style)

    def set_whole_document_direction(self, rtl: bool) -> None:
        # With fpdf2's shaping engine off, text is drawn in string order.
        if rtl:
            self.pdf.set_text_shaping(use_shaping_engine=True, direction="rtl")
        else:
            self.pdf.set_text_shaping(use_shaping_engine=False)

    def set_language(self, language: str) -> None:
        self.pdf.set_lang(language)

    def close(self) -> None:
        if self._tmpdir is not None:
            self._tmpdir.cleanup()
            self._tmpdir = None
        self._files.clear()


def as_renderer(document: Any) -> DocumentRenderer:
    """Wrap ``document`` in an adapter unless it already is a renderer."""
    if isinstance(document, FPDF):
        return FPDFRenderer(document)
    if isinstance(document, DocumentRenderer):
        return document
    raise TypeError(
        f"Unsupported document type: {type(document).__name__}. "
        "Pass an fpdf.FPDF or an object implementing DocumentRenderer."
    )
