"""UTF-8 CSV export.

Spreadsheet applications only detect UTF-8 when the file starts with a byte
order mark; without it Arabic labels show up as mojibake.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"


def csv_utf8_blob(lines: Iterable[str]) -> bytes:
    """Join ``lines`` with newlines and encode them as BOM-prefixed UTF-8."""
    return UTF8_BOM + "\n".join(lines).encode("utf-8")


def csv_lines(rows: Iterable[Sequence[Any]]) -> list[str]:
    """Render rows as CSV lines, quoting fields that need it.

    ``None`` becomes an empty field. Fields containing newlines stay quoted
    inside a single line entry.
    """
    lines = []
    for row in rows:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="")
        writer.writerow("" if value is None else value for value in row)
        lines.append(buffer.getvalue())
    return lines


def write_csv(path: Path | str, lines: Iterable[str]) -> Path:
    """Write ``lines`` to ``path`` as a BOM-prefixed UTF-8 CSV file."""
    path = Path(path)
    blob = csv_utf8_blob(lines)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(blob)
    logger.debug("Wrote %d bytes of CSV to %s", len(blob), path)
    return path
