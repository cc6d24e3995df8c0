#!/usr/bin/env python3
"""Example: Build a small Arabic stock report with fpdf2.

This example shows the whole export flow for a report whose labels are
Arabic and whose figures are numbers and Egyptian-pound amounts:

1. Create the document and a shaping session (font resolution happens here)
2. Shape every Arabic label before handing it to fpdf2
3. Format figures as left-to-right islands so they stay readable
4. Write the same rows to a CSV file that spreadsheet tools open as UTF-8

Requirements:
    pip install pdf-arabic

Usage:
    python arabic_stock_report.py                      # Writes report.pdf/report.csv
    python arabic_stock_report.py --out-dir build      # Choose output directory
    python arabic_stock_report.py --font-dir fonts     # Use bundled fonts from a directory
"""

# ============================================================================
# IMPORTS
# ============================================================================

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from fpdf import FPDF

from pdf_arabic import Config, csv_lines, setup_sync, write_csv
from pdf_arabic.log import setup_logging

# ============================================================================
# SAMPLE DATA
# ============================================================================
# Item name, quantity on hand, unit price in EGP, share of total stock value.

ROWS = [
    ("أرز مصري", 120, 32.5, 41.2),
    ("سكر", 80, 27.0, 22.7),
    ("زيت عباد الشمس", 35, 89.75, 33.1),
    ("شاي", 12, 25.0, 3.0),
]

HEADERS = ("الصنف", "الكمية", "السعر", "النسبة")

TITLE = "تقرير المخزون"


# ============================================================================
# PDF
# ============================================================================


def build_pdf(output: Path, config: Config) -> bool:
    """Render the report to ``output``.

    Returns True when an Arabic font was embedded, False when the report was
    written with the fallback font.
    """
    pdf = FPDF()

    # Resolution tries the bundled fonts first, then the CDN copies, and
    # falls back to Helvetica when nothing loads.
    with setup_sync(pdf, config=config) as session:
        if session.degraded_warning:
            # Helpers return Latin-1 text in this mode; Arabic shows as "?".
            print(f"warning: {session.degraded_warning}", file=sys.stderr)

        pdf.add_page()
        pdf.set_font(session.font_family, size=18)
        pdf.cell(0, 12, session.shape(TITLE), align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font(session.font_family, size=12)
        with pdf.table(text_align="RIGHT") as table:
            header = table.row()
            # Columns run right to left, so cells are added in reverse.
            for label in reversed(HEADERS):
                header.cell(session.shape(label))

            for name, qty, price, share in ROWS:
                row = table.row()
                row.cell(session.shape_cell(session.fmt_percent(share)))
                row.cell(session.shape_cell(session.fmt_currency(price)))
                row.cell(session.shape_cell(session.fmt_number(qty, 0)))
                row.cell(session.shape_cell(name))

        pdf.output(str(output))
        return session.used_custom_font


# ============================================================================
# CSV
# ============================================================================


def build_csv(output: Path) -> Path:
    """Write the same rows unshaped; spreadsheets do their own shaping."""
    rows = [HEADERS] + [(name, qty, f"{price:.2f}", f"{share:.1f}") for name, qty, price, share in ROWS]
    return write_csv(output, csv_lines(rows))


# ============================================================================
# MAIN
# ============================================================================


def main() -> int:
    parser = argparse.ArgumentParser(description="Arabic stock report example")
    parser.add_argument("--out-dir", type=Path, default=Path("."), help="Output directory")
    parser.add_argument("--font-dir", type=Path, help="Directory with bundled Arabic fonts")
    parser.add_argument("--verbose", action="store_true", help="Log font resolution")
    args = parser.parse_args()

    config = Config.load()
    if args.font_dir:
        config.fonts.dir = args.font_dir
    setup_logging("INFO" if args.verbose else config.log_level)

    args.out_dir.mkdir(parents=True, exist_ok=True)
    pdf_path = args.out_dir / "report.pdf"
    pdf_path.unlink(missing_ok=True)
    embedded = build_pdf(pdf_path, config)
    csv_path = build_csv(args.out_dir / "report.csv")

    if pdf_path.exists():
        print(f"PDF:  {pdf_path} (Arabic font: {'yes' if embedded else 'no'})")
    print(f"CSV:  {csv_path}")
    return 0 if embedded else 1


if __name__ == "__main__":
    sys.exit(main())
