"""Shape command - preview what the renderer will receive."""

from __future__ import annotations

import unicodedata

import click
from rich.console import Console
from rich.table import Table

from pdf_arabic.config import Config
from pdf_arabic.shaping import GlyphShaper

console = Console()


def codepoint_rows(text: str) -> list[tuple[str, str, str]]:
    """Return (code point, name, bidi class) for every character of ``text``."""
    rows = []
    for ch in text:
        rows.append(
            (
                f"U+{ord(ch):04X}",
                unicodedata.name(ch, "<unnamed>"),
                unicodedata.bidirectional(ch) or "-",
            )
        )
    return rows


@click.command()
@click.argument("text")
@click.option("--logical", is_flag=True, help="Keep logical order (skip visual reordering)")
@click.option("--codepoints", is_flag=True, help="Print a code point table of the output")
@click.pass_context
def shape(ctx: click.Context, text: str, logical: bool, codepoints: bool) -> None:
    """Shape TEXT and print the result.

    Output keeps its direction isolates, so terminals may show it oddly;
    use --codepoints to see exactly what a PDF renderer would get.
    """
    config = ctx.obj.get("config") or Config.load()
    visual_order = config.shaping.visual_order and not logical
    shaped = GlyphShaper(visual_order=visual_order).shape(text)

    click.echo(shaped)

    if codepoints:
        table = Table(title="Shaped output")
        table.add_column("Code point", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Bidi", style="yellow")
        for row in codepoint_rows(shaped):
            table.add_row(*row)
        console.print(table)
