"""Fonts command - font provisioning utilities."""

from __future__ import annotations

from pathlib import Path

import click
from fpdf import FPDF
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pdf_arabic.config import Config
from pdf_arabic.exceptions import FontDecodeError
from pdf_arabic.fonts.decoder import decode_font
from pdf_arabic.fonts.fetcher import FontFetcher
from pdf_arabic.session import setup_sync

console = Console()

STATUS_STYLES = {
    "ok": "green",
    "fetch_failed": "yellow",
    "decode_failed": "red",
    "register_failed": "red",
}


@click.group()
def fonts() -> None:
    """Font provisioning commands."""
    pass


@fonts.command("resolve")
@click.option(
    "--font-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding bundled font files",
)
@click.option("--offline", is_flag=True, help="Skip remote candidates")
@click.option("--strict", is_flag=True, help="Exit with status 1 when no Arabic font loads")
@click.pass_context
def resolve_fonts(
    ctx: click.Context, font_dir: Path | None, offline: bool, strict: bool
) -> None:
    """Run font resolution against a blank PDF and report each candidate."""
    config: Config = ctx.obj.get("config") or Config.load()
    if font_dir:
        config.fonts.dir = font_dir

    fetcher = FontFetcher(
        timeout=config.fonts.timeout,
        max_size=config.fonts.max_size,
        cache_dir=config.fonts.cache_dir,
        offline=offline,
    )

    with console.status("[bold green]Resolving fonts..."):
        session = setup_sync(FPDF(), config=config, fetcher=fetcher)

    try:
        table = Table(title="Font candidates")
        table.add_column("#", style="dim")
        table.add_column("Family", style="cyan")
        table.add_column("Location")
        table.add_column("Status")
        table.add_column("Error", style="dim")

        for i, attempt in enumerate(session.attempts, start=1):
            style = STATUS_STYLES.get(attempt.status, "white")
            table.add_row(
                str(i),
                attempt.candidate.family,
                escape(attempt.candidate.location),
                f"[{style}]{attempt.status}[/{style}]",
                escape(attempt.error or ""),
            )
        console.print(table)

        if session.used_custom_font:
            console.print(f"[green]Using font:[/green] {session.font_family}")
        else:
            console.print(
                f"[yellow]Warning:[/yellow] no Arabic font loaded, "
                f"falling back to {session.font_family}"
            )
            if strict:
                raise SystemExit(1)
    finally:
        session.close()


@fonts.command("inspect")
@click.argument("font_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect_font(font_file: Path) -> None:
    """Check that FONT_FILE can be embedded and covers Arabic."""
    try:
        decoded = decode_font(font_file.read_bytes())
    except FontDecodeError as e:
        console.print(f"[red]Unusable font:[/red] {e}")
        raise SystemExit(1) from e

    table = Table(title=font_file.name)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Family", decoded.family_name or "Unknown")
    table.add_row("Source flavor", decoded.flavor or "sfnt")
    table.add_row("Glyphs", str(decoded.glyph_count))
    table.add_row("Embedded size", f"{len(decoded.data) / 1024:.1f} KB")
    table.add_row("Presentation forms", "yes" if decoded.presentation_forms else "no")
    console.print(table)
