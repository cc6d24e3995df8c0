"""CSV command - re-encode a CSV file for spreadsheet applications."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from pdf_arabic.export import write_csv

console = Console()


@click.command("csv")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--encoding", default="utf-8-sig", show_default=True, help="Input encoding")
def csv_command(input_file: Path, output_file: Path, encoding: str) -> None:
    """Rewrite INPUT_FILE as BOM-prefixed UTF-8 into OUTPUT_FILE."""
    try:
        text = input_file.read_text(encoding=encoding)
    except (UnicodeDecodeError, LookupError) as e:
        console.print(f"[red]Error:[/red] cannot decode {input_file}: {e}")
        raise SystemExit(1) from e

    lines = text.splitlines()
    write_csv(output_file, lines)
    console.print(f"[green]Wrote[/green] {len(lines)} lines to {output_file}")
