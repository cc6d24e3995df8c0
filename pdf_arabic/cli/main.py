"""Entry point for the ``pdf-arabic`` command."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from pdf_arabic import __version__
from pdf_arabic.cli.commands import csv_command, fonts, shape
from pdf_arabic.config import Config
from pdf_arabic.exceptions import ConfigError
from pdf_arabic.log import LOG_LEVELS, setup_logging

console = Console(stderr=True)


@click.group()
@click.version_option(__version__, prog_name="pdf-arabic")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging verbosity (overrides the config file)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Arabic shaping, number formatting and font provisioning for PDFs."""
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise SystemExit(2) from e

    if log_level:
        config.log_level = log_level.upper()
    setup_logging(config.log_level, console=console)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = config.log_level


cli.add_command(shape)
cli.add_command(fonts)
cli.add_command(csv_command)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
