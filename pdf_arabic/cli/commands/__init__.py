"""CLI commands for pdf-arabic."""

from pdf_arabic.cli.commands.export import csv_command
from pdf_arabic.cli.commands.fonts import fonts
from pdf_arabic.cli.commands.shape import shape

__all__ = ["shape", "fonts", "csv_command"]
