"""Command line interface for pdf-arabic."""

from pdf_arabic.cli.main import cli

__all__ = ["cli"]
