"""Exception hierarchy for pdf-arabic.

Only :class:`ConfigError` ever reaches callers of the public API. The font
and shaping errors are raised by their components and recovered locally:
the provisioner moves on to the next font candidate, the shaper falls back
to the unshaped text.
"""

from __future__ import annotations

from typing import Any


class ArabicPdfError(Exception):
    """Base class for all pdf-arabic errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({extra})"


class FontFetchError(ArabicPdfError):
    """Font bytes could not be read from a local path or downloaded."""

    def __init__(
        self,
        location: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Failed to fetch font from {location}"
        if status_code is not None:
            message += f": HTTP {status_code}"
        super().__init__(message, details)
        self.location = location
        self.status_code = status_code


class FontDecodeError(ArabicPdfError):
    """Fetched bytes are not a usable font for the target renderer."""


class FontRegistrationError(ArabicPdfError):
    """The renderer rejected a decoded font."""


class ShapingError(ArabicPdfError):
    """Input text could not be reshaped."""


class ConfigError(ArabicPdfError):
    """Configuration file is missing values, malformed or has wrong types."""
