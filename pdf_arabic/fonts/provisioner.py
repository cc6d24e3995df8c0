"""Resolve and register an Arabic-capable font into a document."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from pdf_arabic.exceptions import (
    FontDecodeError,
    FontFetchError,
    FontRegistrationError,
)
from pdf_arabic.fonts.candidates import FontCandidate
from pdf_arabic.fonts.decoder import decode_font
from pdf_arabic.renderer import DocumentRenderer

logger = logging.getLogger(__name__)

DEFAULT_FAMILY = "helvetica"

STATUS_OK = "ok"
STATUS_FETCH_FAILED = "fetch_failed"
STATUS_DECODE_FAILED = "decode_failed"
STATUS_REGISTER_FAILED = "register_failed"


class Fetcher(Protocol):
    async def fetch(self, location: str) -> bytes: ...


@runtime_checkable
class CachingFetcher(Fetcher, Protocol):
    def store(self, location: str, data: bytes) -> None: ...

    def discard(self, location: str) -> None: ...


@dataclass(frozen=True)
class CandidateAttempt:
    candidate: FontCandidate
    status: str
    error: str | None = None


@dataclass(frozen=True)
class FontResolution:
    font_family: str
    used_custom_font: bool
    attempts: tuple[CandidateAttempt, ...] = field(default_factory=tuple)


class FontProvisioner:
    """Walk a candidate list and activate the first font that loads.

    Candidates are tried one at a time, in order. A candidate that cannot be
    fetched, decoded or registered is skipped; when none works the renderer's
    built-in ``default_family`` is activated instead. Apart from task
    cancellation, :meth:`resolve` never raises.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        default_family: str = DEFAULT_FAMILY,
        language: str | None = "ar-EG",
    ) -> None:
        self.fetcher = fetcher
        self.default_family = default_family
        self.language = language

    async def resolve(
        self,
        candidates: Sequence[FontCandidate],
        renderer: DocumentRenderer,
    ) -> FontResolution:
        self._prepare(renderer)

        attempts: list[CandidateAttempt] = []
        for candidate in candidates:
            attempt = await self._try_candidate(candidate, renderer)
            attempts.append(attempt)
            if attempt.status == STATUS_OK:
                logger.info("Using font %s from %s", candidate.family, candidate.location)
                return FontResolution(candidate.family, True, tuple(attempts))

        logger.warning(
            "No Arabic font could be loaded (%d candidates tried), "
            "falling back to %s; Arabic text will not join correctly",
            len(attempts),
            self.default_family,
        )
        try:
            renderer.set_active_font(self.default_family, "")
        except Exception as e:
            logger.error("Renderer rejected default font %s: %s", self.default_family, e)
        return FontResolution(self.default_family, False, tuple(attempts))

    def _prepare(self, renderer: DocumentRenderer) -> None:
        # Direction is handled per run with isolates; a global RTL flag would
        # reorder shaped text a second time.
        try:
            renderer.set_whole_document_direction(False)
        except Exception as e:
            logger.warning("Renderer rejected direction reset: %s", e)
        if self.language:
            try:
                renderer.set_language(self.language)
            except Exception as e:
                logger.debug("Renderer rejected language %s: %s", self.language, e)

    async def _try_candidate(
        self, candidate: FontCandidate, renderer: DocumentRenderer
    ) -> CandidateAttempt:
        try:
            raw = await self.fetcher.fetch(candidate.location)
        except FontFetchError as e:
            logger.debug("Skipping %s: %s", candidate.location, e)
            return CandidateAttempt(candidate, STATUS_FETCH_FAILED, str(e))
        except Exception as e:
            # Fetchers are pluggable and may raise their own errors.
            logger.debug("Skipping %s: %r", candidate.location, e)
            return CandidateAttempt(candidate, STATUS_FETCH_FAILED, str(e) or repr(e))

        try:
            # fontTools parses the whole font; keep it off the event loop.
            decoded = await asyncio.to_thread(decode_font, raw)
        except FontDecodeError as e:
            logger.debug("Skipping %s: %s", candidate.location, e)
            self._forget(candidate.location)
            return CandidateAttempt(candidate, STATUS_DECODE_FAILED, str(e))
        self._remember(candidate.location, raw)

        try:
            self._register(candidate, decoded.data, renderer)
        except FontRegistrationError as e:
            logger.debug("Skipping %s: %s", candidate.location, e)
            return CandidateAttempt(candidate, STATUS_REGISTER_FAILED, str(e))

        return CandidateAttempt(candidate, STATUS_OK)

    def _register(
        self, candidate: FontCandidate, data: bytes, renderer: DocumentRenderer
    ) -> None:
        try:
            renderer.register_font_bytes(candidate.registration_name, data)
            renderer.add_font(candidate.registration_name, candidate.family, candidate.style)
            renderer.set_active_font(candidate.family, candidate.style)
        except Exception as e:
            raise FontRegistrationError(
                f"Renderer rejected {candidate.registration_name}",
                details={"error": str(e)},
            ) from e

    def _remember(self, location: str, raw: bytes) -> None:
        if isinstance(self.fetcher, CachingFetcher):
            self.fetcher.store(location, raw)

    def _forget(self, location: str) -> None:
        if isinstance(self.fetcher, CachingFetcher):
            self.fetcher.discard(location)
