"""Font byte fetching from local assets and remote URLs."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import threading
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import unquote, urlparse

from pdf_arabic.exceptions import FontFetchError

logger = logging.getLogger(__name__)


class FontFetcher:
    """Read raw font bytes from a path or URL.

    Relative paths are resolved against ``base_dir``, or the working
    directory when it is unset. Downloads are capped at ``max_size`` bytes.

    Bytes handed to :meth:`store` after they decoded as a font are kept in a
    process-wide memory cache shared by all fetchers and, for URLs, on disk
    in ``cache_dir``. :meth:`discard` drops entries that failed to decode.
    """

    # Default timeout for requests (seconds)
    DEFAULT_TIMEOUT = 30

    # Maximum font size to download (20MB)
    MAX_SIZE = 20 * 1024 * 1024

    _memory_cache: dict[str, bytes] = {}
    _memory_lock = threading.Lock()

    def __init__(
        self,
        base_dir: Path | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_size: int = MAX_SIZE,
        cache_dir: Path | None = None,
        use_memory_cache: bool = True,
        offline: bool = False,
    ) -> None:
        self.base_dir = base_dir
        self.timeout = timeout
        self.max_size = max_size
        self.cache_dir = cache_dir
        self.use_memory_cache = use_memory_cache
        self.offline = offline

    @classmethod
    def clear_memory_cache(cls) -> None:
        with cls._memory_lock:
            cls._memory_cache.clear()

    async def fetch(self, location: str) -> bytes:
        """Fetch ``location`` without blocking the event loop.

        Cancelling the awaiting task abandons the result; the caller never
        sees partial bytes.
        """
        return await asyncio.to_thread(self.fetch_sync, location)

    def fetch_sync(self, location: str) -> bytes:
        """Fetch ``location`` and return its bytes.

        Fetched bytes are not cached here: callers :meth:`store` them once
        they have been validated as a font.

        Raises:
            FontFetchError: If the file is unreadable or the download fails.
        """
        if self.use_memory_cache:
            with self._memory_lock:
                cached = self._memory_cache.get(self._memory_key(location))
            if cached is not None:
                logger.debug("Memory cache hit for %s", location)
                return cached

        if self.is_remote(location):
            return self._fetch_remote(location)
        return self._read_local(location)

    def store(self, location: str, data: bytes) -> None:
        """Cache validated font bytes for ``location`` in memory and on disk."""
        if self.use_memory_cache:
            with self._memory_lock:
                self._memory_cache[self._memory_key(location)] = data
        if self.is_remote(location):
            self._cache_content(location, data)

    def discard(self, location: str) -> None:
        """Drop any cached bytes for ``location`` that turned out unusable."""
        with self._memory_lock:
            self._memory_cache.pop(self._memory_key(location), None)
        if not (self.cache_dir and self.is_remote(location)):
            return
        try:
            self._cache_path(location).unlink(missing_ok=True)
        except OSError as e:
            logger.debug("Could not remove cached %s: %s", location, e)

    @staticmethod
    def is_remote(location: str) -> bool:
        return location.startswith(("http://", "https://"))

    def _memory_key(self, location: str) -> str:
        # Local files are keyed by their resolved path.
        if self.is_remote(location):
            return location
        return str(self.resolve_path(location))

    def resolve_path(self, location: str) -> Path:
        if location.startswith("file://"):
            return Path(unquote(urlparse(location).path))
        path = Path(location).expanduser()
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path

    def _read_local(self, location: str) -> bytes:
        path = self.resolve_path(location)
        try:
            size = path.stat().st_size
            if size > self.max_size:
                raise FontFetchError(
                    location, details={"error": f"File too large: {size} bytes"}
                )
            data = path.read_bytes()
        except OSError as e:
            raise FontFetchError(location, details={"error": str(e)}) from e
        if not data:
            raise FontFetchError(location, details={"error": "Empty file"})
        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    def _fetch_remote(self, url: str) -> bytes:
        cached = self._get_cached(url)
        if cached:
            return cached
        if self.offline:
            raise FontFetchError(url, details={"error": "Offline mode"})

        try:
            req = urllib.request.Request(
                url,
                headers={
                    "User-Agent": "pdf-arabic/0.1.0",
                    "Accept": "font/ttf, font/otf, font/woff, font/woff2, */*",
                },
            )

            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                content_length = response.headers.get("Content-Length")
                if content_length and int(content_length) > self.max_size:
                    raise FontFetchError(
                        url,
                        details={"error": f"File too large: {content_length} bytes"},
                    )

                content = response.read(self.max_size + 1)
                if len(content) > self.max_size:
                    raise FontFetchError(
                        url,
                        details={"error": f"File too large: >{self.max_size} bytes"},
                    )

        except FontFetchError:
            raise
        except urllib.error.HTTPError as e:
            raise FontFetchError(url, status_code=e.code) from e
        except urllib.error.URLError as e:
            raise FontFetchError(url, details={"error": str(e.reason)}) from e
        except Exception as e:
            raise FontFetchError(url, details={"error": str(e)}) from e

        if not content:
            raise FontFetchError(url, details={"error": "Empty response"})
        logger.info("Downloaded %d bytes from %s", len(content), url)
        return content

    def _get_cached(self, url: str) -> bytes | None:
        if not self.cache_dir:
            return None

        cache_file = self._cache_path(url)
        if cache_file.exists():
            try:
                return cache_file.read_bytes()
            except OSError:
                return None

        return None

    def _cache_content(self, url: str, content: bytes) -> None:
        if not self.cache_dir:
            return

        cache_file = self._cache_path(url)
        # Readers must never see a partially written file.
        tmp_file = cache_file.with_name(
            f".{cache_file.name}.{os.getpid()}.{threading.get_ident()}.part"
        )
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            tmp_file.write_bytes(content)
            os.replace(tmp_file, cache_file)
        except OSError as e:
            logger.debug("Could not cache %s: %s", url, e)
            tmp_file.unlink(missing_ok=True)

    def _cache_path(self, url: str) -> Path:
        url_hash = hashlib.sha256(url.encode()).hexdigest()[:16]
        filename = Path(urlparse(url).path).name or "font"
        return self.cache_dir / f"{url_hash}_{filename}"
