"""Persistent URL -> page body cache."""

from __future__ import annotations

import contextlib
import json
from pathlib import Path

from loguru import logger

from go2web.errors import CacheLoadError, CacheSaveError

CACHE_FORMAT_VERSION = 1


class PageCache:
    """In-memory page cache. Nothing is read from or written to disk."""

    def __init__(self, pages: dict[str, str] | None = None):
        self._pages: dict[str, str] = dict(pages or {})

    def load(self) -> dict[str, str]:
        return self._pages

    def save(self, pages: dict[str, str] | None = None) -> None:
        if pages is not None:
            self._pages = dict(pages)

    def get(self, url: str) -> str | None:
        return self._pages.get(url)

    def put(self, url: str, body: str) -> None:
        self._pages[url] = body

    def entries(self) -> dict[str, str]:
        return dict(self._pages)

    def __contains__(self, url: object) -> bool:
        return url in self._pages

    def __len__(self) -> int:
        return len(self._pages)


class FilePageCache(PageCache):
    """Page cache persisted as a single JSON document.

    The whole mapping is loaded once before an operation and written back once
    after it. Writes go through a temporary file that replaces the cache file,
    so a failed save never leaves a half-written cache behind.
    """

    def __init__(self, path: Path | str):
        super().__init__()
        self.path = Path(path)

    def load(self) -> dict[str, str]:
        """Load the persisted cache, falling back to an empty one.

        A missing file is reported as a notice. A corrupt file is reported as
        an error and left in place.
        """
        if not self.path.exists():
            logger.info("Cache file not found. Initializing new cache.")
            self._pages = {}
            return self._pages

        try:
            self._pages = self.read()
        except CacheLoadError as e:
            logger.error("Error reading cache file: {}", e)
            self._pages = {}
        else:
            logger.debug("Loaded {} cached page(s) from {}", len(self._pages), self.path)
        return self._pages

    def read(self) -> dict[str, str]:
        """Read and validate the cache file without touching in-memory state."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheLoadError(f"cannot read {self.path}: {e}") from e

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise CacheLoadError(
                f"invalid JSON in {self.path} ({e.msg} at line {e.lineno})"
            ) from e

        if not isinstance(payload, dict):
            raise CacheLoadError(f"{self.path}: root JSON value must be an object")

        version = payload.get("version")
        if version != CACHE_FORMAT_VERSION:
            raise CacheLoadError(
                f"{self.path}: unsupported cache version {version!r} "
                f"(expected {CACHE_FORMAT_VERSION})"
            )

        pages = payload.get("pages")
        if not isinstance(pages, dict):
            raise CacheLoadError(f"{self.path}: 'pages' must be an object")
        for url, body in pages.items():
            if not isinstance(body, str):
                raise CacheLoadError(f"{self.path}: body for {url!r} is not a string")
            try:
                url.encode("utf-8")
                body.encode("utf-8")
            except UnicodeEncodeError as e:
                raise CacheLoadError(
                    f"{self.path}: entry for {url!r} is not valid UTF-8 text ({e.reason})"
                ) from e
        return pages

    def save(self, pages: dict[str, str] | None = None) -> None:
        """Overwrite the cache file with the full mapping."""
        if pages is not None:
            self._pages = dict(pages)

        payload = {"version": CACHE_FORMAT_VERSION, "pages": self._pages}
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(payload, ensure_ascii=False),
                encoding="utf-8",
            )
            tmp_path.replace(self.path)
        except (OSError, ValueError) as e:
            # UnicodeEncodeError is a ValueError: a body that is not encodable text.
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise CacheSaveError(f"cannot write {self.path}: {e}") from e
        logger.debug("Saved {} cached page(s) to {}", len(self._pages), self.path)
