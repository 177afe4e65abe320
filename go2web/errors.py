"""Exception types shared across go2web components."""

from __future__ import annotations


class Go2WebError(Exception):
    """Base class for all go2web failures."""


class CacheError(Go2WebError):
    """Raised when the page cache cannot be read or written."""


class CacheLoadError(CacheError):
    """Raised when a persisted cache file exists but cannot be decoded."""


class CacheSaveError(CacheError):
    """Raised when the page cache cannot be persisted."""


class FetchError(Go2WebError):
    """Raised when a page cannot be fetched."""

    def __init__(self, message: str, *, url: str | None = None):
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """Raised on DNS, connect, timeout or invalid URL failures."""


class HttpStatusError(FetchError):
    """Raised when the server answers with an error status."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int):
        super().__init__(message, url=url)
        self.status_code = status_code


class RedirectLoopError(FetchError):
    """Raised when a redirect chain exceeds the configured hop limit."""


TooManyRedirects = RedirectLoopError


class SearchError(Go2WebError):
    """Raised when a search request fails."""


class DecodeError(Go2WebError):
    """Raised when a search result target is not valid percent-encoding."""
