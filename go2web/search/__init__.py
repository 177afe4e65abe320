"""Search package."""

from go2web.search.client import SearchClient

__all__ = ["SearchClient"]
