"""Page cache package."""

from go2web.cache.store import CACHE_FORMAT_VERSION, FilePageCache, PageCache

__all__ = ["PageCache", "FilePageCache", "CACHE_FORMAT_VERSION"]
