"""Page fetching package."""

from go2web.fetch.fetcher import REDIRECT_STATUS_CODES, Fetcher
from go2web.fetch.models import FetchResult

__all__ = ["Fetcher", "FetchResult", "REDIRECT_STATUS_CODES"]
