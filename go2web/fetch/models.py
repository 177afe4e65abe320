"""Shared fetch models."""

from dataclasses import dataclass, field


@dataclass(slots=True)
class FetchResult:
    """Body of a successfully fetched page."""

    url: str
    body: str
    final_url: str
    from_cache: bool = False
    redirects: list[str] = field(default_factory=list)
    status_code: int | None = None
