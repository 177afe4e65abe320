"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CacheConfig(Base):
    """On-disk page cache settings."""

    enabled: bool = True
    path: str = "data.cache"


class HttpConfig(Base):
    """Settings for page fetches."""

    connect_timeout_ms: int = Field(default=5000, ge=1)
    read_timeout_ms: int = Field(default=5000, ge=1)
    max_redirects: int = Field(default=10, ge=0)


class SearchConfig(Base):
    """Settings for the search-engine scraper."""

    endpoint: str = "https://www.google.com/search"
    user_agent: str = "Mozilla/5.0"
    max_results: int = Field(default=10, ge=1)
    connect_timeout_ms: int = Field(default=5000, ge=1)
    read_timeout_ms: int = Field(default=5000, ge=1)


class Config(Base):
    """Root configuration for go2web."""

    cache: CacheConfig = Field(default_factory=CacheConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
