"""Configuration module for go2web."""

from go2web.config.loader import get_config_path, load_config
from go2web.config.schema import CacheConfig, Config, HttpConfig, SearchConfig

__all__ = [
    "Config",
    "CacheConfig",
    "HttpConfig",
    "SearchConfig",
    "get_config_path",
    "load_config",
]
