"""Command-line entry point for go2web."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from go2web import __version__
from go2web.cache.store import FilePageCache, PageCache
from go2web.config.loader import load_config
from go2web.config.schema import Config
from go2web.errors import CacheSaveError, FetchError, SearchError
from go2web.extract.patterns import extract_content, render
from go2web.fetch.fetcher import Fetcher
from go2web.search.client import SearchClient

HELP_TEXT = """\
Commands:
  go2web fetch <URL> [--plain]   Fetch and display content from <URL>
  go2web search <search-term>    Search <search-term> and display the top results
  go2web help                    Show this help message

Legacy aliases: -u <URL>, -s <search-term>, -h

Options (before the command):
  --config PATH       Config file (default: ~/.go2web/config.json)
  --cache-file PATH   Page cache file (default: data.cache)
  --no-cache          Keep the page cache in memory only
  -v, --verbose       Show debug output
  -q, --quiet         Only show warnings and errors"""

UNKNOWN_HINT = "Unknown option. Use 'go2web help' for help."

_LEGACY_COMMANDS = {"-u": "fetch", "-s": "search", "-h": "help"}
_VALUE_OPTIONS = {"--config", "--cache-file"}


class UsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="go2web", add_help=False)
    parser.add_argument("--config", default=None)
    parser.add_argument("--cache-file", default=None)
    parser.add_argument("--no-cache", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-q", "--quiet", action="store_true")
    parser.add_argument("--version", action="version", version=f"go2web {__version__}")

    commands = parser.add_subparsers(dest="command")
    fetch = commands.add_parser("fetch", add_help=False)
    fetch.add_argument("url")
    fetch.add_argument("--plain", action="store_true")
    search = commands.add_parser("search", add_help=False)
    search.add_argument("term", nargs="+")
    commands.add_parser("help", add_help=False)
    return parser


def translate_legacy_flags(argv: list[str]) -> list[str]:
    """Rewrite a leading ``-u``/``-s``/``-h`` into its command name."""
    translated = list(argv)
    index = 0
    while index < len(translated):
        token = translated[index]
        if token in _VALUE_OPTIONS:
            index += 2
            continue
        if token.startswith("--") and "=" in token:
            index += 1
            continue
        if token in _LEGACY_COMMANDS:
            translated[index] = _LEGACY_COMMANDS[token]
            break
        if token.startswith("-"):
            index += 1
            continue
        break
    return translated


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    level = "DEBUG" if verbose else "WARNING" if quiet else "INFO"
    logger.remove()
    logger.add(sys.stderr, level=level, format="{message}")


def build_cache(config: Config) -> PageCache:
    if not config.cache.enabled:
        return PageCache()
    return FilePageCache(Path(config.cache.path).expanduser())


def save_cache(cache: PageCache) -> None:
    try:
        cache.save()
    except CacheSaveError as e:
        logger.error("Error saving cache: {}", e)


async def run_fetch(url: str, *, cache: PageCache, config: Config, plain: bool = False) -> bool:
    fetcher = Fetcher(cache, config.http)
    try:
        result = await fetcher.fetch(url)
    except FetchError as e:
        logger.error("Error fetching URL: {}", e)
        return False

    print("Content of the page:")
    rendered = render(extract_content(result.body), strip_tags=plain)
    if rendered:
        print(rendered)
    return True


async def run_search(term: str, *, config: Config) -> bool:
    client = SearchClient(config.search)
    try:
        urls = await client.search_urls(term)
    except SearchError as e:
        logger.error("Error performing search: {}", e)
        return False

    if not urls:
        print(f"No results for: {term}")
    else:
        print("\n".join(urls))
    return True


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        args = build_parser().parse_args(translate_legacy_flags(argv))
    except UsageError:
        print(UNKNOWN_HINT, file=sys.stderr)
        return 2

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.command in (None, "help"):
        print(HELP_TEXT)
        return 0

    config = load_config(Path(args.config).expanduser() if args.config else None)
    if args.cache_file:
        config.cache.path = args.cache_file
    if args.no_cache:
        config.cache.enabled = False

    cache = build_cache(config)
    cache.load()
    try:
        if args.command == "fetch":
            ok = asyncio.run(run_fetch(args.url, cache=cache, config=config, plain=args.plain))
        else:
            ok = asyncio.run(run_search(" ".join(args.term), config=config))
    finally:
        save_cache(cache)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
