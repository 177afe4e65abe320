"""Pattern-based extraction of headings, links and search results from HTML.

Nothing here parses a DOM. Each extractor is a regular expression scan, so
unclosed or malformed markup just produces fewer matches. The search-result
pattern is tied to the markup of the search engine's HTML results page and is
the piece to change when that markup changes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import unquote_plus

from loguru import logger

from go2web.errors import DecodeError

SEARCH_RESULT_LIMIT = 10

_HEADING_RE = re.compile(r"<(h[1-6])[^>]*>(.*?)</\1>", re.IGNORECASE | re.DOTALL)
_LINK_RE = re.compile(
    r'<a\s+(?:[^>]*?\s+)?href="([^"]*)"[^>]*>(.*?)</a>',
    re.IGNORECASE | re.DOTALL,
)
_SEARCH_RESULT_RE = re.compile(r'href="/url\?q=(.*?)&')
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_TAG_RE = re.compile(r"<[^>]*>")

_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&nbsp;", " "),
)


@dataclass(slots=True)
class Link:
    """One anchor found in a page."""

    href: str
    label: str


@dataclass(slots=True)
class ExtractedContent:
    """Headings and links of a page, in document order."""

    headings: list[str] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)


def extract_headings(html: str) -> list[str]:
    """Return the trimmed text of every <h1>..<h6> element with matching close tag."""
    return [match.group(2).strip() for match in _HEADING_RE.finditer(html)]


def extract_links(html: str) -> list[Link]:
    """Return every <a href="..."> anchor. Relative hrefs are left as-is."""
    return [
        Link(href=match.group(1).strip(), label=match.group(2).strip())
        for match in _LINK_RE.finditer(html)
    ]


def extract_content(html: str) -> ExtractedContent:
    return ExtractedContent(
        headings=extract_headings(html),
        links=extract_links(html),
    )


def decode_search_target(raw: str) -> str:
    """Form-decode one result target, rejecting malformed escapes."""
    if _BAD_ESCAPE_RE.search(raw):
        raise DecodeError(f"malformed percent-encoding in {raw!r}")
    try:
        return unquote_plus(raw, errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError(f"invalid UTF-8 in {raw!r}: {e.reason}") from e


def extract_search_result_urls(html: str, limit: int = SEARCH_RESULT_LIMIT) -> list[str]:
    """Collect result URLs from a search results page.

    Targets are taken from ``href="/url?q=<target>&`` anchors. Only decoded
    targets starting with ``http`` are kept, in order of first appearance,
    and scanning stops once ``limit`` URLs are collected.
    """
    urls: list[str] = []
    if limit <= 0:
        return urls

    for match in _SEARCH_RESULT_RE.finditer(html):
        try:
            url = decode_search_target(match.group(1))
        except DecodeError as e:
            logger.warning("Error decoding URL: {}", e)
            continue
        if not url.startswith("http"):
            continue
        urls.append(url)
        if len(urls) >= limit:
            break
    return urls


def strip_html(text: str) -> str:
    """Remove tags and decode the handful of entities common in labels."""
    stripped = _TAG_RE.sub("", text)
    for entity, char in _ENTITIES:
        stripped = stripped.replace(entity, char)
    return stripped


def render(content: ExtractedContent, *, strip_tags: bool = False) -> str:
    """Format extracted content for the console.

    Headings become ``  - <text>`` lines. Links become ``Link: <href><label>``
    lines, with the label appended directly after the href.
    """
    lines: list[str] = []
    for heading in content.headings:
        text = strip_html(heading).strip() if strip_tags else heading
        lines.append(f"  - {text}")
    for link in content.links:
        label = strip_html(link.label).strip() if strip_tags else link.label
        lines.append(f"Link: {link.href}{label}")
    return "\n".join(lines)
