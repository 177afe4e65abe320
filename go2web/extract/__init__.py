"""HTML extraction helpers."""

from go2web.extract.patterns import (
    ExtractedContent,
    Link,
    extract_content,
    extract_headings,
    extract_links,
    extract_search_result_urls,
    render,
    strip_html,
)

__all__ = [
    "ExtractedContent",
    "Link",
    "extract_content",
    "extract_headings",
    "extract_links",
    "extract_search_result_urls",
    "render",
    "strip_html",
]
