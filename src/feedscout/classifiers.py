"""Content classifiers deciding whether a fetched body is the resource sought.

They look for format markers only; parsing titles or entries of a feed is
left to dedicated feed libraries.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from bs4 import BeautifulSoup

from .models import DiscoverResult

HTML_MARKER = re.compile(r"<html", re.IGNORECASE)
FEED_MARKERS = (
    ("rss", re.compile(r"<rss[\s>]", re.IGNORECASE)),
    ("atom", re.compile(r"<feed[\s>]", re.IGNORECASE)),
    ("rdf", re.compile(r"<rdf:rdf[\s>]", re.IGNORECASE)),
)
JSON_FEED_VERSION = re.compile(r'"version"\s*:\s*"https?://jsonfeed\.org/version/', re.IGNORECASE)
OPML_MARKER = re.compile(r"<opml[\s>]", re.IGNORECASE)


def detect_feed_format(content: str | None) -> str | None:
    """Return ``rss``, ``atom``, ``rdf`` or ``json`` for feed bodies, else None."""
    if not content or HTML_MARKER.search(content):
        return None
    for feed_format, marker in FEED_MARKERS:
        if marker.search(content):
            return feed_format
    if JSON_FEED_VERSION.search(content):
        return "json"
    return None


def classify_feed(
    url: str, content: str, headers: Mapping[str, str] | None = None
) -> DiscoverResult:
    """Classify a body as an RSS, Atom, RDF or JSON feed."""
    feed_format = detect_feed_format(content)
    return DiscoverResult(url=url, is_valid=feed_format is not None, format=feed_format)


def classify_blogroll(
    url: str, content: str, headers: Mapping[str, str] | None = None
) -> DiscoverResult:
    """Classify a body as an OPML document and read its title."""
    if not content or not OPML_MARKER.search(content):
        return DiscoverResult(url=url, is_valid=False)
    soup = BeautifulSoup(content, "html.parser")
    if soup.find("opml") is None or soup.find("body") is None:
        return DiscoverResult(url=url, is_valid=False)
    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else None
    return DiscoverResult(url=url, is_valid=True, format="opml", title=title or None)
