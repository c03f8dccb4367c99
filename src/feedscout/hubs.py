"""WebSub hub discovery from Link headers, HTML and feed bodies."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence

import feedparser

from .classifiers import detect_feed_format
from .config import DiscoverConfig
from .discover import normalize_input
from .errors import ConfigError
from .fetchers import build_fetcher
from .headers import HeadersMethodOptions, discover_uris_from_headers
from .html import HtmlMethodOptions, discover_uris_from_html
from .logging_utils import get_logger
from .models import Fetcher, HubResult, LinkSelector, PageInput
from .validation import canonicalize_url

HUB_METHODS = ("headers", "feed", "html")

HUB_SELECTORS = (LinkSelector(rel="hub"),)
SELF_SELECTORS = (LinkSelector(rel="self"),)


def _pair(hubs: Sequence[str], selves: Sequence[str], base_url: str) -> list[HubResult]:
    if not hubs:
        return []
    topic = canonicalize_url(selves[0], base_url) if selves else base_url
    return [HubResult(hub=canonicalize_url(hub, base_url), topic=topic) for hub in hubs]


def discover_hubs_from_headers(headers: Mapping[str, str], base_url: str) -> list[HubResult]:
    """Read ``rel="hub"`` and ``rel="self"`` entries of the Link header."""
    hubs = discover_uris_from_headers(headers, HeadersMethodOptions(link_selectors=HUB_SELECTORS))
    selves = discover_uris_from_headers(
        headers, HeadersMethodOptions(link_selectors=SELF_SELECTORS)
    )
    return _pair(hubs, selves, base_url)


def discover_hubs_from_html(content: str, base_url: str) -> list[HubResult]:
    """Read ``<link rel="hub">`` and ``<link rel="self">`` elements of a page."""
    hubs = discover_uris_from_html(
        content, HtmlMethodOptions(link_selectors=HUB_SELECTORS, html5_feed_rel=False)
    )
    selves = discover_uris_from_html(
        content, HtmlMethodOptions(link_selectors=SELF_SELECTORS, html5_feed_rel=False)
    )
    return _pair(hubs, selves, base_url)


def _json_feed_hubs(content: str, base_url: str) -> list[HubResult]:
    try:
        feed = json.loads(content)
    except ValueError:
        return []
    if not isinstance(feed, dict):
        return []
    topic = feed.get("feed_url") or base_url
    return [
        HubResult(hub=hub["url"], topic=topic)
        for hub in feed.get("hubs") or []
        if isinstance(hub, dict) and hub.get("url")
    ]


def discover_hubs_from_feed(content: str, base_url: str) -> list[HubResult]:
    """Read hub links declared inside an Atom, RSS or JSON feed body."""
    feed_format = detect_feed_format(content)
    if feed_format is None:
        return []
    if feed_format == "json":
        return _json_feed_hubs(content, base_url)

    parsed = feedparser.parse(content.encode("utf-8"))
    hubs: list[str] = []
    selves: list[str] = []
    for link in parsed.feed.get("links", []):
        href = link.get("href")
        rel = (link.get("rel") or "").lower().split()
        if not href:
            continue
        if "hub" in rel:
            hubs.append(href)
        elif "self" in rel:
            selves.append(href)
    return _pair(hubs, selves, base_url)


def discover_hubs(
    page: str | PageInput,
    *,
    methods: Sequence[str] = HUB_METHODS,
    config: DiscoverConfig | None = None,
    fetcher: Fetcher | None = None,
    logger: logging.Logger | None = None,
) -> list[HubResult]:
    """Return the WebSub hubs advertised by a page or feed.

    Selected methods always run in the order headers, feed, html; each
    contributes only when the input it reads (headers or content) is present.
    """
    unknown = sorted(set(methods) - set(HUB_METHODS))
    if unknown:
        raise ConfigError(f"Unknown hub discovery methods: {', '.join(unknown)}.")
    config = config or DiscoverConfig()
    logger = logger or get_logger()
    normalized = normalize_input(page, fetcher or build_fetcher(config, logger))

    results: list[HubResult] = []
    for method in (name for name in HUB_METHODS if name in methods):
        if method == "headers" and normalized.headers:
            results.extend(discover_hubs_from_headers(normalized.headers, normalized.url))
        elif method == "feed" and normalized.content:
            results.extend(discover_hubs_from_feed(normalized.content, normalized.url))
        elif method == "html" and normalized.content:
            results.extend(discover_hubs_from_html(normalized.content, normalized.url))
    hubs = list(dict.fromkeys(results))
    logger.info("Found %d hubs for %s", len(hubs), normalized.url)
    return hubs
