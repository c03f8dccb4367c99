"""Feed discovery defaults and entry point."""

from __future__ import annotations

import logging

from .classifiers import classify_feed
from .config import DiscoverConfig
from .discover import ClassifyFn, NormalizeUrlFn, ProgressFn, discover
from .fetchers import build_fetcher
from .guess import GuessMethodOptions
from .headers import HeadersMethodOptions
from .html import HtmlMethodOptions
from .logging_utils import get_logger
from .methods import MethodDefaults, MethodsInput
from .models import DiscoverResult, Fetcher, LinkSelector, PageInput
from .platform import PlatformMethodOptions
from .platforms import DEFAULT_PLATFORM_HANDLERS
from .validation import canonicalize_url

MIME_TYPES = (
    # RSS
    "application/rss+xml",
    "text/rss+xml",
    "application/x-rss+xml",
    "application/rss",
    # Atom
    "application/atom+xml",
    "text/atom+xml",
    "application/atom",
    # JSON Feed
    "application/feed+json",
    "application/json",
    # RDF
    "application/rdf+xml",
    "text/rdf+xml",
    # Generic
    "application/xml",
    "text/xml",
)

# Modern static site generators and plain WordPress installs.
URIS_MINIMAL = ("/feed", "/rss", "/atom.xml", "/feed.xml", "/rss.xml", "/index.xml")

URIS_BALANCED = (*URIS_MINIMAL, "/feed/", "/index.atom", "/index.rss", "/feed.json")

URIS_COMPREHENSIVE = (
    *URIS_BALANCED,
    "/atom",
    "/feed.rss",
    "/feed.atom",
    "/feed.rss.xml",
    "/feed.atom.xml",
    "/index.rss.xml",
    "/index.atom.xml",
    "/?feed=rss",
    "/?feed=rss2",
    "/?feed=atom",
    "/?format=rss",
    "/?format=atom",
    "/?rss=1",
    "/?atom=1",
    "/.rss",
    "/f.json",
    "/f.rss",
    "/json",
    "/.feed",
    "/comments/feed",
    "/feeds/posts/default",
)

GUESS_PRESETS = {
    "minimal": URIS_MINIMAL,
    "balanced": URIS_BALANCED,
    "comprehensive": URIS_COMPREHENSIVE,
}

IGNORED_URIS = ("wp-json/oembed/", "wp-json/wp/")

ANCHOR_LABELS = ("rss", "feed", "atom", "subscribe", "syndicate", "json feed")

LINK_SELECTORS = (
    LinkSelector(rel="alternate", types=MIME_TYPES),
    LinkSelector(rel="feed"),
)

FEED_DEFAULTS = MethodDefaults(
    html=HtmlMethodOptions(
        link_selectors=LINK_SELECTORS,
        anchor_uris=URIS_COMPREHENSIVE,
        anchor_ignored_uris=IGNORED_URIS,
        anchor_labels=ANCHOR_LABELS,
    ),
    headers=HeadersMethodOptions(link_selectors=LINK_SELECTORS),
    guess=GuessMethodOptions(uris=URIS_BALANCED),
    platform=PlatformMethodOptions(handlers=DEFAULT_PLATFORM_HANDLERS),
)

DEFAULT_METHODS = ("platform", "html", "headers", "guess")


def discover_feeds(
    page: str | PageInput,
    *,
    methods: MethodsInput = DEFAULT_METHODS,
    config: DiscoverConfig | None = None,
    fetcher: Fetcher | None = None,
    classify: ClassifyFn = classify_feed,
    normalize_url_fn: NormalizeUrlFn = canonicalize_url,
    on_progress: ProgressFn | None = None,
    logger: logging.Logger | None = None,
) -> list[DiscoverResult]:
    """Discover RSS, Atom, RDF and JSON feeds of a page."""
    config = config or DiscoverConfig()
    logger = logger or get_logger()
    return discover(
        page,
        methods=methods,
        defaults=FEED_DEFAULTS,
        fetcher=fetcher or build_fetcher(config, logger),
        classify=classify,
        config=config,
        normalize_url_fn=normalize_url_fn,
        on_progress=on_progress,
        logger=logger,
    )
