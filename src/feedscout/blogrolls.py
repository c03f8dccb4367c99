"""Blogroll (OPML) discovery defaults and entry point."""

from __future__ import annotations

import logging

from .classifiers import classify_blogroll
from .config import DiscoverConfig
from .discover import ClassifyFn, NormalizeUrlFn, ProgressFn, discover
from .fetchers import build_fetcher
from .guess import GuessMethodOptions
from .headers import HeadersMethodOptions
from .html import HtmlMethodOptions
from .logging_utils import get_logger
from .methods import MethodDefaults, MethodsInput
from .models import DiscoverResult, Fetcher, LinkSelector, PageInput
from .validation import canonicalize_url

MIME_TYPES = ("text/x-opml", "application/xml", "text/xml")

URIS_MINIMAL = ("/.well-known/recommendations.opml", "/blogroll.opml", "/opml.xml")

URIS_BALANCED = (*URIS_MINIMAL, "/blogroll.xml", "/subscriptions.opml", "/recommendations.opml")

URIS_COMPREHENSIVE = (*URIS_BALANCED, "/links.opml", "/feeds.opml", "/subscriptions.xml")

GUESS_PRESETS = {
    "minimal": URIS_MINIMAL,
    "balanced": URIS_BALANCED,
    "comprehensive": URIS_COMPREHENSIVE,
}

ANCHOR_LABELS = ("blogroll", "opml", "subscriptions", "reading list")

LINK_SELECTORS = (
    LinkSelector(rel="blogroll"),
    LinkSelector(rel="outline", types=MIME_TYPES),
)

# Blogrolls have no platform-specific layouts.
BLOGROLL_DEFAULTS = MethodDefaults(
    html=HtmlMethodOptions(
        link_selectors=LINK_SELECTORS,
        anchor_uris=URIS_COMPREHENSIVE,
        anchor_labels=ANCHOR_LABELS,
        html5_feed_rel=False,
    ),
    headers=HeadersMethodOptions(link_selectors=LINK_SELECTORS),
    guess=GuessMethodOptions(uris=URIS_BALANCED),
)

DEFAULT_METHODS = ("html", "headers", "guess")


def discover_blogrolls(
    page: str | PageInput,
    *,
    methods: MethodsInput = DEFAULT_METHODS,
    config: DiscoverConfig | None = None,
    fetcher: Fetcher | None = None,
    classify: ClassifyFn = classify_blogroll,
    normalize_url_fn: NormalizeUrlFn = canonicalize_url,
    on_progress: ProgressFn | None = None,
    logger: logging.Logger | None = None,
) -> list[DiscoverResult]:
    """Discover OPML blogrolls of a page."""
    config = config or DiscoverConfig()
    logger = logger or get_logger()
    return discover(
        page,
        methods=methods,
        defaults=BLOGROLL_DEFAULTS,
        fetcher=fetcher or build_fetcher(config, logger),
        classify=classify,
        config=config,
        normalize_url_fn=normalize_url_fn,
        on_progress=on_progress,
        logger=logger,
    )
