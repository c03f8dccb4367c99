import logging

from feedscout.blogrolls import BLOGROLL_DEFAULTS, discover_blogrolls
from feedscout.config import DiscoverConfig
from feedscout.feeds import FEED_DEFAULTS, GUESS_PRESETS, URIS_BALANCED, discover_feeds
from feedscout.models import FetchResponse, PageInput
from feedscout.platforms import DEFAULT_PLATFORM_HANDLERS

RSS = '<rss version="2.0"><channel></channel></rss>'
OPML = "<opml><head><title>Friends</title></head><body><outline/></body></opml>"


class FakeFetcher:
    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.calls: list[str] = []

    def fetch(self, url: str, **_kwargs: object) -> FetchResponse:
        self.calls.append(url)
        return FetchResponse(url=url, body=self.pages.get(url, ""))


def test_feed_presets() -> None:
    assert GUESS_PRESETS["balanced"] == URIS_BALANCED
    assert set(GUESS_PRESETS["minimal"]) <= set(GUESS_PRESETS["comprehensive"])
    assert FEED_DEFAULTS.platform.handlers == DEFAULT_PLATFORM_HANDLERS
    assert FEED_DEFAULTS.html.html5_feed_rel is True


def test_discover_feeds_prefers_platform_feeds() -> None:
    fetcher = FakeFetcher(
        {
            "https://github.com/octocat": "<html><body>profile</body></html>",
            "https://github.com/octocat.atom": '<feed xmlns="http://www.w3.org/2005/Atom"></feed>',
        }
    )
    results = discover_feeds(
        "https://github.com/octocat",
        methods=("platform",),
        fetcher=fetcher,
        logger=logging.getLogger("test"),
    )
    assert [(result.url, result.format) for result in results] == [
        ("https://github.com/octocat.atom", "atom")
    ]


def test_discover_feeds_guesses_conventional_paths() -> None:
    fetcher = FakeFetcher({"https://example.com/index.xml": RSS})
    page = PageInput(url="https://example.com/", content="<html><body>hi</body></html>")
    results = discover_feeds(
        page,
        methods={"guess": True},
        config=DiscoverConfig(concurrency=4),
        fetcher=fetcher,
    )
    assert [result.url for result in results] == ["https://example.com/index.xml"]
    assert len(fetcher.calls) == len(URIS_BALANCED)


def test_blogroll_defaults_do_not_use_rel_feed_or_platforms() -> None:
    assert BLOGROLL_DEFAULTS.html.html5_feed_rel is False
    assert BLOGROLL_DEFAULTS.platform.handlers == ()


def test_discover_blogrolls_from_link_element() -> None:
    fetcher = FakeFetcher({"https://example.com/blogroll.opml": OPML})
    page = PageInput(
        url="https://example.com/",
        content=(
            '<html><head><link rel="blogroll" href="/blogroll.opml">'
            '<link rel="feed" href="/feed.xml"></head></html>'
        ),
    )
    results = discover_blogrolls(page, methods=("html",), fetcher=fetcher)
    assert [(result.url, result.title) for result in results] == [
        ("https://example.com/blogroll.opml", "Friends")
    ]
    assert fetcher.calls == ["https://example.com/blogroll.opml"]
