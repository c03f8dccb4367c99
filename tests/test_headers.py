from feedscout.feeds import LINK_SELECTORS
from feedscout.headers import HeadersMethodOptions, discover_uris_from_headers, parse_link_header

OPTIONS = HeadersMethodOptions(link_selectors=LINK_SELECTORS)


def test_parse_link_header_tolerates_quoting_styles() -> None:
    value = (
        '<https://example.com/a.xml>; rel="alternate"; type="application/rss+xml", '
        "<https://example.com/b.xml>; rel='Alternate'; type='application/atom+xml', "
        "<https://example.com/c.json>; rel=alternate; type=application/feed+json"
    )
    assert list(parse_link_header(value)) == [
        ("https://example.com/a.xml", "alternate", "application/rss+xml"),
        ("https://example.com/b.xml", "alternate", "application/atom+xml"),
        ("https://example.com/c.json", "alternate", "application/feed+json"),
    ]


def test_parse_link_header_skips_entries_without_closing_bracket() -> None:
    value = '<https://example.com/broken.xml; rel="alternate", <https://example.com/ok.xml>; rel=feed'
    assert [url for url, _, _ in parse_link_header(value)] == ["https://example.com/ok.xml"]


def test_parse_link_header_ignores_rel_inside_url() -> None:
    value = "<https://example.com/?rel=self>; rel=alternate; type=application/rss+xml"
    assert list(parse_link_header(value)) == [
        ("https://example.com/?rel=self", "alternate", "application/rss+xml")
    ]


def test_discover_uris_from_headers_filters_by_selector() -> None:
    headers = {
        "Link": (
            '<https://example.com/feed.xml>; rel="alternate"; type="application/rss+xml", '
            '<https://example.com/style.css>; rel="stylesheet", '
            '<https://example.com/posts>; rel="feed"'
        )
    }
    assert discover_uris_from_headers(headers, OPTIONS) == [
        "https://example.com/feed.xml",
        "https://example.com/posts",
    ]


def test_discover_uris_from_headers_is_case_insensitive_and_deduplicates() -> None:
    headers = {
        "LINK": (
            '<https://example.com/feed.xml>; rel="alternate"; type="application/rss+xml", '
            '<https://example.com/feed.xml>; rel="feed"'
        )
    }
    assert discover_uris_from_headers(headers, OPTIONS) == ["https://example.com/feed.xml"]


def test_discover_uris_from_headers_without_link_header() -> None:
    assert discover_uris_from_headers({"Content-Type": "text/html"}, OPTIONS) == []
    assert discover_uris_from_headers(None, OPTIONS) == []


def test_relative_urls_are_returned_unresolved() -> None:
    headers = {"link": '</feed.xml>; rel="alternate"; type="application/rss+xml"'}
    assert discover_uris_from_headers(headers, OPTIONS) == ["/feed.xml"]


def test_single_and_double_quoted_params_discover_the_same_uri() -> None:
    double = {"Link": '</feed.xml>; rel=alternate; type="application/rss+xml"'}
    single = {"Link": "</feed.xml>; rel='alternate'; type='application/rss+xml'"}
    broken = {"Link": '</feed.xml; rel=alternate; type="application/rss+xml"'}
    assert discover_uris_from_headers(double, OPTIONS) == ["/feed.xml"]
    assert discover_uris_from_headers(single, OPTIONS) == ["/feed.xml"]
    assert discover_uris_from_headers(broken, OPTIONS) == []
