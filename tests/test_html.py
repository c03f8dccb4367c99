from dataclasses import replace

from feedscout.feeds import FEED_DEFAULTS
from feedscout.html import (
    AnchorState,
    ExtractionState,
    HtmlMethodOptions,
    discover_uris_from_html,
    iter_html_events,
    on_close_tag,
    on_open_tag,
    on_text,
)
from feedscout.models import LinkSelector

OPTIONS = HtmlMethodOptions(
    link_selectors=(LinkSelector(rel="alternate", types=("application/rss+xml",)),),
    anchor_uris=("/feed", "/rss.xml"),
    anchor_ignored_uris=("wp-json/oembed/",),
    anchor_labels=("rss", "subscribe"),
    base_url="https://example.com/blog/",
)


def test_link_alternate_with_allowed_type_is_resolved_against_base() -> None:
    html = '<head><link rel="alternate" type="application/rss+xml" href="rss.xml"></head>'
    assert discover_uris_from_html(html, OPTIONS) == ["https://example.com/blog/rss.xml"]


def test_link_alternate_with_other_type_is_ignored() -> None:
    html = '<link rel="alternate" type="text/html" href="/fr/">'
    assert discover_uris_from_html(html, OPTIONS) == []


def test_rel_feed_is_accepted_regardless_of_type() -> None:
    html = '<link rel="feed" type="text/html" href="/posts">'
    assert discover_uris_from_html(html, OPTIONS) == ["https://example.com/posts"]


def test_alternate_stylesheet_feed_is_not_accepted() -> None:
    html = '<link rel="alternate stylesheet feed" type="text/css" href="/dark.css">'
    assert discover_uris_from_html(html, OPTIONS) == []


def test_rel_feed_rule_can_be_disabled() -> None:
    options = HtmlMethodOptions(html5_feed_rel=False, base_url="https://example.com/")
    assert discover_uris_from_html('<link rel="feed" href="/posts">', options) == []


def test_anchor_accepted_by_href_suffix() -> None:
    html = '<a href="https://example.com/feed">Posts</a>'
    assert discover_uris_from_html(html, OPTIONS) == ["https://example.com/feed"]


def test_anchor_accepted_by_label_across_nested_text() -> None:
    html = '<p><a href="/syndication"><span>Sub</span>scribe <b>here</b></a></p>'
    assert discover_uris_from_html(html, OPTIONS) == ["https://example.com/syndication"]


def test_ignored_anchor_uri_is_skipped_even_with_matching_label() -> None:
    html = '<a href="/wp-json/oembed/1.0/embed?url=x">RSS</a>'
    assert discover_uris_from_html(html, OPTIONS) == []


def test_results_are_deduplicated_in_document_order() -> None:
    html = (
        '<link rel="alternate" type="application/rss+xml" href="/rss.xml#top">'
        '<a href="/other">RSS</a>'
        '<a href="/rss.xml">RSS</a>'
    )
    assert discover_uris_from_html(html, OPTIONS) == [
        "https://example.com/rss.xml",
        "https://example.com/other",
    ]


def test_elements_without_href_and_comments_are_ignored() -> None:
    html = '<!-- <a href="/feed">RSS</a> --><link rel="alternate"><a name="x">RSS</a>'
    assert discover_uris_from_html(html, OPTIONS) == []


def test_malformed_html_is_tolerated() -> None:
    html = '<div><a href="/rss.xml">broken <p>markup'
    assert discover_uris_from_html(html, OPTIONS) == ["https://example.com/rss.xml"]


def test_feed_defaults_find_wordpress_links() -> None:
    options = replace(FEED_DEFAULTS.html, base_url="https://blog.example.org/")
    html = (
        '<link rel="alternate" type="application/rss+xml; charset=UTF-8" '
        'href="https://blog.example.org/feed/">'
        '<link rel="alternate" type="application/json+oembed" '
        'href="https://blog.example.org/wp-json/oembed/1.0/embed">'
    )
    assert discover_uris_from_html(html, options) == ["https://blog.example.org/feed/"]


def test_transitions_are_pure() -> None:
    state = ExtractionState(options=OPTIONS)
    opened = on_open_tag(state, "a", {"href": "/x"})
    assert state.anchor == AnchorState()
    assert opened.anchor == AnchorState(href="/x")

    with_text = on_text(opened, "RSS")
    assert opened.anchor.text == ""
    closed = on_close_tag(with_text, "a")
    assert closed.discovered == ("https://example.com/x",)
    assert closed.anchor == AnchorState()
    assert with_text.discovered == ()


def test_text_outside_anchor_is_ignored() -> None:
    state = ExtractionState(options=OPTIONS)
    assert on_text(state, "RSS") is state


def test_iter_html_events_yields_document_order() -> None:
    events = list(iter_html_events('<p>a<a href="/x">b</a></p>'))
    assert events == [
        ("open", "p", {}),
        ("text", "a", {}),
        ("open", "a", {"href": "/x"}),
        ("text", "b", {}),
        ("close", "a", {}),
        ("close", "p", {}),
    ]


def test_alternate_stylesheet_without_feed_type_is_not_accepted() -> None:
    assert discover_uris_from_html('<link rel="alternate stylesheet" href="/x.css">', OPTIONS) == []


def test_anchor_without_text_is_reset_on_close() -> None:
    options = HtmlMethodOptions(anchor_labels=("rss",), base_url="https://example.com/")
    html = '<a href="/about"><img src="x.png"></a><p>Get our RSS</p><a name="top">Top</a>'
    assert discover_uris_from_html(html, options) == []


def test_close_tag_resets_anchor_even_when_text_is_empty() -> None:
    state = on_open_tag(ExtractionState(options=OPTIONS), "a", {"href": "/about"})
    assert on_close_tag(state, "a").anchor == AnchorState()
