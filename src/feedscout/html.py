"""Single-pass extraction of candidate URIs from ``<link>`` and ``<a>`` elements.

The extraction is a small state machine. ``on_open_tag``, ``on_text`` and
``on_close_tag`` are pure transitions over an immutable ``ExtractionState``;
``discover_uris_from_html`` feeds them the events of a BeautifulSoup parse
tree walked in document order.

Anchors are matched two ways. A href suffix (``/feed``, ``/rss.xml``...) is
accepted as soon as the anchor opens, while a label (``RSS``, ``Subscribe``...)
can only be tested when the anchor closes, since its text arrives in pieces.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from .matching import (
    ends_with_any_of,
    includes_any_of,
    is_html5_feed_rel,
    matches_any_of_link_selectors,
)
from .models import LinkSelector
from .validation import canonicalize_url


@dataclass(frozen=True)
class HtmlMethodOptions:
    """Options of the ``html`` discovery method."""

    link_selectors: tuple[LinkSelector, ...] = ()
    anchor_uris: tuple[str, ...] = ()
    anchor_ignored_uris: tuple[str, ...] = ()
    anchor_labels: tuple[str, ...] = ()
    html5_feed_rel: bool = True
    base_url: str = ""


@dataclass(frozen=True)
class AnchorState:
    href: str = ""
    text: str = ""


@dataclass(frozen=True)
class ExtractionState:
    options: HtmlMethodOptions
    discovered: tuple[str, ...] = ()
    anchor: AnchorState = field(default_factory=AnchorState)


def _accept(state: ExtractionState, href: str) -> ExtractionState:
    uri = canonicalize_url(href, state.options.base_url)
    if uri in state.discovered:
        return state
    return replace(state, discovered=state.discovered + (uri,))


def _accepts_link(options: HtmlMethodOptions, rel: str, value_type: str | None) -> bool:
    if matches_any_of_link_selectors(rel, value_type, options.link_selectors):
        return True
    return options.html5_feed_rel and is_html5_feed_rel(rel)


def on_open_tag(state: ExtractionState, name: str, attrs: Mapping[str, str]) -> ExtractionState:
    """Handle an opening tag."""
    href = attrs.get("href")
    if not href:
        return state

    if name == "link":
        rel = (attrs.get("rel") or "").lower()
        if rel and _accepts_link(state.options, rel, attrs.get("type")):
            return _accept(state, href)
        return state

    if name == "a":
        lower_href = href.lower()
        if includes_any_of(lower_href, state.options.anchor_ignored_uris):
            return replace(state, anchor=AnchorState())
        state = replace(state, anchor=AnchorState(href=href))
        if ends_with_any_of(lower_href, state.options.anchor_uris):
            state = _accept(state, href)
    return state


def on_text(state: ExtractionState, text: str) -> ExtractionState:
    """Accumulate text verbatim while an anchor is open."""
    if not state.anchor.href or not text:
        return state
    return replace(state, anchor=replace(state.anchor, text=state.anchor.text + text))


def on_close_tag(state: ExtractionState, name: str) -> ExtractionState:
    """Test the label of a closing anchor and reset the anchor state."""
    if name != "a":
        return state
    if state.anchor.href and state.anchor.text:
        label = state.anchor.text.strip().lower()
        if includes_any_of(label, state.options.anchor_labels):
            state = _accept(state, state.anchor.href)
    return replace(state, anchor=AnchorState())


def iter_html_events(html: str) -> Iterator[tuple[str, str, Mapping[str, str]]]:
    """Yield ``(event, name_or_text, attrs)`` tuples in document order."""
    soup = BeautifulSoup(html or "", "html.parser", multi_valued_attributes=None)
    stack: list[tuple[object, bool]] = [(child, False) for child in reversed(soup.contents)]
    while stack:
        node, closing = stack.pop()
        if isinstance(node, Tag):
            if closing:
                yield "close", node.name, {}
                continue
            yield "open", node.name, {key: str(value) for key, value in node.attrs.items()}
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.contents))
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            yield "text", str(node), {}


def discover_uris_from_html(html: str, options: HtmlMethodOptions) -> list[str]:
    """Return candidate URIs found in ``<link>`` and ``<a>`` elements."""
    state = ExtractionState(options=options)
    for event, value, attrs in iter_html_events(html):
        if event == "open":
            state = on_open_tag(state, value, attrs)
        elif event == "text":
            state = on_text(state, value)
        else:
            state = on_close_tag(state, value)
    return list(state.discovered)
