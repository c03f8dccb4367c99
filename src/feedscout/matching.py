"""Case-insensitive matchers shared by every discovery method."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .models import LinkSelector

Normalizer = Callable[[str], str]


def normalize_mime_type(value: str) -> str:
    """Strip parameters such as ``charset`` and lower-case a MIME type."""
    return value.split(";", maxsplit=1)[0].strip().lower()


def includes_any_of(
    value: str | None, patterns: Iterable[str], normalize: Normalizer | None = None
) -> bool:
    """Return True if any pattern is a substring of the case-folded value."""
    if not value:
        return False
    parsed = normalize(value) if normalize else value.lower()
    return any(pattern.lower() in parsed for pattern in patterns if pattern)


def is_any_of(
    value: str | None, patterns: Iterable[str], normalize: Normalizer | None = None
) -> bool:
    """Return True if the trimmed, case-folded value equals any pattern."""
    if value is None:
        return False
    parsed = normalize(value) if normalize else value.lower().strip()
    if not parsed:
        return False
    return any(parsed == pattern.lower().strip() for pattern in patterns)


def ends_with_any_of(value: str | None, patterns: Iterable[str]) -> bool:
    """Return True if the case-folded value ends with any pattern."""
    if not value:
        return False
    lowered = value.lower()
    return any(lowered.endswith(pattern.lower()) for pattern in patterns if pattern)


def any_word_matches_any_of(value: str | None, patterns: Iterable[str]) -> bool:
    """Return True if any whitespace-separated word equals any pattern."""
    if not value:
        return False
    wanted = {pattern.lower() for pattern in patterns}
    return any(word in wanted for word in value.lower().split())


def is_of_allowed_mime_type(value: str | None, allowed: Iterable[str]) -> bool:
    """Return True if the MIME type is allowed; an empty allow-list allows anything."""
    allowed = list(allowed)
    if not allowed:
        return True
    if not value:
        return False
    return is_any_of(value, allowed, normalize_mime_type)


def matches_link_selector(rel: str | None, value_type: str | None, selector: LinkSelector) -> bool:
    """Apply a selector: rel token must match, then the optional type allow-list."""
    if not any_word_matches_any_of(rel, [selector.rel]):
        return False
    if selector.types is None:
        return True
    return is_of_allowed_mime_type(value_type, selector.types)


def matches_any_of_link_selectors(
    rel: str | None, value_type: str | None, selectors: Iterable[LinkSelector]
) -> bool:
    """Return True if any selector accepts the rel/type pair."""
    return any(matches_link_selector(rel, value_type, selector) for selector in selectors)


def is_html5_feed_rel(rel: str | None) -> bool:
    """HTML5 ``rel="feed"`` rule: type is ignored, stylesheets are excluded."""
    tokens = (rel or "").lower().split()
    return "feed" in tokens and "stylesheet" not in tokens
