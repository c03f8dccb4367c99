"""Candidate URIs from the HTTP ``Link`` response header."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from requests.structures import CaseInsensitiveDict

from .matching import matches_any_of_link_selectors
from .models import LinkSelector

ENTRY_SEPARATOR = re.compile(r",(?=\s*<)")
URL_PATTERN = re.compile(r"<([^<>]+)>")
REL_PATTERN = re.compile(r"""rel\s*=\s*["']?([^"';,]+)["']?""", re.IGNORECASE)
TYPE_PATTERN = re.compile(r"""type\s*=\s*["']?([^"';,]+)["']?""", re.IGNORECASE)


@dataclass(frozen=True)
class HeadersMethodOptions:
    """Options of the ``headers`` discovery method."""

    link_selectors: tuple[LinkSelector, ...] = ()
    base_url: str = ""


def parse_link_header(value: str | None) -> Iterator[tuple[str, str | None, str | None]]:
    """Yield ``(url, rel, type)`` for every well-formed entry of a Link header."""
    if not value:
        return
    for entry in ENTRY_SEPARATOR.split(value):
        url_match = URL_PATTERN.search(entry)
        if not url_match:
            continue
        params = entry[url_match.end() :]
        rel_match = REL_PATTERN.search(params)
        type_match = TYPE_PATTERN.search(params)
        rel = rel_match.group(1).strip().lower() if rel_match else None
        value_type = type_match.group(1).strip() if type_match else None
        yield url_match.group(1), rel, value_type


def discover_uris_from_headers(
    headers: Mapping[str, str] | None, options: HeadersMethodOptions
) -> list[str]:
    """Return Link header URLs accepted by the configured selectors."""
    if not headers:
        return []
    link_header = CaseInsensitiveDict(headers).get("link")
    uris: dict[str, None] = {}
    for url, rel, value_type in parse_link_header(link_header):
        if rel and matches_any_of_link_selectors(rel, value_type, options.link_selectors):
            uris.setdefault(url, None)
    return list(uris)
