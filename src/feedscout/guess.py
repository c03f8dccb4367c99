"""Guessed candidate URIs built from conventional paths."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit

IPV4_PATTERN = re.compile(r"^\d+\.\d+\.\d+\.\d+$")


@dataclass(frozen=True)
class GuessMethodOptions:
    """Options of the ``guess`` discovery method.

    ``additional_base_urls`` are tried after ``base_url``, typically produced by
    ``get_www_counterpart`` or ``get_subdomain_variants``.
    """

    uris: tuple[str, ...] = ()
    additional_base_urls: tuple[str, ...] = ()
    base_url: str = ""


def generate_url_combinations(base_urls: Iterable[str], uris: Iterable[str]) -> list[str]:
    """Join every URI onto every base URL, base-major."""
    uris = list(uris)
    return [urljoin(base, uri) for base in base_urls for uri in uris]


def discover_uris_from_guess(options: GuessMethodOptions) -> list[str]:
    """Return the cartesian product of base URLs and conventional paths."""
    base_urls = [options.base_url, *options.additional_base_urls]
    return generate_url_combinations(base_urls, options.uris)


def _origin(scheme: str, hostname: str, port: int | None) -> str:
    return f"{scheme}://{hostname}{f':{port}' if port else ''}"


def get_www_counterpart(url: str) -> str:
    """Toggle the leading ``www.`` label of a URL's host and return its origin."""
    parsed = urlsplit(url)
    hostname = parsed.hostname or ""
    if hostname.startswith("www."):
        counterpart = hostname[len("www.") :]
    else:
        counterpart = f"www.{hostname}"
    return _origin(parsed.scheme, counterpart, parsed.port)


def get_subdomain_variants(url: str, prefixes: Iterable[str]) -> list[str]:
    """Apply each prefix to the root domain (last two labels) of a URL's host.

    An empty prefix yields the bare root domain. Hosts without a root domain,
    ``localhost`` and IPv4 addresses, produce no variants. Multi-level public
    suffixes such as ``co.uk`` are not recognized.
    """
    parsed = urlsplit(url)
    hostname = parsed.hostname or ""
    if hostname == "localhost" or IPV4_PATTERN.match(hostname):
        return []
    labels = hostname.split(".")
    if len(labels) < 2:
        return []
    root_domain = ".".join(labels[-2:])
    return [
        _origin(parsed.scheme, f"{prefix}.{root_domain}" if prefix else root_domain, parsed.port)
        for prefix in prefixes
    ]
