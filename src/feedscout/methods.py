"""Per-method configuration and fan-out to the URI-generating methods."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from .errors import (
    ConfigError,
    GuessMethodRequiresUrlError,
    HeadersMethodRequiresHeadersError,
    HtmlMethodRequiresContentError,
    PlatformMethodRequiresUrlError,
)
from .guess import GuessMethodOptions, discover_uris_from_guess
from .headers import HeadersMethodOptions, discover_uris_from_headers
from .html import HtmlMethodOptions, discover_uris_from_html
from .logging_utils import get_logger
from .models import Fetcher, PageInput
from .platform import PlatformMethodOptions, discover_uris_from_platform_options
from .validation import dedupe_preserve_order

METHOD_ORDER = ("html", "headers", "guess", "platform")

MethodOverrides = bool | Mapping[str, Any] | None
MethodsInput = Sequence[str] | Mapping[str, MethodOverrides]


@dataclass(frozen=True)
class MethodDefaults:
    """Default options of every method for one kind of discovered resource."""

    html: HtmlMethodOptions = HtmlMethodOptions()
    headers: HeadersMethodOptions = HeadersMethodOptions()
    guess: GuessMethodOptions = GuessMethodOptions()
    platform: PlatformMethodOptions = PlatformMethodOptions()


@dataclass(frozen=True)
class MethodsConfig:
    """Complete options of the enabled methods plus the page data they read."""

    html: HtmlMethodOptions | None = None
    headers: HeadersMethodOptions | None = None
    guess: GuessMethodOptions | None = None
    platform: PlatformMethodOptions | None = None
    content: str | None = None
    response_headers: Mapping[str, str] | None = None

    @property
    def enabled(self) -> list[str]:
        return [name for name in METHOD_ORDER if getattr(self, name) is not None]


def _as_mapping(methods: MethodsInput) -> Mapping[str, MethodOverrides]:
    if isinstance(methods, str):
        return {methods: True}
    if isinstance(methods, Mapping):
        return methods
    return {method: True for method in methods}


def _merge(defaults: Any, overrides: MethodOverrides, method: str, base_url: str) -> Any:
    values = dict(overrides) if isinstance(overrides, Mapping) else {}
    values.pop("base_url", None)
    for key, value in values.items():
        if isinstance(value, list):
            values[key] = tuple(value)
    try:
        return replace(defaults, **values, base_url=base_url)
    except TypeError as exc:
        raise ConfigError(f"Invalid options for the {method} method: {exc}") from exc


def normalize_methods_config(
    page: PageInput, methods: MethodsInput, defaults: MethodDefaults
) -> MethodsConfig:
    """Expand user-facing method settings into complete per-method options.

    Overrides are merged shallowly over the defaults: overriding one option
    leaves its siblings at their default values. Methods whose input is
    missing raise before any network work starts.
    """
    requested = _as_mapping(methods)
    unknown = sorted(set(requested) - set(METHOD_ORDER))
    if unknown:
        raise ConfigError(f"Unknown discovery methods: {', '.join(unknown)}.")

    options: dict[str, Any] = {}
    for method in METHOD_ORDER:
        overrides = requested.get(method)
        # An empty mapping enables the method with its defaults.
        if overrides is None or overrides is False:
            continue
        if method == "html" and page.content is None:
            raise HtmlMethodRequiresContentError()
        if method == "headers" and page.headers is None:
            raise HeadersMethodRequiresHeadersError()
        if method == "guess" and not page.url:
            raise GuessMethodRequiresUrlError()
        if method == "platform" and not page.url:
            raise PlatformMethodRequiresUrlError()
        options[method] = _merge(getattr(defaults, method), overrides, method, page.url)

    return MethodsConfig(**options, content=page.content, response_headers=page.headers)


def discover_uris(
    config: MethodsConfig,
    *,
    fetcher: Fetcher | None = None,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Run enabled methods in fixed order and return their deduplicated URIs."""
    logger = logger or get_logger()
    uris: list[str] = []
    if config.html is not None:
        found = discover_uris_from_html(config.content or "", config.html)
        logger.debug("html method found %d URIs", len(found))
        uris.extend(found)
    if config.headers is not None:
        found = discover_uris_from_headers(config.response_headers, config.headers)
        logger.debug("headers method found %d URIs", len(found))
        uris.extend(found)
    if config.guess is not None:
        found = discover_uris_from_guess(config.guess)
        logger.debug("guess method generated %d URIs", len(found))
        uris.extend(found)
    if config.platform is not None:
        found = discover_uris_from_platform_options(
            config.platform, content=config.content, fetcher=fetcher, logger=logger
        )
        logger.debug("platform method found %d URIs", len(found))
        uris.extend(found)
    return dedupe_preserve_order(uris)
