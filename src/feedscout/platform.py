"""Ordered chain of platform-specific URI resolvers."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .logging_utils import get_logger
from .models import Fetcher, PlatformContext, PlatformHandler


@dataclass(frozen=True)
class PlatformMethodOptions:
    """Options of the ``platform`` discovery method."""

    handlers: tuple[PlatformHandler, ...] = ()
    base_url: str = ""


def discover_uris_from_platform(
    url: str,
    handlers: Sequence[PlatformHandler],
    context: PlatformContext,
    *,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Return the URIs of the first handler that matches and resolves.

    A handler that raises in ``match`` or ``resolve`` is skipped. The first
    successful ``resolve`` wins even when it returns no URIs.
    """
    logger = logger or get_logger()
    for handler in handlers:
        name = type(handler).__name__
        try:
            if not handler.match(url):
                continue
        except Exception as exc:
            logger.debug("Platform handler %s failed to match %s: %s", name, url, exc)
            continue
        try:
            uris = handler.resolve(url, context)
        except Exception as exc:
            logger.debug("Platform handler %s failed to resolve %s: %s", name, url, exc)
            continue
        logger.debug("Platform handler %s resolved %d URIs", name, len(uris))
        return list(uris)
    return []


def discover_uris_from_platform_options(
    options: PlatformMethodOptions,
    *,
    content: str | None = None,
    fetcher: Fetcher | None = None,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Run the handler chain configured in ``options`` against its base URL."""
    return discover_uris_from_platform(
        options.base_url,
        options.handlers,
        PlatformContext(content=content, fetcher=fetcher),
        logger=logger,
    )
