"""Protocols and lightweight model types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class FetchResponse:
    """Response returned by a fetcher; ``url`` is the post-redirect location."""

    url: str
    status: int = 200
    status_text: str = ""
    headers: Mapping[str, str] | None = None
    body: str | bytes | None = ""

    @property
    def text(self) -> str:
        """Return the body when it is text, otherwise an empty string."""
        return self.body if isinstance(self.body, str) else ""


class Fetcher(Protocol):
    """Contract for HTTP fetchers."""

    def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
    ) -> FetchResponse:
        """Fetch a URL and return its final location, headers and body."""


@dataclass(frozen=True)
class PageInput:
    """A page whose content and headers are already known and must not be fetched."""

    url: str
    content: str | None = None
    headers: Mapping[str, str] | None = None


@dataclass(frozen=True)
class LinkSelector:
    """Match rule for ``<link>`` elements and ``Link`` header entries."""

    rel: str
    types: tuple[str, ...] | None = None


@dataclass(frozen=True)
class DiscoverResult:
    """Outcome of validating one candidate URL."""

    url: str
    is_valid: bool
    format: str | None = None
    title: str | None = None
    error: BaseException | None = None


@dataclass(frozen=True)
class Progress:
    """Snapshot emitted after each candidate finishes validation."""

    tested: int
    total: int
    found: int
    current: str


@dataclass(frozen=True)
class HubResult:
    """A WebSub hub together with the topic URL it serves."""

    hub: str
    topic: str


@dataclass(frozen=True)
class PlatformContext:
    """What a platform handler may use besides the URL itself."""

    content: str | None = None
    fetcher: Fetcher | None = None


class PlatformHandler(Protocol):
    """Contract for platform-specific URI resolvers."""

    def match(self, url: str) -> bool:
        """Return True when this handler knows how to resolve the URL."""

    def resolve(self, url: str, context: PlatformContext) -> list[str]:
        """Return candidate URIs for the URL."""
