"""Validation, URL normalization and runtime guardrails."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from urllib.parse import urljoin, urlparse

from .errors import ConfigError


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def canonicalize_url(href: str, base: str) -> str:
    """Resolve relative and protocol-relative URLs and strip hash fragments."""
    return urljoin(base, href.strip()).split("#", maxsplit=1)[0]


def dedupe_preserve_order(items: Iterable[str]) -> list[str]:
    """Dedupe values while preserving first-seen order."""
    return list(dict.fromkeys(items))


def load_lines_from_file(path: str) -> list[str]:
    """Load non-empty lines from a UTF-8 text file."""
    content = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in content.splitlines() if line.strip()]


def validate_runtime_constraints(*, concurrency: int, request_timeout: float) -> None:
    """Validate runtime configuration and raise ConfigError on invalid values."""
    if concurrency < 1:
        raise ConfigError("--concurrency must be >= 1.")
    if request_timeout <= 0:
        raise ConfigError("--timeout must be > 0.")
