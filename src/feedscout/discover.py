"""Core discovery orchestration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from threading import Lock

from .config import DiscoverConfig
from .logging_utils import get_logger
from .methods import MethodDefaults, MethodsInput, discover_uris, normalize_methods_config
from .models import DiscoverResult, Fetcher, PageInput, Progress
from .scheduler import process_concurrently
from .validation import canonicalize_url, dedupe_preserve_order

ClassifyFn = Callable[[str, str, Mapping[str, str] | None], DiscoverResult]
NormalizeUrlFn = Callable[[str, str], str]
ProgressFn = Callable[[Progress], None]


def normalize_input(page: str | PageInput, fetcher: Fetcher) -> PageInput:
    """Fetch a URL once; a PageInput is trusted as-is and never fetched."""
    if isinstance(page, PageInput):
        return page
    response = fetcher.fetch(page)
    return PageInput(url=response.url, content=response.text, headers=response.headers)


class _Validation:
    """Counters and results of one validation run, shared by the workers."""

    def __init__(
        self,
        uris: list[str],
        *,
        fetcher: Fetcher,
        classify: ClassifyFn,
        on_progress: ProgressFn | None,
        logger: logging.Logger,
    ) -> None:
        self._uris = uris
        self._positions = {uri: position for position, uri in enumerate(uris)}
        self._fetcher = fetcher
        self._classify = classify
        self._on_progress = on_progress
        self._logger = logger
        self._lock = Lock()
        self._results: list[tuple[int, DiscoverResult]] = []
        self.tested = 0
        self.found = 0

    def process(self, url: str) -> None:
        try:
            response = self._fetcher.fetch(url)
            result = self._classify(response.url, response.text, response.headers)
        except Exception as exc:
            self._logger.debug("Candidate %s failed: %s", url, exc)
            result = DiscoverResult(url=url, is_valid=False, error=exc)

        with self._lock:
            self._results.append((self._positions[url], result))
            self.tested += 1
            if result.is_valid:
                self.found += 1
            if self._on_progress is not None:
                self._on_progress(
                    Progress(
                        tested=self.tested,
                        total=len(self._uris),
                        found=self.found,
                        current=url,
                    )
                )

    def results(self) -> list[DiscoverResult]:
        with self._lock:
            return [result for _, result in sorted(self._results, key=lambda item: item[0])]


def discover(
    page: str | PageInput,
    *,
    methods: MethodsInput,
    defaults: MethodDefaults,
    fetcher: Fetcher,
    classify: ClassifyFn,
    config: DiscoverConfig | None = None,
    normalize_url_fn: NormalizeUrlFn = canonicalize_url,
    on_progress: ProgressFn | None = None,
    logger: logging.Logger | None = None,
) -> list[DiscoverResult]:
    """Discover, validate and return the resources associated with a page.

    Results keep the order in which candidates were issued, regardless of
    which fetch finished first.
    """
    config = config or DiscoverConfig()
    logger = logger or get_logger()

    normalized = normalize_input(page, fetcher)

    if normalized.content:
        result = classify(normalized.url, normalized.content, normalized.headers)
        if result.is_valid:
            logger.info("Page itself is valid: %s", normalized.url)
            return [result]

    methods_config = normalize_methods_config(normalized, methods, defaults)
    raw_uris = [
        *config.additional_uris,
        *discover_uris(methods_config, fetcher=fetcher, logger=logger),
    ]
    uris = dedupe_preserve_order(normalize_url_fn(uri, normalized.url) for uri in raw_uris)
    logger.info(
        "Candidate URIs to validate: %d (methods: %s)",
        len(uris),
        ", ".join(methods_config.enabled) or "none",
    )

    validation = _Validation(
        uris,
        fetcher=fetcher,
        classify=classify,
        on_progress=on_progress,
        logger=logger,
    )
    process_concurrently(
        uris,
        validation.process,
        concurrency=config.concurrency,
        should_stop=lambda: config.stop_on_first_result and validation.found > 0,
        logger=logger,
    )

    results = validation.results()
    logger.info(
        "Validated %d of %d candidates, found %d", validation.tested, len(uris), validation.found
    )
    if config.include_invalid:
        return results
    return [result for result in results if result.is_valid]
