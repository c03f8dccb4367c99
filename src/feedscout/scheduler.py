"""Bounded-concurrency processing with cooperative early stop."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import TypeVar

from .logging_utils import get_logger

T = TypeVar("T")


def process_concurrently(
    items: Sequence[T],
    process_fn: Callable[[T], object],
    *,
    concurrency: int,
    should_stop: Callable[[], bool] | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Run ``process_fn`` over ``items`` with at most ``concurrency`` in flight.

    ``should_stop`` is only consulted before admitting more work; items that
    were already admitted always run to completion. Exceptions raised by
    ``process_fn`` are logged and otherwise ignored, so ``process_fn`` must
    record its own failures.
    """
    logger = logger or get_logger()
    index = 0
    active: set[Future[object]] = set()
    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        while index < len(items) or active:
            if should_stop is not None and should_stop():
                break
            while len(active) < concurrency and index < len(items):
                active.add(executor.submit(process_fn, items[index]))
                index += 1
            done, active = wait(active, return_when=FIRST_COMPLETED)
            for future in done:
                exc = future.exception()
                if exc is not None:
                    logger.debug("Worker failed: %s", exc)
    if index < len(items):
        logger.debug("Stopped early, %d items not processed", len(items) - index)
