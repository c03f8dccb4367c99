"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import validate_runtime_constraints

DEFAULT_USER_AGENT = "feedscout/1.0 (feed discovery)"
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_CONCURRENCY = 3


@dataclass(frozen=True)
class DiscoverConfig:
    """Validated configuration used by the discovery orchestrator."""

    concurrency: int = DEFAULT_CONCURRENCY
    stop_on_first_result: bool = False
    include_invalid: bool = False
    additional_uris: tuple[str, ...] = ()
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    show_progress: bool = True

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            concurrency=self.concurrency,
            request_timeout=self.request_timeout,
        )
