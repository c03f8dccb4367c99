"""CLI entrypoint for feedscout."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Any

from tqdm import tqdm

from . import blogrolls, feeds
from .config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    DiscoverConfig,
)
from .errors import ConfigError, FetchError
from .fetchers import build_fetcher
from .guess import get_subdomain_variants, get_www_counterpart
from .hubs import HUB_METHODS, discover_hubs
from .io_csv import HUB_FIELDS, RESULT_FIELDS, hub_to_row, result_to_row, write_rows
from .logging_utils import configure_logging, get_logger
from .methods import METHOD_ORDER
from .models import Fetcher, Progress
from .validation import load_lines_from_file

PRESETS = {"feeds": feeds, "blogrolls": blogrolls}


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="feedscout - discover feeds, blogrolls and WebSub hubs of web pages."
    )
    parser.add_argument("command", choices=["feeds", "blogrolls", "hubs"], help="What to discover.")
    parser.add_argument("urls", nargs="*", help="Page URLs to inspect.")
    parser.add_argument("--urls-file", help="Path to URL file (one URL per line).")
    parser.add_argument(
        "--methods",
        nargs="+",
        help="Discovery methods to run (default depends on the command).",
    )
    parser.add_argument(
        "--guess-uris",
        choices=["minimal", "balanced", "comprehensive"],
        default="balanced",
        help="Preset of conventional paths tried by the guess method.",
    )
    parser.add_argument(
        "--www", action="store_true", help="Also guess on the www/non-www counterpart host."
    )
    parser.add_argument(
        "--subdomains",
        nargs="+",
        metavar="PREFIX",
        default=[],
        help="Also guess on these subdomains of the root domain ('' for the root itself).",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help="Maximum number of candidates validated at once.",
    )
    parser.add_argument(
        "--stop-on-first", action="store_true", help="Stop after the first valid result."
    )
    parser.add_argument(
        "--include-invalid", action="store_true", help="Also report candidates that failed."
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request timeout in seconds.",
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header.")
    parser.add_argument("--output", help="Write results to this CSV path.")
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--debug-libraries",
        action="store_true",
        help="With --verbose, also show debug logs of requests and urllib3.",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse and pre-validate CLI input."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.urls or args.urls_file):
        parser.error("Provide at least one URL or --urls-file.")
    return args


def _materialize_urls(args: argparse.Namespace) -> list[str]:
    urls = list(args.urls)
    if args.urls_file:
        urls.extend(load_lines_from_file(args.urls_file))
    return urls


def namespace_to_config(args: argparse.Namespace) -> DiscoverConfig:
    """Convert CLI args to validated DiscoverConfig."""
    return DiscoverConfig(
        concurrency=args.concurrency,
        stop_on_first_result=bool(args.stop_on_first),
        include_invalid=bool(args.include_invalid),
        user_agent=args.user_agent,
        request_timeout=args.timeout,
        show_progress=not args.no_progress,
    )


def validate_methods(args: argparse.Namespace) -> None:
    """Reject unknown method names before any page is fetched."""
    allowed = HUB_METHODS if args.command == "hubs" else METHOD_ORDER
    unknown = sorted(set(args.methods or ()) - set(allowed))
    if unknown:
        raise ConfigError(f"Unknown discovery methods: {', '.join(unknown)}.")


def build_methods(args: argparse.Namespace, url: str) -> dict[str, Any]:
    """Map CLI method flags onto per-method overrides for one page."""
    preset = PRESETS[args.command]
    methods: dict[str, Any] = {method: True for method in args.methods or preset.DEFAULT_METHODS}
    if methods.get("guess"):
        additional_base_urls = list(get_subdomain_variants(url, args.subdomains))
        if args.www:
            additional_base_urls.insert(0, get_www_counterpart(url))
        methods["guess"] = {
            "uris": preset.GUESS_PRESETS[args.guess_uris],
            "additional_base_urls": additional_base_urls,
        }
    return methods


class ProgressBar:
    """tqdm bar created on the first progress report, once the total is known."""

    def __init__(self, desc: str) -> None:
        self._desc = desc
        self._bar: tqdm | None = None

    def __call__(self, progress: Progress) -> None:
        if self._bar is None:
            self._bar = tqdm(total=progress.total, desc=self._desc)
        self._bar.set_postfix(found=progress.found)
        self._bar.update(1)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()


def run_command(
    args: argparse.Namespace,
    url: str,
    *,
    config: DiscoverConfig,
    fetcher: Fetcher,
    logger: logging.Logger,
) -> list[dict[str, str]]:
    """Run one discovery command for a page and return its CSV rows."""
    if args.command == "hubs":
        hubs = discover_hubs(
            url, methods=args.methods or HUB_METHODS, config=config, fetcher=fetcher, logger=logger
        )
        for hub in hubs:
            print(f"{hub.hub}\t{hub.topic}")
        return [hub_to_row(url, hub) for hub in hubs]

    progress = ProgressBar(desc=url) if config.show_progress else None
    discover_fn = feeds.discover_feeds if args.command == "feeds" else blogrolls.discover_blogrolls
    try:
        results = discover_fn(
            url,
            methods=build_methods(args, url),
            config=config,
            fetcher=fetcher,
            on_progress=progress,
            logger=logger,
        )
    finally:
        if progress is not None:
            progress.close()
    for result in results:
        print(f"{result.url}\t{result.format or ''}\t{result.title or ''}")
    return [result_to_row(url, result) for result in results]


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose, debug_libraries=args.debug_libraries)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
        validate_methods(args)
        urls = _materialize_urls(args)
    except (ConfigError, OSError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    fetcher = build_fetcher(config, logger)
    rows: list[dict[str, str]] = []
    exit_code = 0
    for url in urls:
        try:
            rows.extend(run_command(args, url, config=config, fetcher=fetcher, logger=logger))
        except ConfigError as exc:
            logger.error("Invalid configuration: %s", exc)
            return 2
        except FetchError as exc:
            logger.error("Could not fetch %s: %s", url, exc)
            exit_code = 1

    if args.output:
        write_rows(args.output, rows, HUB_FIELDS if args.command == "hubs" else RESULT_FIELDS)
        logger.info("Wrote %d rows to %s", len(rows), args.output)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
