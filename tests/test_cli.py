from pathlib import Path

import pytest

from feedscout import cli
from feedscout.errors import FetchError
from feedscout.feeds import URIS_MINIMAL
from feedscout.models import DiscoverResult, HubResult


def test_parse_args_with_urls() -> None:
    args = cli.parse_args(["feeds", "https://example.com", "https://example.org"])
    assert args.command == "feeds"
    assert args.urls == ["https://example.com", "https://example.org"]


def test_parse_args_with_urls_file_only() -> None:
    args = cli.parse_args(["blogrolls", "--urls-file", "urls.txt"])
    assert args.urls_file == "urls.txt"


def test_parse_args_requires_urls() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["feeds"])


def test_namespace_to_config() -> None:
    args = cli.parse_args(
        ["feeds", "https://example.com", "--concurrency", "5", "--stop-on-first", "--no-progress"]
    )
    config = cli.namespace_to_config(args)
    assert config.concurrency == 5
    assert config.stop_on_first_result is True
    assert config.show_progress is False


def test_build_methods_maps_guess_flags() -> None:
    args = cli.parse_args(
        [
            "feeds",
            "https://blog.example.com/",
            "--methods",
            "html",
            "guess",
            "--guess-uris",
            "minimal",
            "--www",
            "--subdomains",
            "news",
        ]
    )
    methods = cli.build_methods(args, "https://blog.example.com/")
    assert methods["html"] is True
    assert methods["guess"] == {
        "uris": URIS_MINIMAL,
        "additional_base_urls": ["https://www.blog.example.com", "https://news.example.com"],
    }


def test_main_returns_zero_and_writes_csv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_discover_feeds(url: str, **_kwargs: object) -> list[DiscoverResult]:
        return [DiscoverResult(url=f"{url}feed.xml", is_valid=True, format="rss")]

    monkeypatch.setattr(cli.feeds, "discover_feeds", fake_discover_feeds)
    output = tmp_path / "out.csv"
    exit_code = cli.main(
        ["feeds", "https://example.com/", "--no-progress", "--output", str(output)]
    )
    assert exit_code == 0
    assert "https://example.com/feed.xml" in output.read_text(encoding="utf-8")


def test_main_runs_hubs_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_discover_hubs(url: str, **_kwargs: object) -> list[HubResult]:
        return [HubResult(hub="https://hub.example.com/", topic=url)]

    monkeypatch.setattr(cli, "discover_hubs", fake_discover_hubs)
    output = tmp_path / "hubs.csv"
    assert cli.main(["hubs", "https://example.com/", "--output", str(output)]) == 0
    assert output.read_text(encoding="utf-8").splitlines()[0] == "page,hub,topic"


def test_main_returns_two_on_invalid_config() -> None:
    assert cli.main(["feeds", "https://example.com", "--concurrency", "0"]) == 2


def test_main_returns_two_on_missing_urls_file(tmp_path: Path) -> None:
    assert cli.main(["feeds", "--urls-file", str(tmp_path / "missing.txt")]) == 2


def test_main_returns_two_on_unknown_method() -> None:
    assert cli.main(["feeds", "https://example.com", "--methods", "sitemap", "--no-progress"]) == 2


def test_main_returns_one_when_page_fetch_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_discover_feeds(url: str, **_kwargs: object) -> list[DiscoverResult]:
        raise FetchError(f"Failed to fetch {url}")

    monkeypatch.setattr(cli.feeds, "discover_feeds", failing_discover_feeds)
    assert cli.main(["feeds", "https://example.com/", "--no-progress"]) == 1


def test_progress_bar_is_created_lazily() -> None:
    bar = cli.ProgressBar(desc="test")
    bar.close()
    assert bar._bar is None


def test_parse_args_debug_libraries_flag() -> None:
    assert cli.parse_args(["feeds", "https://example.com"]).debug_libraries is False
    args = cli.parse_args(["feeds", "--verbose", "--debug-libraries", "https://example.com"])
    assert args.verbose and args.debug_libraries
