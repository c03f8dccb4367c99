from pathlib import Path

from feedscout.errors import FetchError
from feedscout.io_csv import HUB_FIELDS, RESULT_FIELDS, hub_to_row, result_to_row, write_rows
from feedscout.models import DiscoverResult, HubResult


def test_write_rows_creates_csv_with_schema(tmp_path: Path) -> None:
    output = tmp_path / "out.csv"
    write_rows(
        str(output),
        [
            result_to_row(
                "https://example.com/",
                DiscoverResult(url="https://example.com/feed.xml", is_valid=True, format="rss"),
            ),
            result_to_row(
                "https://example.com/",
                DiscoverResult(
                    url="https://example.com/atom.xml", is_valid=False, error=FetchError("timeout")
                ),
            ),
        ],
    )
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(RESULT_FIELDS)
    assert lines[1] == "https://example.com/,https://example.com/feed.xml,yes,rss,,"
    assert lines[2].endswith(",no,,,timeout")


def test_write_rows_with_hub_schema(tmp_path: Path) -> None:
    output = tmp_path / "hubs.csv"
    hub = HubResult(hub="https://hub.example.com/", topic="https://example.com/feed")
    write_rows(str(output), [hub_to_row("https://example.com/", hub)], HUB_FIELDS)
    assert output.read_text(encoding="utf-8").splitlines() == [
        "page,hub,topic",
        "https://example.com/,https://hub.example.com/,https://example.com/feed",
    ]
