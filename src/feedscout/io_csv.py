"""CSV serialization helpers."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path

from .models import DiscoverResult, HubResult

RESULT_FIELDS = ["page", "url", "is_valid", "format", "title", "error"]

HUB_FIELDS = ["page", "hub", "topic"]


def result_to_row(page: str, result: DiscoverResult) -> dict[str, str]:
    """Flatten a discovery result into a CSV row."""
    return {
        "page": page,
        "url": result.url,
        "is_valid": "yes" if result.is_valid else "no",
        "format": result.format or "",
        "title": result.title or "",
        "error": str(result.error) if result.error is not None else "",
    }


def hub_to_row(page: str, hub: HubResult) -> dict[str, str]:
    return {"page": page, **asdict(hub)}


def write_rows(
    path: str, rows: Iterable[dict[str, str]], fields: list[str] = RESULT_FIELDS
) -> None:
    """Write result rows to CSV with stable schema."""
    output_path = Path(path)
    with output_path.open("w", newline="", encoding="utf-8") as file_obj:
        writer = csv.DictWriter(file_obj, fieldnames=fields)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
