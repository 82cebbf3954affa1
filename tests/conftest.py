"""Shared test fixtures for ranktable tests."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from bs4 import BeautifulSoup, Tag

from ranktable.services.config import ViewSettings


@pytest.fixture
def sample_records() -> list[dict]:
    """Three records with mixed key spellings, deliberately out of order."""
    return [
        {"team": "Kestrel", "model_name": "qwen-72b", "ec": 47.3, "Overall": 10},
        {"Team": "Northwind", "Name": "llama-70b", "EC": "44.8", "Overall": None},
        {"team_name": "Aurora", "model": "gpt-4o", "EC": 51.166, "overall_score": "50"},
    ]


@pytest.fixture
def write_jsonl(tmp_path: Path) -> Callable[..., Path]:
    """Write records (dicts) or raw lines (str) to a JSONL file.

    Returns:
        Callable taking the lines and returning the file path.
    """

    def write(lines: list, name: str = "leaderboard.jsonl") -> Path:
        path = tmp_path / name
        text = "\n".join(
            line if isinstance(line, str) else json.dumps(line) for line in lines
        )
        path.write_text(text + "\n", encoding="utf-8")
        return path

    return write


@pytest.fixture
def table() -> Tag:
    """Empty leaderboard table inside a minimal page."""
    soup = BeautifulSoup(
        '<div><table id="leaderboard-table"><thead></thead><tbody></tbody></table></div>',
        "html.parser",
    )
    return soup.find("table")


@pytest.fixture
def settings_for(tmp_path: Path) -> Callable[[Path], ViewSettings]:
    """Build ViewSettings pointing at a data file, exporting into tmp_path."""

    def build(source: Path | str) -> ViewSettings:
        return ViewSettings(
            data_source=str(source),
            output_path=str(tmp_path / "out" / "leaderboard.html"),
        )

    return build
