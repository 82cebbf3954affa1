"""Leaderboard loader: fetch a JSONL resource and parse it into records.

Sources:
    "https://example.org/leaderboard.jsonl"          fetched with httpx
    "hf://datasets/owner/name/data/leaderboard.jsonl" downloaded from the Hub
    "static/data/leaderboard.jsonl"                  read from disk
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
from huggingface_hub import hf_hub_download
from huggingface_hub.errors import HfHubHTTPError

from ranktable.services.leaderboard.records import ParseResult, parse_jsonl

_log = logging.getLogger(__name__)

DEFAULT_SOURCE = "static/data/leaderboard.jsonl"
DEFAULT_TIMEOUT = 30.0
HF_DATASET_PREFIX = "hf://datasets/"
BOM = "\ufeff"


class LoadError(Exception):
    """The data resource could not be retrieved."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def split_hf_source(source: str) -> tuple[str, str]:
    """Split an ``hf://datasets/...`` source into (repo_id, filename).

    Examples:
        "hf://datasets/acme/board/data/lb.jsonl" -> ("acme/board", "data/lb.jsonl")
    """
    parts = source[len(HF_DATASET_PREFIX):].split("/", 2)
    if len(parts) < 3 or not all(parts):
        raise LoadError(f"Invalid Hub source: {source}")
    owner, name, filename = parts
    return (f"{owner}/{name}", filename)


def fetch_text(source: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Retrieve the raw text of ``source``. Nothing is cached.

    Raises:
        LoadError: On a non-success response or any transport failure.
    """
    if is_url(source):
        return _fetch_url(source, timeout)
    if source.startswith(HF_DATASET_PREFIX):
        return _fetch_hub(source)
    return _read_file(Path(source))


def load_records(source: str, timeout: float = DEFAULT_TIMEOUT) -> ParseResult:
    """Fetch ``source`` and parse it as JSONL."""
    result = parse_jsonl(fetch_text(source, timeout=timeout))
    _log.info(
        "Loaded %d records from %s (%d skipped)",
        len(result.records),
        source,
        result.skipped_count,
    )
    return result


def _fetch_url(url: str, timeout: float) -> str:
    try:
        response = httpx.get(
            url,
            headers={"Cache-Control": "no-store"},
            timeout=timeout,
            follow_redirects=True,
        )
    except httpx.HTTPError as exc:
        raise LoadError(str(exc) or type(exc).__name__) from exc
    if not response.is_success:
        raise LoadError(f"HTTP {response.status_code}", status_code=response.status_code)
    return response.text.removeprefix(BOM)


def _fetch_hub(source: str) -> str:
    repo_id, filename = split_hf_source(source)
    try:
        path = hf_hub_download(
            repo_id=repo_id,
            filename=filename,
            repo_type="dataset",
            force_download=True,
        )
    except HfHubHTTPError as exc:
        status = exc.response.status_code if exc.response is not None else 0
        raise LoadError(str(exc), status_code=status) from exc
    except (OSError, ValueError) as exc:
        raise LoadError(str(exc)) from exc
    return _read_file(Path(path))


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, ValueError) as exc:
        raise LoadError(str(exc)) from exc
