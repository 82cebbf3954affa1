"""Fixed leaderboard columns and the accessors that fill them."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ranktable.services.leaderboard.fields import (
    DEFAULT_DIGITS,
    PLACEHOLDER,
    Record,
    find_value,
    format_number,
    to_number,
)
from ranktable.services.leaderboard.scoring import (
    METRIC_KEYS,
    OVERALL_KEYS,
    calc_weighted_score,
    has_metrics,
)

Accessor = Callable[[Mapping[str, Any]], Any]

COLUMNS: tuple[str, ...] = (
    "Rank",
    "Team",
    "Model",
    "EC",
    "ED",
    "QA",
    "MC-4",
    "ES",
    "EE",
    "Overall",
    "Submission Time",
    "Link",
)

NUMERIC_COLUMNS = frozenset({*METRIC_KEYS, "Overall"})

# Columns holding native 5-point scores, shown scaled x20
SCALED_COLUMNS: tuple[str, ...] = ("MC-4", "ES")
SCALED_TOOLTIP = "Original 5-point score (×20 in calculation)"

LINK_COLUMN = "Link"

TEAM_KEYS = ("team", "team_name", "Team", "TeamName")
MODEL_KEYS = ("model", "model_name", "name", "Model", "Name")
SUBMISSION_TIME_KEYS = (
    "submission_time",
    "SubmissionTime",
    "date",
    "Date",
    "updated",
    "update_date",
    "updated_at",
)
GITHUB_KEYS = ("github", "GitHub", "code", "repo")
HUGGINGFACE_KEYS = ("huggingface", "HuggingFace", "hf", "dataset")

FALLBACK_COLUMNS: tuple[str, ...] = ("Model", "Info")

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True, slots=True)
class LinkSet:
    """Action links for one row."""

    github: str | None = None
    huggingface: str | None = None

    def __bool__(self) -> bool:
        return bool(self.github or self.huggingface)


def normalize_url(url: Any) -> str | None:
    """Prefix bare domains with ``https://``; empty values give None.

    Examples:
        "github.com/x/y"          -> "https://github.com/x/y"
        "HTTP://hf.co/datasets/z" -> "HTTP://hf.co/datasets/z"
    """
    if url is None:
        return None
    text = str(url).strip()
    if not text:
        return None
    if _SCHEME.match(text):
        return text
    return "https://" + text


def resolve_links(record: Mapping[str, Any]) -> LinkSet:
    return LinkSet(
        github=normalize_url(find_value(record, GITHUB_KEYS)),
        huggingface=normalize_url(find_value(record, HUGGINGFACE_KEYS)),
    )


def format_submission_time(raw: Any) -> str:
    """Render a timestamp as local ``YYYY-MM-DD HH:MM``.

    Accepts ISO-8601 strings and epoch milliseconds. Anything unparseable is
    returned as text.
    """
    if not raw:
        return PLACEHOLDER
    parsed = _parse_timestamp(raw)
    if parsed is None:
        return str(raw)
    return parsed.strftime("%Y-%m-%d %H:%M")


def _parse_timestamp(raw: Any) -> datetime | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if _DATE_ONLY.match(text):
        # Date-only values are UTC midnight, shown in local time
        parsed = parsed.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed


def build_accessors(
    digits: int | None = DEFAULT_DIGITS,
    compute_missing_overall: bool = False,
) -> dict[str, Accessor]:
    """Map each column in :data:`COLUMNS` to its accessor.

    Rank is filled after sorting and Link is resolved by :func:`resolve_links`,
    so both accessors return placeholders of their own.
    """

    def metric(keys: tuple[str, ...]) -> Accessor:
        return lambda r: format_number(find_value(r, keys), digits)

    def overall(r: Mapping[str, Any]) -> Any:
        value = find_value(r, OVERALL_KEYS)
        if to_number(value) is None and compute_missing_overall and has_metrics(r):
            value = calc_weighted_score(r)
        return format_number(value, digits)

    accessors: dict[str, Accessor] = {
        "Rank": lambda r: "",
        "Team": lambda r: find_value(r, TEAM_KEYS),
        "Model": lambda r: find_value(r, MODEL_KEYS),
    }
    for column, keys in METRIC_KEYS.items():
        accessors[column] = metric(keys)
    accessors["Overall"] = overall
    accessors["Submission Time"] = lambda r: format_submission_time(
        find_value(r, SUBMISSION_TIME_KEYS)
    )
    accessors[LINK_COLUMN] = lambda r: None
    return accessors


ACCESSORS = build_accessors()

FALLBACK_ACCESSORS: dict[str, Accessor] = {
    "Model": lambda r: r.get("Model"),
    "Info": lambda r: r.get("Info"),
}


def no_data_row() -> Record:
    return {"Model": "No data", "Info": PLACEHOLDER}


def load_failed_row(message: str) -> Record:
    return {"Model": "Load failed", "Info": message}
