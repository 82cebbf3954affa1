"""Leaderboard services: load, resolve, score, and describe table rows."""

from ranktable.services.leaderboard.columns import (
    ACCESSORS,
    COLUMNS,
    FALLBACK_ACCESSORS,
    FALLBACK_COLUMNS,
    NUMERIC_COLUMNS,
    LinkSet,
    build_accessors,
    resolve_links,
)
from ranktable.services.leaderboard.fields import (
    PLACEHOLDER,
    Record,
    find_value,
    format_number,
    to_number,
)
from ranktable.services.leaderboard.loader import LoadError, fetch_text, load_records
from ranktable.services.leaderboard.records import ParseResult, SkippedLine, parse_jsonl
from ranktable.services.leaderboard.scoring import (
    calc_weighted_score,
    overall_rank,
    overall_value,
    sort_records,
)

__all__ = [
    "ACCESSORS",
    "COLUMNS",
    "FALLBACK_ACCESSORS",
    "FALLBACK_COLUMNS",
    "NUMERIC_COLUMNS",
    "PLACEHOLDER",
    "LinkSet",
    "LoadError",
    "ParseResult",
    "Record",
    "SkippedLine",
    "build_accessors",
    "calc_weighted_score",
    "fetch_text",
    "find_value",
    "format_number",
    "load_records",
    "overall_rank",
    "overall_value",
    "parse_jsonl",
    "resolve_links",
    "sort_records",
    "to_number",
]
