"""Composite score and sort order for leaderboard records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ranktable.services.leaderboard.fields import Record, find_value, to_number

# Candidate keys per metric column, in lookup order
METRIC_KEYS: dict[str, tuple[str, ...]] = {
    "EC": ("EC", "ec"),
    "ED": ("ED", "ed"),
    "QA": ("QA", "qa"),
    "MC-4": ("MC-4", "MC4", "MC_4", "mc4", "mc-4"),
    "ES": ("ES", "es"),
    "EE": ("EE", "ee"),
}

OVERALL_KEYS: tuple[str, ...] = (
    "Overall",
    "overall",
    "Overall Score",
    "overall_score",
    "score",
    "Score",
)

# Every task carries the same weight, including tasks a record never reported.
METRIC_WEIGHT = 1 / len(METRIC_KEYS)


def metric_values(record: Mapping[str, Any]) -> dict[str, float | None]:
    """Resolve each metric to a number, or None when absent or non-numeric."""
    return {
        metric: to_number(find_value(record, keys))
        for metric, keys in METRIC_KEYS.items()
    }


def calc_weighted_score(record: Mapping[str, Any]) -> float:
    """Sum of the present metrics divided by six.

    Missing metrics count as zero rather than shrinking the denominator, so
    ``{"EC": 60, "ED": 30}`` scores 15.0, not 45.0.
    """
    score = 0.0
    for value in metric_values(record).values():
        if value is not None:
            score += value * METRIC_WEIGHT
    return score


def has_metrics(record: Mapping[str, Any]) -> bool:
    return any(v is not None for v in metric_values(record).values())


def overall_value(
    record: Mapping[str, Any], compute_missing: bool = False
) -> float | None:
    """Numeric Overall for ``record``.

    With ``compute_missing``, a record that supplies no numeric Overall but
    reports at least one metric falls back to :func:`calc_weighted_score`.
    """
    overall = to_number(find_value(record, OVERALL_KEYS))
    if overall is None and compute_missing and has_metrics(record):
        return calc_weighted_score(record)
    return overall


def overall_rank(
    record: Mapping[str, Any], compute_missing: bool = False
) -> tuple[bool, float]:
    """Sort key: records without an Overall go last, the rest descending."""
    value = overall_value(record, compute_missing)
    no_score = value is None
    descending = -(value or 0.0)
    return (no_score, descending)


def sort_records(
    records: Iterable[Record], compute_missing: bool = False
) -> list[Record]:
    return sorted(records, key=lambda r: overall_rank(r, compute_missing))
