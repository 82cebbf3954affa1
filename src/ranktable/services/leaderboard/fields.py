"""Field resolution and value formatting for schema-less leaderboard records.

Records come from hand-maintained JSONL files, so the same metric may be
spelled ``EC``, ``ec`` or ``Ec`` depending on who submitted it. Every lookup
goes through :func:`find_value` with an ordered list of candidate keys.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

PLACEHOLDER = "-"
DEFAULT_DIGITS = 2

Record = dict[str, Any]


def find_value(record: Mapping[str, Any], candidates: Sequence[str]) -> Any:
    """Return the value of the first candidate key present in ``record``.

    Each candidate is tried as an exact key, then case-insensitively against
    every key in the record, before moving on to the next candidate.

    Examples:
        find_value({"ec": 5}, ["EC", "ec"]) -> 5
        find_value({"Ec": 5}, ["EC", "ec"]) -> 5
        find_value({}, ["EC"])              -> None
    """
    for candidate in candidates:
        if candidate in record:
            return record[candidate]
        wanted = candidate.lower()
        for key in record:
            if isinstance(key, str) and key.lower() == wanted:
                return record[key]
    return None


def to_number(value: Any) -> float | None:
    """Coerce ``value`` to a finite float, or None when it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        return None
    return number if math.isfinite(number) else None


def format_number(value: Any, digits: int | None = DEFAULT_DIGITS) -> Any:
    """Format a numeric value to fixed precision.

    Non-numeric values pass through unchanged; absent or empty values become
    the placeholder.
    """
    if value is None or value == "":
        return PLACEHOLDER
    number = to_number(value)
    if number is None:
        return value
    if digits is None:
        return _plain_number(number)
    return _fixed(number, digits)


def is_blank(value: Any) -> bool:
    """True for values that render as the placeholder."""
    return value is None or value == "" or value == PLACEHOLDER


def display_text(value: Any) -> str:
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


def _fixed(number: float, digits: int) -> str:
    # Ties round away from zero on the exact binary value: 0.125 -> "0.13",
    # 1.005 (stored as 1.00499...) -> "1.00".
    try:
        rounded = Decimal(number).quantize(Decimal(1).scaleb(-digits), ROUND_HALF_UP)
    except InvalidOperation:
        return f"{number:.{digits}f}"
    return f"{rounded:f}"


def _plain_number(number: float) -> str:
    if number.is_integer():
        return str(int(number))
    return repr(number)
