"""JSONL parsing into leaderboard records."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

from ranktable.services.leaderboard.fields import Record

_log = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")
_BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class SkippedLine:
    """A JSONL line that could not be turned into a record."""

    line_number: int
    text: str
    error: str


@dataclass
class ParseResult:
    """Records parsed from a JSONL document, plus the lines that were skipped."""

    records: list[Record] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __len__(self) -> int:
        return len(self.records)


def parse_jsonl(text: str) -> ParseResult:
    """Parse newline-delimited JSON, one object per non-blank line.

    Lines that fail to decode, or decode to something other than a JSON
    object, are logged and skipped without aborting the batch.
    """
    result = ParseResult()
    lines = _LINE_SPLIT.split(text.removeprefix(_BOM))

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            value = json.loads(line)
        except json.JSONDecodeError as exc:
            _skip(result, line_number, line, str(exc))
            continue
        if not isinstance(value, dict):
            _skip(result, line_number, line, f"expected object, got {type(value).__name__}")
            continue
        result.records.append(value)

    return result


def _skip(result: ParseResult, line_number: int, line: str, error: str) -> None:
    _log.warning("Invalid JSONL line skipped (line %d): %s", line_number, line)
    result.skipped.append(SkippedLine(line_number=line_number, text=line, error=error))
