"""HTML table renderer.

Fills an existing ``<table>`` element in place: header row, one body row per
record, then a decoration pass for rank badges and highlighted cells. The
target table is always passed in explicitly.

Layout:
    <table id="leaderboard-table">
      <thead><tr><th>Rank</th><th>Team</th> ... <th>Link</th></tr></thead>
      <tbody>
        <tr><td><span class="tag is-info is-light">1</span></td> ... </tr>
      </tbody>
    </table>
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from bs4 import BeautifulSoup, Tag

from ranktable.services.leaderboard import (
    COLUMNS,
    FALLBACK_ACCESSORS,
    FALLBACK_COLUMNS,
    NUMERIC_COLUMNS,
    LinkSet,
    LoadError,
    Record,
    build_accessors,
    load_records,
    resolve_links,
    sort_records,
)
from ranktable.services.leaderboard.columns import (
    LINK_COLUMN,
    SCALED_COLUMNS,
    SCALED_TOOLTIP,
    Accessor,
    load_failed_row,
    no_data_row,
)
from ranktable.services.leaderboard.fields import DEFAULT_DIGITS, display_text, is_blank
from ranktable.services.leaderboard.loader import DEFAULT_TIMEOUT

_log = logging.getLogger(__name__)

GITHUB_BUTTON_CLASSES = ["button", "is-small", "is-rounded", "is-dark"]
HUGGINGFACE_BUTTON_CLASSES = ["button", "is-small", "is-rounded", "is-link", "is-light"]
RANK_BADGE_CLASSES = ["tag", "is-info", "is-light"]
HIGHLIGHT_BACKGROUND = "#f0f8ff"
OVERALL_COLOR = "#3273dc"

# Tag factory; tags built here are appended into whichever tree owns the table
_FACTORY = BeautifulSoup("", "html.parser")


def build_table_head(thead: Tag, columns: Sequence[str]) -> None:
    """Replace the contents of ``thead`` with a single header row."""
    tr = _new("tr")
    for column in columns:
        th = _new("th")
        th.string = column
        tr.append(th)
    thead.clear()
    thead.append(tr)


def build_table_body(
    tbody: Tag,
    records: Iterable[Mapping[str, Any]],
    columns: Sequence[str],
    accessors: Mapping[str, Accessor],
    link_resolver: Callable[[Mapping[str, Any]], LinkSet] = resolve_links,
) -> None:
    """Replace the contents of ``tbody`` with one row per record."""
    tbody.clear()
    for record in records:
        tr = _new("tr")
        for column in columns:
            td = _new("td")
            if column == LINK_COLUMN:
                _fill_link_cell(td, link_resolver(record))
            else:
                _fill_value_cell(td, column, accessors[column](record))
            tr.append(td)
        tbody.append(tr)


def decorate_rows(tbody: Tag, columns: Sequence[str]) -> None:
    """Number rows in sort order and apply the cosmetic highlights."""
    rank_idx = _index(columns, "Rank")
    team_idx = _index(columns, "Team")
    overall_idx = _index(columns, "Overall")
    scaled_idxs = [i for i in (_index(columns, c) for c in SCALED_COLUMNS) if i is not None]

    for rank, tr in enumerate(tbody.find_all("tr", recursive=False), start=1):
        cells = tr.find_all("td", recursive=False)

        if rank_idx is not None and rank_idx < len(cells):
            cell = cells[rank_idx]
            badge = _new("span", classes=RANK_BADGE_CLASSES)
            badge.string = str(rank)
            cell.clear()
            cell.append(badge)
            _set_style(cell, "text-align", "center")

        if team_idx is not None and team_idx < len(cells):
            _add_classes(cells[team_idx], "has-text-weight-bold")

        for idx in scaled_idxs:
            if idx < len(cells):
                _set_style(cells[idx], "background-color", HIGHLIGHT_BACKGROUND)
                cells[idx]["title"] = SCALED_TOOLTIP

        if overall_idx is not None and overall_idx < len(cells):
            cell = cells[overall_idx]
            _add_classes(cell, "has-text-weight-bold", "has-text-centered")
            _set_style(cell, "font-size", "1.1em")
            _set_style(cell, "color", OVERALL_COLOR)
            _set_style(cell, "background-color", HIGHLIGHT_BACKGROUND)


def render_records(
    table: Tag,
    records: Iterable[Record],
    *,
    digits: int | None = DEFAULT_DIGITS,
    compute_missing_overall: bool = False,
) -> int:
    """Render ``records`` sorted by Overall into ``table``.

    An empty record set renders the "No data" fallback table instead.

    Returns:
        Number of leaderboard rows rendered (0 for the fallback).
    """
    thead, tbody = table_sections(table)
    rows = sort_records(records, compute_missing=compute_missing_overall)
    if not rows:
        _render_fallback(thead, tbody, no_data_row())
        return 0

    accessors = build_accessors(digits, compute_missing_overall)
    build_table_head(thead, COLUMNS)
    build_table_body(tbody, rows, COLUMNS, accessors)
    decorate_rows(tbody, COLUMNS)
    return len(rows)


def render_error(table: Tag, message: str) -> None:
    """Render the single-row "Load failed" table."""
    thead, tbody = table_sections(table)
    _render_fallback(thead, tbody, load_failed_row(message))


def render_from_source(
    table: Tag,
    source: str,
    *,
    digits: int | None = DEFAULT_DIGITS,
    compute_missing_overall: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
) -> int:
    """Load ``source`` and render it into ``table``.

    Load failures are logged and rendered as the error table; they never
    propagate to the caller.
    """
    try:
        result = load_records(source, timeout=timeout)
    except LoadError as exc:
        _log.error("Failed to render leaderboard: %s", exc)
        render_error(table, str(exc))
        return 0
    return render_records(
        table,
        result.records,
        digits=digits,
        compute_missing_overall=compute_missing_overall,
    )


def table_sections(table: Tag) -> tuple[Tag, Tag]:
    """Return the table's (thead, tbody), creating whichever is missing."""
    thead = table.find("thead", recursive=False)
    tbody = table.find("tbody", recursive=False)
    if tbody is None:
        tbody = _new("tbody")
        table.append(tbody)
    if thead is None:
        thead = _new("thead")
        tbody.insert_before(thead)
    return thead, tbody


def _render_fallback(thead: Tag, tbody: Tag, row: Record) -> None:
    build_table_head(thead, FALLBACK_COLUMNS)
    build_table_body(tbody, [row], FALLBACK_COLUMNS, FALLBACK_ACCESSORS)


def _fill_link_cell(td: Tag, links: LinkSet) -> None:
    _set_style(td, "white-space", "nowrap")
    if links.github:
        td.append(_link(links.github, "GitHub", GITHUB_BUTTON_CLASSES))
    if links.github and links.huggingface:
        td.append(" ")
    if links.huggingface:
        td.append(_link(links.huggingface, "HuggingFace", HUGGINGFACE_BUTTON_CLASSES))
    if not links:
        td.string = display_text(None)


def _fill_value_cell(td: Tag, column: str, value: Any) -> None:
    if column in NUMERIC_COLUMNS and not is_blank(value):
        bold = _new("b")
        bold.string = str(value)
        td.append(bold)
        _set_style(td, "text-align", "center")
    else:
        td.string = display_text(value)


def _link(href: str, label: str, classes: list[str]) -> Tag:
    anchor = _new(
        "a",
        classes=classes,
        href=href,
        target="_blank",
        rel="noopener noreferrer",
    )
    anchor.string = label
    return anchor


def _new(name: str, classes: list[str] | None = None, **attrs: str) -> Tag:
    tag = _FACTORY.new_tag(name, attrs=attrs)
    if classes:
        tag["class"] = list(classes)
    return tag


def _add_classes(tag: Tag, *names: str) -> None:
    current = tag.get("class") or []
    if isinstance(current, str):
        current = current.split()
    tag["class"] = [*current, *(n for n in names if n not in current)]


def _set_style(tag: Tag, prop: str, value: str) -> None:
    styles: dict[str, str] = {}
    for declaration in str(tag.get("style", "")).split(";"):
        name, sep, current = declaration.partition(":")
        if sep and name.strip():
            styles[name.strip()] = current.strip()
    styles[prop] = value
    tag["style"] = "; ".join(f"{k}: {v}" for k, v in styles.items())


def _index(columns: Sequence[str], column: str) -> int | None:
    try:
        return columns.index(column)
    except ValueError:
        return None
