"""HTML rendering for the leaderboard table and its hosting page."""

from ranktable.render.html_table import (
    build_table_body,
    build_table_head,
    decorate_rows,
    render_error,
    render_from_source,
    render_records,
)
from ranktable.render.page import PageError, export_page, page_shell, render_page

__all__ = [
    "PageError",
    "build_table_body",
    "build_table_head",
    "decorate_rows",
    "export_page",
    "page_shell",
    "render_error",
    "render_from_source",
    "render_page",
    "render_records",
]
