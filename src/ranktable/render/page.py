"""Hosting page for the leaderboard table.

The page shell is a Jinja2 template holding an empty table element. The
table is then located by id and filled by :mod:`ranktable.render.html_table`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, select_autoescape

from ranktable.render.html_table import render_from_source
from ranktable.services.config import ViewSettings

_log = logging.getLogger(__name__)

BULMA_CSS = "https://cdn.jsdelivr.net/npm/bulma@0.9.4/css/bulma.min.css"

_PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{{ title }}</title>
    <link rel="stylesheet" href="{{ stylesheet }}">
  </head>
  <body>
    <section class="section">
      <div class="container is-max-widescreen">
        <h1 class="title is-3">{{ title }}</h1>
        <div class="table-container">
          <table id="{{ table_id }}" class="table is-bordered is-striped is-hoverable is-fullwidth">
            <thead></thead>
            <tbody></tbody>
          </table>
        </div>
      </div>
    </section>
  </body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default_for_string=True))


class PageError(Exception):
    """The hosting page has no element to render into."""


def page_shell(title: str, table_id: str, stylesheet: str = BULMA_CSS) -> str:
    """Return the empty hosting page."""
    template = _env.from_string(_PAGE_TEMPLATE)
    return template.render(title=title, table_id=table_id, stylesheet=stylesheet)


def render_page(settings: ViewSettings, shell: str | None = None) -> str:
    """Render the leaderboard into a page and return the HTML.

    Args:
        settings: Data source, table id, and formatting options.
        shell: Existing page markup to render into. Defaults to
            :func:`page_shell`.

    Raises:
        PageError: If the page holds no table with ``settings.table_id``.
    """
    markup = shell if shell is not None else page_shell(settings.page_title, settings.table_id)
    soup = BeautifulSoup(markup, "html.parser")

    table = soup.find(id=settings.table_id)
    if table is None or table.name != "table":
        raise PageError(f"No <table id={settings.table_id!r}> in page")

    render_from_source(
        table,
        settings.data_source,
        digits=settings.precision,
        compute_missing_overall=settings.compute_missing_overall,
        timeout=settings.timeout,
    )
    return str(soup)


def export_page(settings: ViewSettings, output_path: Path | None = None) -> Path:
    """Render the page and write it to disk.

    Returns:
        The path written.
    """
    path = Path(output_path or settings.output_path)
    html = render_page(settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    _log.info("Wrote leaderboard page to %s", path)
    return path
