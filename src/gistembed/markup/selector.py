"""Highlight and filter the rendered source lines of a gist.

Gist markup is a table with one ``<tr>`` per source line. The code cell of
line ``n`` carries the id ``file-<name>-LC<n>`` (``LC<n>`` once shrunk), so
rows are addressed through that cell and removed via its parent.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag

if TYPE_CHECKING:
    from gistembed.directive.query import GistQuery

HIGHLIGHT_CLASS = "highlighted"

_NON_WORD_RUN = re.compile(r"[^a-zA-Z0-9_]+")


def sanitise_file_name(file: str) -> str:
    """Turn a gist file name into the fragment GitHub uses in element ids.

    >>> sanitise_file_name(".Example File.sh")
    'example-file-sh'
    """
    file = file.removeprefix(".")
    return _NON_WORD_RUN.sub("-", file).lower()


def selector_prefix(file: str | None, truncate: bool) -> str:
    """Id selector prefix for the code cells of a gist."""
    if truncate:
        return "#LC"
    return f"#file-{sanitise_file_name(file or '')}-LC"


def _add_class(tag: Tag, class_name: str) -> None:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if class_name not in classes:
        tag["class"] = [*classes, class_name]


def select_lines(html: str, query: GistQuery, prefix: str) -> str:
    """Mark highlighted lines and drop rows outside ``query.lines``.

    Args:
        html: Gist markup.
        query: Parsed directive; empty ``lines`` keeps every row.
        prefix: Id selector prefix from ``selector_prefix``.

    Returns:
        The rewritten markup, or ``html`` unchanged when the query neither
        highlights nor selects lines.
    """
    if not query.highlights and not query.lines:
        return html

    soup = BeautifulSoup(html, "html.parser")
    id_prefix = prefix.removeprefix("#")

    # Missing targets are skipped
    for line in sorted(query.highlights):
        cell = soup.find(id=f"{id_prefix}{line}")
        if isinstance(cell, Tag):
            _add_class(cell, HIGHLIGHT_CLASS)

    if query.lines:
        row_count = len(soup.find_all("tr"))
        for line in range(1, row_count + 1):
            if line in query.lines:
                continue
            cell = soup.find(id=f"{id_prefix}{line}")
            if not isinstance(cell, Tag):
                continue
            row = cell.parent
            if row is not None and row is not soup:
                row.decompose()

    return str(soup)
