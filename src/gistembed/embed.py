"""Replace ``gist:`` inline code in Markdown with rendered gist HTML.

Each directive occurrence runs its own parse, resolve, fetch, select and
shrink pipeline. Occurrences are rendered concurrently and share nothing,
so a failure in one leaves its directive text in place and the rest of the
document is still rendered.
"""

# Pattern: Functional Core, Imperative Shell (fetch is the only I/O)

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from gistembed.directive.query import parse_directive
from gistembed.directive.reference import resolve_reference
from gistembed.errors import GistEmbedError
from gistembed.markup.selector import select_lines, selector_prefix
from gistembed.markup.shrinker import shrink_markup

if TYPE_CHECKING:
    from gistembed.config import GistConfig
    from gistembed.directive.reference import GistReference

logger = logging.getLogger(__name__)

DIRECTIVE_MARKER = "gist:"

_INLINE_DIRECTIVE = re.compile(r"(?<!`)`gist:(?P<raw>[^`\n]+)`(?!`)")

_FENCED_BLOCK = re.compile(
    r"^[ \t]*(?P<fence>`{3,}|~{3,})[^\n]*\n.*?^[ \t]*(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


class MarkupFetcher(Protocol):
    """Anything that turns a gist reference into markup ("" on failure)."""

    async def fetch_markup(self, reference: GistReference) -> str: ...


@dataclass(frozen=True)
class DirectiveOccurrence:
    """A ``gist:`` inline code span and its position in the document."""

    start: int
    end: int
    raw: str


def find_directives(markdown: str) -> list[DirectiveOccurrence]:
    """Locate ``gist:`` inline code spans outside fenced code blocks."""
    fenced = [match.span() for match in _FENCED_BLOCK.finditer(markdown)]

    occurrences = []
    for match in _INLINE_DIRECTIVE.finditer(markdown):
        if any(start <= match.start() < end for start, end in fenced):
            continue
        occurrences.append(
            DirectiveOccurrence(
                start=match.start(),
                end=match.end(),
                raw=match.group("raw").strip(),
            )
        )
    return occurrences


async def render_directive(
    raw: str, config: GistConfig, fetcher: MarkupFetcher
) -> str:
    """Render one directive to HTML.

    Args:
        raw: Directive text without the ``gist:`` marker.
        config: Default username and truncation setting.
        fetcher: Retrieval collaborator.

    Returns:
        The processed markup, or "" when nothing could be retrieved.

    Raises:
        GistEmbedError: The directive could not be parsed or resolved.
    """
    query = parse_directive(raw)
    reference = resolve_reference(raw, config.username, query.file)

    html = await fetcher.fetch_markup(reference)
    if not html:
        return ""

    truncate = query.truncate or config.truncate
    # Shrink first so the "#LC" prefix matches the shrunk ids
    if truncate:
        html = shrink_markup(html, attribution=False)

    html = select_lines(html, query, selector_prefix(query.file, truncate))

    if truncate:
        html = shrink_markup(html)
    return html.strip()


async def _render_occurrence(
    occurrence: DirectiveOccurrence, config: GistConfig, fetcher: MarkupFetcher
) -> str | None:
    try:
        return await render_directive(occurrence.raw, config, fetcher)
    except GistEmbedError as exc:
        logger.warning(
            "Skipping gist directive at offset %d: %s", occurrence.start, exc
        )
        return None


async def embed_gists(
    markdown: str, config: GistConfig, fetcher: MarkupFetcher
) -> str:
    """Replace every renderable ``gist:`` directive in a Markdown document.

    Directives that fail to parse or resolve are left as written.
    """
    occurrences = find_directives(markdown)
    if not occurrences:
        return markdown

    logger.debug("Rendering %d gist directive(s)", len(occurrences))
    rendered = await asyncio.gather(
        *(_render_occurrence(o, config, fetcher) for o in occurrences)
    )

    pieces = []
    cursor = 0
    for occurrence, html in zip(occurrences, rendered, strict=True):
        pieces.append(markdown[cursor : occurrence.start])
        if html is None:
            pieces.append(markdown[occurrence.start : occurrence.end])
        else:
            pieces.append(html)
        cursor = occurrence.end
    pieces.append(markdown[cursor:])
    return "".join(pieces)
