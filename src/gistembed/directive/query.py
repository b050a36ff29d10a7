"""Parse the text of a ``gist:`` directive into a ``GistQuery``.

Anything after ``#`` is a file name and anything after ``?`` is a query
string, giving four shapes:

- no delimiter: bare ``[user/]id``
- one segment: either ``#file`` or ``?key=value``
- two segments: ``#file?key=value``
- more than two: malformed
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import parse_qsl

from gistembed.directive.ranges import expand_range
from gistembed.directive.reference import DELIMITERS, split_owner
from gistembed.errors import InvalidQueryError, MalformedDirectiveError

logger = logging.getLogger(__name__)

QUERY_KEYS = frozenset(("file", "highlights", "lines", "truncate"))
_SELECTION_KEYS = ("file", "highlights", "lines")
_FALSE_VALUES = frozenset(("0", "false", "no", "off"))

LineSpec = str | Iterable[int] | None


def coerce_lines(value: LineSpec) -> frozenset[int]:
    """Normalise a highlights/lines value.

    Strings are range expressions, iterables are taken as-is, and ``None``
    means no lines.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return expand_range(value)
    return frozenset(int(line) for line in value)


@dataclass(frozen=True)
class GistQuery:
    """Everything a directive asks for.

    Attributes:
        id: Gist id as written; validated by ``resolve_reference``.
        username: Inline owner, or None to use the configured default.
        file: Raw file name within the gist.
        highlights: Lines to mark as highlighted.
        lines: Lines to keep; empty keeps every line.
        truncate: Whether this directive asked for shrunk output.
    """

    id: str
    username: str | None = None
    file: str | None = None
    highlights: frozenset[int] = field(default_factory=frozenset)
    lines: frozenset[int] = field(default_factory=frozenset)
    truncate: bool = False

    @classmethod
    def from_fields(
        cls,
        id: str,
        *,
        username: str | None = None,
        file: str | None = None,
        highlights: LineSpec = None,
        lines: LineSpec = None,
        truncate: bool = False,
    ) -> GistQuery:
        return cls(
            id=id,
            username=username,
            file=file,
            highlights=coerce_lines(highlights),
            lines=coerce_lines(lines),
            truncate=truncate,
        )


def _parse_query_string(query_string: str) -> dict[str, str]:
    """Parse ``key=value&...`` pairs, keeping only recognised keys.

    Repeated ``highlights``/``lines`` keys are joined into one range
    expression; for ``file`` the last value wins.
    """
    fields: dict[str, str] = {}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        if key not in QUERY_KEYS:
            logger.debug("Ignoring unknown gist query key %r", key)
            continue
        if key in ("highlights", "lines") and fields.get(key):
            fields[key] = f"{fields[key]},{value}" if value else fields[key]
        else:
            fields[key] = value
    return fields


def parse_directive(raw: str) -> GistQuery:
    """Parse directive text with the leading ``gist:`` already stripped.

    Args:
        raw: e.g. ``"user/abc123#main.py?highlights=1-3&lines=1-10"``.

    Returns:
        The parsed query with highlights and lines expanded.

    Raises:
        MalformedDirectiveError: More than two delimited segments, or a lone
            ``?`` segment with no ``=``.
        InvalidQueryError: None of file, highlights or lines was given.
        InvalidRangeError: A highlights/lines value is not a range.
    """
    _, *segments = DELIMITERS.split(raw)
    has_hash = "#" in raw

    if len(segments) > 2:
        raise MalformedDirectiveError(raw)

    fields: dict[str, str] = {}
    if len(segments) == 1:
        if has_hash:
            fields["file"] = segments[0]
        elif "=" in segments[0]:
            fields = _parse_query_string(segments[0])
        else:
            raise MalformedDirectiveError(raw)
    elif len(segments) == 2:
        fields = {"file": segments[0], **_parse_query_string(segments[1])}

    if not any(key in fields for key in _SELECTION_KEYS):
        raise InvalidQueryError(raw)

    username, gist_id = split_owner(raw)
    truncate = fields.get("truncate")
    return GistQuery.from_fields(
        gist_id,
        username=username,
        file=fields.get("file"),
        highlights=fields.get("highlights"),
        lines=fields.get("lines"),
        truncate=truncate is not None and truncate.lower() not in _FALSE_VALUES,
    )
