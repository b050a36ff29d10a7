"""Numeric range expressions such as ``"1-3,5"``.

A descending pair (``"5-3"``) is swapped and expanded, so it contributes the
same lines as ``"3-5"``. Only positive integers are accepted, and a single
pair may span at most ``MAX_SPAN`` lines.
"""

from __future__ import annotations

import re

from gistembed.errors import InvalidRangeError

_SEGMENT = re.compile(r"([0-9]+)(?:\s*-\s*([0-9]+))?")

MAX_SPAN = 100_000


def expand_range(expression: str) -> frozenset[int]:
    """Expand a range expression into the set of line numbers it names.

    Args:
        expression: Comma-separated integers and ``lo-hi`` pairs.

    Returns:
        Every integer named by the expression, deduplicated.

    Raises:
        InvalidRangeError: If a segment is empty, non-numeric or zero, or a
            pair spans more than ``MAX_SPAN`` lines.
    """
    if not expression.strip():
        return frozenset()

    numbers: set[int] = set()
    for segment in expression.split(","):
        match = _SEGMENT.fullmatch(segment.strip())
        if match is None:
            raise InvalidRangeError(expression, segment)

        lo = int(match.group(1))
        hi = int(match.group(2)) if match.group(2) is not None else lo
        lo, hi = min(lo, hi), max(lo, hi)
        if lo < 1 or hi - lo >= MAX_SPAN:
            raise InvalidRangeError(expression, segment)

        numbers.update(range(lo, hi + 1))

    return frozenset(numbers)
