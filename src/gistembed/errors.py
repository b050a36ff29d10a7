"""Exception taxonomy for gist directive processing.

Every error here is scoped to a single directive occurrence. The document
orchestrator catches ``GistEmbedError`` per occurrence so one bad directive
never stops the rest of the document from rendering.
"""

from __future__ import annotations


class GistEmbedError(Exception):
    """Base class for all directive processing errors."""


class MalformedDirectiveError(GistEmbedError):
    """The ``?``/``#`` delimiter structure of a directive is ambiguous."""

    def __init__(self, directive: str) -> None:
        self.directive = directive
        super().__init__(f"Malformed query in 'gist:{directive}'")


class InvalidQueryError(GistEmbedError):
    """A directive carries no usable ``file``, ``highlights`` or ``lines``."""

    def __init__(self, directive: str) -> None:
        self.directive = directive
        super().__init__(
            f"No file, highlights or lines given in 'gist:{directive}'"
        )


class MissingUsernameError(GistEmbedError):
    """No gist owner in the directive and no default username configured."""

    def __init__(self, directive: str) -> None:
        self.directive = directive
        super().__init__(f"Missing username information for 'gist:{directive}'")


class MissingIdError(GistEmbedError):
    """The directive has a blank gist id."""

    def __init__(self, directive: str) -> None:
        self.directive = directive
        super().__init__(f"Missing gist id information for 'gist:{directive}'")


class InvalidRangeError(GistEmbedError):
    """A range expression segment is not an integer or integer pair."""

    def __init__(self, expression: str, segment: str) -> None:
        self.expression = expression
        self.segment = segment
        super().__init__(f"Invalid range segment {segment!r} in {expression!r}")
