"""Resolve the ``[user/]id`` head of a directive into a retrieval key."""

from __future__ import annotations

import re
from dataclasses import dataclass

from gistembed.errors import MissingIdError, MissingUsernameError

DELIMITERS = re.compile(r"[?#]")


@dataclass(frozen=True)
class GistReference:
    """Canonical key handed to the fetch collaborator."""

    username: str
    id: str
    file: str | None = None


def split_owner(raw: str) -> tuple[str | None, str]:
    """Split ``[user/]id`` off the front of a directive.

    A slash only separates an owner when something precedes it, so
    ``"/123"`` is an id with no owner. Anything after a second slash is
    dropped: ``"a/b/c"`` names gist ``b`` owned by ``a``.
    """
    head = DELIMITERS.split(raw, maxsplit=1)[0]
    if head.find("/") > 0:
        username, gist_id = head.split("/")[:2]
        return username, gist_id
    return None, head


def resolve_reference(
    raw: str, default_username: str | None, file: str | None = None
) -> GistReference:
    """Build the retrieval key for a directive.

    Args:
        raw: Directive text with the ``gist:`` marker stripped.
        default_username: Owner used when the directive names none.
        file: File within the gist, usually ``GistQuery.file``.

    Raises:
        MissingUsernameError: No owner after falling back to the default.
        MissingIdError: The id is blank.
    """
    inline_username, gist_id = split_owner(raw)
    username = inline_username or default_username

    if username is None or not username.strip():
        raise MissingUsernameError(raw)
    if not gist_id.strip():
        raise MissingIdError(raw)

    return GistReference(username=username, id=gist_id, file=file)
