"""Shared pytest fixtures for gistembed tests."""

from __future__ import annotations

import pytest

from gistembed.config import GistConfig


def gist_table(file_slug: str, rows: int) -> str:
    """Build gist-style table markup with one row per source line."""
    body = "".join(
        f'<tr><td id="file-{file_slug}-L{n}" class="blob-num js-line-number" '
        f'data-line-number="{n}"></td>'
        f'<td id="file-{file_slug}-LC{n}" class="blob-code blob-code-inner '
        f'js-file-line">line {n}</td></tr>'
        for n in range(1, rows + 1)
    )
    table = f'<table class="highlight"><tbody>{body}</tbody></table>'
    return f'<div class="gist">{table}</div>'


@pytest.fixture
def example_sh_table() -> str:
    """Three-line gist table for ``example.sh``."""
    return gist_table("example-sh", 3)


@pytest.fixture
def gist_config() -> GistConfig:
    """Config with a default owner and no token."""
    return GistConfig(username="octocat")
