"""Retrieve rendered gist markup from GitHub.

Retrieval failures are never raised to the caller: they are logged and
reported as ``None`` so the occurrence renders as empty content.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

if TYPE_CHECKING:
    from gistembed.config import GistConfig
    from gistembed.directive.reference import GistReference

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.github+json"


def build_gist_url(reference: GistReference, base_url: str) -> str:
    """Build the JSON endpoint URL for a gist, optionally for one file."""
    owner = quote(reference.username, safe="")
    gist_id = quote(reference.id, safe="")
    url = f"{base_url.rstrip('/')}/{owner}/{gist_id}.json"
    if reference.file is not None:
        url += f"?file={quote(reference.file)}"
    return url


class GistFetcher:
    """Fetch gist JSON over a shared ``httpx.AsyncClient``.

    Use as an async context manager, or pass an existing client (tests hand
    in one built on ``httpx.MockTransport``).
    """

    def __init__(
        self, config: GistConfig, client: httpx.AsyncClient | None = None
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self) -> GistFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": ACCEPT_HEADER}
        token = self._config.secret_token.get_secret_value()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def fetch(self, reference: GistReference) -> dict[str, Any] | None:
        """Fetch the gist JSON document, or None if retrieval failed."""
        url = build_gist_url(reference, self._config.base_url)
        try:
            response = await self._client.get(url, headers=self._headers())
            response.raise_for_status()
            content = response.json()
        except (httpx.HTTPError, httpx.InvalidURL):
            logger.exception("Failed to load GitHub Gist: %s", url)
            return None
        except ValueError:
            logger.warning("GitHub Gist response is not JSON: %s", url)
            return None

        if not isinstance(content, dict):
            logger.warning("Unexpected GitHub Gist payload from %s", url)
            return None
        return content

    async def fetch_markup(self, reference: GistReference) -> str:
        """Fetch the rendered ``div`` markup; empty when unavailable."""
        content = await self.fetch(reference)
        if content is None:
            return ""
        div = content.get("div")
        return div if isinstance(div, str) else ""
