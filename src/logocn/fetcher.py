"""HTTP fetching for the upstream catalog and per-icon SVG assets.

Transport failures and non-2xx responses are raised as ``FetchError``;
bodies that are not valid JSON are raised as ``ParseError``. Nothing is
retried here. The cache store decides what a failed fetch means.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from logocn.errors import ErrorCode, FetchError, ParseError

if TYPE_CHECKING:
    from logocn.config import HttpSettings

log = structlog.get_logger()


def build_http_client(settings: HttpSettings | None = None) -> httpx.AsyncClient:
    """Create the shared async HTTP client used for all upstream requests."""
    from logocn.config import HttpSettings

    settings = settings or HttpSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


class Fetcher:
    """Thin wrapper over ``httpx.AsyncClient`` with logocn error semantics."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_text(
        self,
        url: str,
        *,
        failure_code: ErrorCode = ErrorCode.CATALOG_FETCH_FAILED,
        not_found_code: ErrorCode | None = None,
    ) -> str:
        """GET ``url`` and return the decoded body.

        ``not_found_code`` lets callers report a 404 distinctly; any other
        non-2xx status uses ``failure_code``.
        """
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            log.warning("fetch_transport_error", url=url, error=str(exc))
            raise FetchError(
                failure_code,
                f"Failed to fetch {url}: {exc}",
                recoverable=True,
            ) from exc

        if response.status_code == 404 and not_found_code is not None:
            raise FetchError(not_found_code, f"Not found: {url}", recoverable=False)

        if not response.is_success:
            log.warning("fetch_bad_status", url=url, status_code=response.status_code)
            raise FetchError(
                failure_code,
                f"Failed to fetch {url}: HTTP {response.status_code} {response.reason_phrase}",
                recoverable=True,
            )

        return response.text

    async def fetch_json(self, url: str) -> Any:
        """GET ``url`` and decode the body as JSON."""
        text = await self.fetch_text(url)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(
                ErrorCode.CATALOG_INVALID,
                f"Response from {url} is not valid JSON: {exc.msg}",
            ) from exc
