"""Per-icon SVG downloads from the Simple Icons CDN."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from logocn.errors import ErrorCode, InvalidSlugError, ParseError

if TYPE_CHECKING:
    from logocn.fetcher import Fetcher

log = structlog.get_logger()

_SLUG_RE = re.compile(r"^[a-z0-9-]+$")


def is_valid_slug(slug: str) -> bool:
    """Slugs are lowercase alphanumerics, optionally with hyphens."""
    return bool(_SLUG_RE.match(slug))


def is_svg(content: str) -> bool:
    return "<svg" in content and "</svg>" in content


class IconService:
    def __init__(self, fetcher: Fetcher, base_url: str) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def icon_url(self, slug: str) -> str:
        return f"{self._base_url}/{slug}.svg"

    async def download_svg(self, slug: str) -> str:
        """Fetch the raw SVG markup for ``slug``.

        Raises ``FetchError`` (``ICON_NOT_FOUND`` on 404, ``ICON_FETCH_FAILED``
        otherwise), ``ParseError`` when the body is not SVG markup and
        ``InvalidSlugError`` before any request when ``slug`` is malformed.
        """
        if not is_valid_slug(slug):
            raise InvalidSlugError(ErrorCode.INVALID_SLUG, f"Invalid icon slug: {slug!r}")
        url = self.icon_url(slug)
        content = await self._fetcher.fetch_text(
            url,
            failure_code=ErrorCode.ICON_FETCH_FAILED,
            not_found_code=ErrorCode.ICON_NOT_FOUND,
        )
        if not is_svg(content):
            raise ParseError(ErrorCode.INVALID_SVG, f"Invalid SVG content received for {slug}")
        log.debug("icon_downloaded", slug=slug, bytes=len(content))
        return content
