"""On-disk Simple Icons catalog with a fixed time-to-live.

The catalog is a single JSON document (``{"icons": [...]}``) mirrored from
upstream. Freshness is judged purely by the file's modification time. A
refresh always downloads and replaces the whole document; the file is
written to a temporary sibling and moved into place, so a failed refresh
leaves the previous copy byte-for-byte intact.

File operations run through ``asyncio.to_thread`` and are awaited one at a
time. There is no locking: when two processes refresh concurrently the last
writer wins.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
import time
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from logocn.errors import CacheReadError, ErrorCode, FetchError, LogocnError, ParseError
from logocn.models.cache import CacheStats
from logocn.models.catalog import CatalogDocument
from logocn.slug import slugify

if TYPE_CHECKING:
    from logocn.fetcher import Fetcher

log = structlog.get_logger()

CACHE_TTL = timedelta(days=7)


def parse_catalog(payload: Any, source: str) -> CatalogDocument:
    """Validate a decoded JSON payload as a catalog document."""
    try:
        return CatalogDocument.model_validate(payload)
    except ValidationError as exc:
        raise ParseError(
            ErrorCode.CATALOG_INVALID,
            f"Catalog from {source} does not have the expected shape: "
            f"{exc.error_count()} validation error(s)",
        ) from exc


def parse_catalog_json(data: bytes, source: str) -> CatalogDocument:
    """Decode and validate raw catalog bytes.

    Undecodable bytes, malformed JSON and a wrong shape are all reported as
    ``ParseError``.
    """
    try:
        return CatalogDocument.model_validate_json(data)
    except ValidationError as exc:
        raise ParseError(
            ErrorCode.CATALOG_INVALID,
            f"Catalog from {source} is not a valid catalog document: "
            f"{exc.error_count()} validation error(s)",
        ) from exc


def fill_missing_slugs(document: CatalogDocument) -> CatalogDocument:
    """Return a copy of ``document`` where every icon carries a slug."""
    icons = [
        icon if icon.slug else icon.model_copy(update={"slug": slugify(icon.title)})
        for icon in document.icons
    ]
    return document.model_copy(update={"icons": icons})


def _mtime(path: Path) -> float:
    return path.stat().st_mtime


def _read_document(path: Path) -> CatalogDocument:
    return parse_catalog_json(path.read_bytes(), source=str(path))


def _atomic_write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


class CacheStore:
    """Owns the persisted catalog file and its refresh policy."""

    def __init__(self, fetcher: Fetcher, path: Path, catalog_url: str) -> None:
        self._fetcher = fetcher
        self._path = path
        self._catalog_url = catalog_url

    @property
    def path(self) -> Path:
        return self._path

    async def is_fresh(self) -> bool:
        """True when the file exists and was written less than ``CACHE_TTL`` ago."""
        try:
            mtime = await asyncio.to_thread(_mtime, self._path)
        except OSError:
            return False
        return time.time() - mtime < CACHE_TTL.total_seconds()

    async def refresh(self) -> CatalogDocument:
        """Download the full catalog and replace the persisted copy.

        Raises ``FetchError`` when upstream is unreachable or answers with a
        non-2xx status, and ``ParseError`` when the body is not a catalog.
        """
        log.info("catalog_refresh_started", url=self._catalog_url)
        payload = await self._fetcher.fetch_json(self._catalog_url)
        document = fill_missing_slugs(parse_catalog(payload, source=self._catalog_url))

        text = document.model_dump_json(exclude_unset=True, indent=2)
        try:
            await asyncio.to_thread(_atomic_write, self._path, text)
        except OSError as exc:
            raise LogocnError(
                ErrorCode.CACHE_WRITE_FAILED,
                f"Failed to write catalog cache {self._path}: {exc}",
            ) from exc

        log.info("catalog_cached", path=str(self._path), icons=len(document.icons))
        return document

    async def load(self, force_refresh: bool = False) -> CatalogDocument:
        """Return the persisted catalog, refreshing it first when stale or forced.

        A stale copy that is still readable is served when an automatic
        refresh fails. A forced refresh propagates its failure. When the
        file cannot be read it is refetched exactly once before giving up
        with ``CacheReadError``.
        """
        if force_refresh or not await self.is_fresh():
            try:
                await self.refresh()
            except (FetchError, ParseError):
                if force_refresh or not await asyncio.to_thread(self._path.exists):
                    raise
                log.warning("catalog_refresh_failed_using_stale", path=str(self._path))

        try:
            return await asyncio.to_thread(_read_document, self._path)
        except (OSError, ParseError):
            log.warning("cache_read_error", path=str(self._path), exc_info=True)

        await self.refresh()
        try:
            return await asyncio.to_thread(_read_document, self._path)
        except (OSError, ParseError) as exc:
            raise CacheReadError(
                ErrorCode.CACHE_READ_FAILED,
                f"Catalog cache {self._path} is unreadable after refetching it: {exc}",
            ) from exc

    async def stats(self) -> CacheStats:
        """Existence, age in whole hours and best-effort icon count."""
        try:
            mtime = await asyncio.to_thread(_mtime, self._path)
        except OSError:
            return CacheStats(exists=False)

        age_hours = max(0, int((time.time() - mtime) // 3600))
        try:
            document = await asyncio.to_thread(_read_document, self._path)
        except (OSError, ParseError):
            log.debug("cache_stats_count_unavailable", path=str(self._path))
            return CacheStats(exists=True, age_hours=age_hours)
        return CacheStats(exists=True, age_hours=age_hours, count=len(document.icons))

    async def clear(self) -> None:
        """Delete the persisted catalog. No-op when it does not exist."""
        await asyncio.to_thread(self._path.unlink, missing_ok=True)
        log.info("cache_cleared", path=str(self._path))
