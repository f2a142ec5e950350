"""Logo registry: lazy catalog loading, name resolution, ranked search, paging.

The registry owns the in-memory index of ``Logo`` records. It is built from
the cache store on first access and memoized for the life of the object;
``refresh()`` is the only operation that discards it.

Resolution (``find_by_name``) and search (``search``) are kept
independent: resolution walks a fixed cascade and stops at the first hit in
load order, while search scores every record and returns all of them ranked.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import structlog

from logocn.models.registry import Logo, LogoMatch, PageResult
from logocn.slug import slugify

if TYPE_CHECKING:
    from logocn.cache import CacheStore
    from logocn.models.cache import CacheStats
    from logocn.models.catalog import CatalogRecord

log = structlog.get_logger()

# Search scores, highest applicable rule wins.
SCORE_EXACT_NAME = 100
SCORE_EXACT_SLUG = 95
SCORE_EXACT_ALIAS = 90
SCORE_NAME_PREFIX = 80
SCORE_SLUG_PREFIX = 75
SCORE_NAME_CONTAINS = 60
SCORE_SLUG_CONTAINS = 55
SCORE_ALIAS_CONTAINS = 40


def logo_from_record(record: CatalogRecord) -> Logo:
    """Convert an upstream catalog record into the canonical ``Logo``.

    Aliases are flattened from ``aka`` followed by the ``loc`` values. A
    record without any alias yields ``aliases=None``.
    """
    aliases: list[str] = []
    if record.aliases is not None:
        aliases.extend(record.aliases.aka or [])
        aliases.extend((record.aliases.loc or {}).values())

    return Logo(
        name=record.title,
        slug=record.slug or slugify(record.title),
        hex=record.hex,
        source=record.source,
        aliases=tuple(aliases) or None,
    )


def _normalize(query: str) -> str:
    return query.strip().lower()


def _lowered_aliases(logo: Logo) -> list[str]:
    return [alias.lower() for alias in logo.aliases or ()]


def score(logo: Logo, query: str) -> int:
    """Relevance of ``logo`` for an already normalized ``query`` (0 means no match)."""
    name = logo.name.lower()
    aliases = _lowered_aliases(logo)

    if name == query:
        return SCORE_EXACT_NAME
    if logo.slug == query:
        return SCORE_EXACT_SLUG
    if query in aliases:
        return SCORE_EXACT_ALIAS
    if name.startswith(query):
        return SCORE_NAME_PREFIX
    if logo.slug.startswith(query):
        return SCORE_SLUG_PREFIX
    if query in name:
        return SCORE_NAME_CONTAINS
    if query in logo.slug:
        return SCORE_SLUG_CONTAINS
    if any(query in alias for alias in aliases):
        return SCORE_ALIAS_CONTAINS
    return 0


# Resolution cascade for find_by_name, tried in order until one matches.
_RESOLUTION_STRATEGIES: tuple[tuple[str, Callable[[Logo, str], bool]], ...] = (
    ("exact_name", lambda logo, q: logo.name.lower() == q),
    ("exact_slug", lambda logo, q: logo.slug == q),
    ("exact_alias", lambda logo, q: q in _lowered_aliases(logo)),
    ("name_prefix", lambda logo, q: logo.name.lower().startswith(q)),
    ("slug_prefix", lambda logo, q: logo.slug.startswith(q)),
    ("name_contains", lambda logo, q: q in logo.name.lower()),
    ("slug_contains", lambda logo, q: q in logo.slug),
)


def resolve(logos: Sequence[Logo], query: str) -> Logo | None:
    """Return the first logo matched by the resolution cascade, or ``None``."""
    normalized = _normalize(query)
    if not normalized:
        return None
    for strategy, matches in _RESOLUTION_STRATEGIES:
        for logo in logos:
            if matches(logo, normalized):
                log.debug("logo_resolved", query=query, slug=logo.slug, matched_via=strategy)
                return logo
    return None


def rank(logos: Sequence[Logo], query: str) -> list[LogoMatch]:
    """Score every logo against ``query`` and return the matches, best first.

    ``sorted`` is stable, so logos with equal scores keep their catalog order.
    """
    normalized = _normalize(query)
    if not normalized:
        return []
    matches = [
        LogoMatch(logo=logo, score=s) for logo in logos if (s := score(logo, normalized)) > 0
    ]
    return sorted(matches, key=lambda m: m.score, reverse=True)


def paginate(logos: Sequence[Logo], page: int, page_size: int) -> PageResult:
    """Slice ``logos`` into pages, clamping ``page`` into the valid range."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    total_count = len(logos)
    total_pages = math.ceil(total_count / page_size)
    current_page = min(max(page, 1), max(total_pages, 1))
    start = (current_page - 1) * page_size
    return PageResult(
        records=list(logos[start : start + page_size]),
        total_pages=total_pages,
        current_page=current_page,
        total_count=total_count,
    )


class Registry:
    """Name resolution and search over the cached Simple Icons catalog."""

    def __init__(self, cache: CacheStore) -> None:
        self._cache = cache
        self._logos: list[Logo] | None = None

    @property
    def loaded(self) -> bool:
        return self._logos is not None

    async def ensure_loaded(self) -> list[Logo]:
        """Build the in-memory index on first call and return it."""
        if self._logos is None:
            document = await self._cache.load()
            self._logos = [logo_from_record(record) for record in document.icons]
            log.info("registry_loaded", logos=len(self._logos))
        return self._logos

    async def refresh(self) -> None:
        """Refetch the catalog and drop the in-memory index.

        The next lookup rebuilds the index from the new file. When the
        refetch fails the index is kept and the previous file stays valid.
        """
        await self._cache.refresh()
        self._logos = None

    async def find_by_name(self, query: str) -> Logo | None:
        return resolve(await self.ensure_loaded(), query)

    async def find_by_slug(self, slug: str) -> Logo | None:
        """Exact lookup on slug or alias, case-insensitive."""
        normalized = _normalize(slug)
        for logo in await self.ensure_loaded():
            if logo.slug == normalized or normalized in _lowered_aliases(logo):
                return logo
        return None

    async def search(self, query: str) -> list[Logo]:
        return [match.logo for match in await self.rank(query)]

    async def rank(self, query: str) -> list[LogoMatch]:
        return rank(await self.ensure_loaded(), query)

    async def get_all(self) -> list[Logo]:
        return list(await self.ensure_loaded())

    async def get_paginated(self, page: int, page_size: int) -> PageResult:
        return paginate(await self.ensure_loaded(), page, page_size)

    async def count(self) -> int:
        return len(await self.ensure_loaded())

    async def stats(self) -> CacheStats:
        return await self._cache.stats()
