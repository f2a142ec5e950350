from __future__ import annotations

from logocn.models.cache import CacheStats
from logocn.models.catalog import CatalogAliases, CatalogDocument, CatalogRecord
from logocn.models.registry import Logo, LogoMatch, PageResult

__all__ = [
    # catalog
    "CatalogAliases",
    "CatalogDocument",
    "CatalogRecord",
    # registry
    "Logo",
    "LogoMatch",
    "PageResult",
    # cache
    "CacheStats",
]
