from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CatalogAliases(BaseModel):
    """Alternate names attached to an upstream icon."""

    model_config = ConfigDict(extra="allow")

    aka: list[str] | None = None
    dup: list[dict[str, object]] | None = None
    loc: dict[str, str] | None = None  # locale code → localized title


class CatalogRecord(BaseModel):
    """Single icon entry of the upstream simple-icons.json document.

    Fields this package does not use (guidelines, license, ...) are kept so
    that re-persisting the document does not drop them.
    """

    model_config = ConfigDict(extra="allow")

    title: str
    hex: str
    source: str
    slug: str | None = None
    aliases: CatalogAliases | None = None


class CatalogDocument(BaseModel):
    """The whole catalog as fetched from upstream and persisted on disk."""

    model_config = ConfigDict(extra="allow")

    icons: list[CatalogRecord]
