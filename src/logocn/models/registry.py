from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Logo(BaseModel):
    """Canonical, immutable record the registry resolves queries to."""

    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    hex: str
    source: str
    aliases: tuple[str, ...] | None = None  # None when the icon has no aliases

    @field_validator("aliases")
    @classmethod
    def validate_aliases(cls, v: tuple[str, ...] | None) -> tuple[str, ...] | None:
        return v or None


class LogoMatch(BaseModel):
    """Single result returned by Registry.rank."""

    model_config = ConfigDict(frozen=True)

    logo: Logo
    score: int


class PageResult(BaseModel):
    records: list[Logo]
    total_pages: int
    current_page: int
    total_count: int
