from __future__ import annotations

from pydantic import BaseModel


class CacheStats(BaseModel):
    """Derived view of the persisted catalog. Recomputed on every call."""

    exists: bool
    age_hours: int | None = None  # whole hours since the last successful write
    count: int | None = None  # omitted when the file cannot be parsed
