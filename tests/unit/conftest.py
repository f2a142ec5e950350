"""Unit-specific fixtures (no I/O beyond tmp_path and mocked HTTP)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from logocn.cache import CacheStore
from logocn.fetcher import Fetcher
from tests.sample_catalog import CATALOG_URL

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def cache_path(tmp_path: Path) -> Path:
    # Nested so that tests also cover creation of the missing cache directory.
    return tmp_path / "cache" / "simple-icons.json"


@pytest.fixture()
def cache_store(http_client: httpx.AsyncClient, cache_path: Path) -> CacheStore:
    return CacheStore(Fetcher(http_client), cache_path, CATALOG_URL)
