"""Application wiring shared by every command."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from logocn.cache import CacheStore
from logocn.config import Settings
from logocn.fetcher import Fetcher, build_http_client
from logocn.icons import IconService
from logocn.registry import Registry


@dataclass
class AppState:
    """Everything a command needs, built once per process."""

    settings: Settings
    http_client: httpx.AsyncClient
    cache: CacheStore
    registry: Registry
    icons: IconService


def build_app_state(settings: Settings, http_client: httpx.AsyncClient) -> AppState:
    fetcher = Fetcher(http_client)
    cache = CacheStore(fetcher, settings.cache.path, settings.catalog.url)
    return AppState(
        settings=settings,
        http_client=http_client,
        cache=cache,
        registry=Registry(cache),
        icons=IconService(fetcher, settings.catalog.icons_base_url),
    )


@asynccontextmanager
async def open_app_state(settings: Settings | None = None) -> AsyncIterator[AppState]:
    """Build an ``AppState`` and close its HTTP client on exit."""
    settings = settings or Settings()
    async with build_http_client(settings.http) as client:
        yield build_app_state(settings, client)
