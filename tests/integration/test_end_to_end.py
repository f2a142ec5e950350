"""End-to-end flows through AppState: cache, registry and icon downloads."""

from __future__ import annotations

import httpx
import pytest
import respx

from logocn.config import Settings
from logocn.errors import FetchError
from logocn.registry import SCORE_NAME_PREFIX
from logocn.state import open_app_state
from tests.sample_catalog import CATALOG_URL, ICONS_BASE_URL, catalog_payload

SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M0 0"/></svg>'

RED_CATALOG = [
    {"title": "React", "hex": "61DAFB", "source": "https://react.dev", "slug": "react"},
    {"title": "Redux", "hex": "764ABC", "source": "https://redux.js.org", "slug": "redux"},
    {"title": "Redis", "hex": "FF4438", "source": "https://redis.io", "slug": "redis"},
]


class TestFirstRun:
    async def test_first_lookup_downloads_and_persists(self, settings: Settings) -> None:
        with respx.mock:
            route = respx.get(CATALOG_URL).mock(
                return_value=httpx.Response(200, json=catalog_payload())
            )
            async with open_app_state(settings) as state:
                logo = await state.registry.find_by_name("node")
                assert logo is not None
                assert logo.slug == "nodedotjs"
                await state.registry.search("cloud")

        assert route.call_count == 1
        assert settings.cache.path.is_file()

    async def test_second_process_reuses_cache(self, settings: Settings) -> None:
        with respx.mock:
            respx.get(CATALOG_URL).mock(return_value=httpx.Response(200, json=catalog_payload()))
            async with open_app_state(settings) as state:
                await state.registry.get_all()

        with respx.mock(assert_all_called=False) as respx_mock:
            route = respx_mock.get(CATALOG_URL)
            async with open_app_state(settings) as state:
                assert await state.registry.count() == 9
                stats = await state.registry.stats()
        assert route.call_count == 0
        assert stats.exists is True
        assert stats.count == 9

    async def test_offline_first_run_fails(self, settings: Settings) -> None:
        with respx.mock:
            respx.get(CATALOG_URL).mock(side_effect=httpx.ConnectError("offline"))
            async with open_app_state(settings) as state:
                with pytest.raises(FetchError):
                    await state.registry.find_by_name("react")


class TestSearchScenario:
    async def test_red_query(self, settings: Settings) -> None:
        with respx.mock:
            respx.get(CATALOG_URL).mock(
                return_value=httpx.Response(200, json=catalog_payload(RED_CATALOG))
            )
            async with open_app_state(settings) as state:
                matches = await state.registry.rank("red")
                logos = await state.registry.search("red")

        assert [(m.logo.name, m.score) for m in matches] == [
            ("Redux", SCORE_NAME_PREFIX),
            ("Redis", SCORE_NAME_PREFIX),
        ]
        assert [logo.slug for logo in logos] == ["redux", "redis"]

    async def test_pagination_over_cached_catalog(self, settings: Settings) -> None:
        with respx.mock:
            respx.get(CATALOG_URL).mock(return_value=httpx.Response(200, json=catalog_payload()))
            async with open_app_state(settings) as state:
                page = await state.registry.get_paginated(0, 5)

        assert page.current_page == 1
        assert page.total_pages == 2
        assert [logo.slug for logo in page.records] == [
            "react",
            "redux",
            "redis",
            "dotnet",
            "cplusplus",
        ]


class TestUpdate:
    async def test_refresh_replaces_catalog_and_reloads(self, settings: Settings) -> None:
        svelte = {"title": "Svelte", "hex": "FF3E00", "source": "https://svelte.dev"}
        updated = [*RED_CATALOG, svelte]
        with respx.mock:
            route = respx.get(CATALOG_URL)
            route.side_effect = [
                httpx.Response(200, json=catalog_payload(RED_CATALOG)),
                httpx.Response(200, json=catalog_payload(updated)),
            ]
            async with open_app_state(settings) as state:
                assert await state.registry.find_by_name("svelte") is None
                await state.registry.refresh()
                logo = await state.registry.find_by_name("svelte")

        assert logo is not None
        assert logo.slug == "svelte"
        assert route.call_count == 2

    async def test_failed_refresh_keeps_previous_catalog(self, settings: Settings) -> None:
        with respx.mock:
            route = respx.get(CATALOG_URL)
            route.side_effect = [
                httpx.Response(200, json=catalog_payload(RED_CATALOG)),
                httpx.Response(503),
            ]
            async with open_app_state(settings) as state:
                await state.registry.get_all()
                before = settings.cache.path.read_bytes()
                with pytest.raises(FetchError):
                    await state.registry.refresh()
                assert (await state.registry.find_by_name("redis")).slug == "redis"

        assert settings.cache.path.read_bytes() == before


class TestIconDownload:
    async def test_resolve_then_download(self, settings: Settings) -> None:
        with respx.mock:
            respx.get(CATALOG_URL).mock(return_value=httpx.Response(200, json=catalog_payload()))
            respx.get(f"{ICONS_BASE_URL}/cplusplus.svg").mock(
                return_value=httpx.Response(200, text=SVG)
            )
            async with open_app_state(settings) as state:
                logo = await state.registry.find_by_name("C++")
                assert logo is not None
                svg = await state.icons.download_svg(logo.slug)

        assert svg == SVG
