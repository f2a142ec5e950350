"""Integration test fixtures.

Provides settings pointing at a temporary cache directory and fake upstream
URLs. HTTP is mocked with respx inside each test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from logocn.config import Settings
from tests.sample_catalog import CATALOG_URL, ICONS_BASE_URL

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        catalog={"url": CATALOG_URL, "icons_base_url": ICONS_BASE_URL},
        cache={"dir": str(tmp_path / "logocn")},
    )
