"""Shared fixtures: the sample catalog and its converted logos."""

from __future__ import annotations

import pytest

from logocn.models.catalog import CatalogDocument
from logocn.models.registry import Logo
from logocn.registry import logo_from_record
from tests.sample_catalog import catalog_payload


@pytest.fixture()
def sample_document() -> CatalogDocument:
    return CatalogDocument.model_validate(catalog_payload())


@pytest.fixture()
def sample_logos(sample_document: CatalogDocument) -> list[Logo]:
    return [logo_from_record(record) for record in sample_document.icons]
