"""Shared fixtures.

Each test gets its own data file under ``tmp_path``; nothing touches
the project's ``data/db.json``.
"""

import pytest
from fastapi.testclient import TestClient

from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.core.store import JsonDocumentStore
from product_catalog_api.app.main import create_app
from product_catalog_api.app.services.product_service import ProductService


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def store(db_path):
    return JsonDocumentStore(db_path)


@pytest.fixture
def service(store):
    return ProductService(store)


@pytest.fixture
def app(tmp_path, store):
    settings = Settings()
    settings.data_file = str(tmp_path / "db.json")
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
