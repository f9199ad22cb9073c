"""
Pytest configuration and fixtures
"""

import copy
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from bookshelf.catalog.router import get_catalog_service
from bookshelf.catalog.service import CatalogService
from bookshelf.catalog.store import CatalogStore, JsonFileCatalogStore
from bookshelf.main import app


class InMemoryCatalogStore(CatalogStore):
    """Catalog store kept in a dict, counting every load and save."""

    def __init__(self, catalog: Optional[Dict[str, Any]] = None):
        self.catalog = copy.deepcopy(catalog) if catalog is not None else {"books": []}
        self.load_calls = 0
        self.save_calls = 0

    async def load(self) -> Dict[str, Any]:
        self.load_calls += 1
        return copy.deepcopy(self.catalog)

    async def save(self, catalog: Dict[str, Any]) -> None:
        self.save_calls += 1
        self.catalog = copy.deepcopy(catalog)


@pytest.fixture
def memory_store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(
        {
            "books": [
                {"id": 1, "title": "Dune", "author": "Frank Herbert"},
                {"id": 2, "title": "Neuromancer", "author": "William Gibson"},
                {"id": 3, "title": "Solaris"},
            ]
        }
    )


@pytest.fixture
def books_file(tmp_path: Path) -> Path:
    """Catalog location that does not exist yet."""
    return tmp_path / "public" / "books.json"


@pytest.fixture
async def client(books_file: Path) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client against the app, with the catalog stored under tmp_path
    """
    service = CatalogService(JsonFileCatalogStore(books_file))
    app.dependency_overrides[get_catalog_service] = lambda: service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
