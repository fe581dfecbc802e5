from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from main import create_app
from products.dependencies import get_repository

FRONTEND_URL = "http://localhost:5173"


class InMemoryProductRepository:
    """
    Same surface as `ProductRepository`, backed by a dict.
    """

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    async def sync_schema(self) -> None:
        return None

    async def find_all(self) -> list[dict[str, Any]]:
        return [dict(self.rows[k]) for k in sorted(self.rows, reverse=True)]

    async def find(self, product_id: int) -> dict[str, Any] | None:
        row = self.rows.get(product_id)
        return dict(row) if row is not None else None

    async def insert(self, *, name: str, price: float, availability: bool = True) -> dict[str, Any]:
        row = {"id": self._next_id, "name": name, "price": price, "availability": availability}
        self.rows[self._next_id] = row
        self._next_id += 1
        return dict(row)

    async def update(self, product_id: int, *, name: str, price: float, availability: bool) -> dict[str, Any] | None:
        row = self.rows.get(product_id)
        if row is None:
            return None
        row.update(name=name, price=price, availability=availability)
        return dict(row)

    async def toggle_availability(self, product_id: int) -> dict[str, Any] | None:
        row = self.rows.get(product_id)
        if row is None:
            return None
        row["availability"] = not row["availability"]
        return dict(row)

    async def delete(self, product_id: int) -> bool:
        return self.rows.pop(product_id, None) is not None


@pytest.fixture
def repo() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def app(monkeypatch, repo):
    monkeypatch.setenv("FRONTEND_URL", FRONTEND_URL)
    application = create_app()
    application.dependency_overrides[get_repository] = lambda: repo
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def product(client) -> dict:
    response = client.post("/api/products", json={"name": "Mouse - Testing", "price": 25})
    assert response.status_code == 201
    return response.json()["data"]
