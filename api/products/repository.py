"""
Product persistence (raw SQL).

Every method is a single statement. Mutations use `WHERE id = $1 ... RETURNING`
so "missing" and "changed" are decided by the same statement.
Timestamp columns are never selected.
"""

from __future__ import annotations

from typing import Any

from core.db import Database

# Postgres INTEGER range; larger ids can never match a row.
_MAX_ID = 2**31 - 1
_MIN_ID = -(2**31)

_COLUMNS = "id, name, price, availability"


def _valid_key(product_id: int) -> bool:
    return _MIN_ID <= product_id <= _MAX_ID


def _to_record(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "name": str(row["name"]),
        "price": float(row["price"]),
        "availability": bool(row["availability"]),
    }


class ProductRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def sync_schema(self) -> None:
        """
        Create the products table if it does not exist yet.
        """
        await self.db.execute(
            """
            CREATE TABLE IF NOT EXISTS products (
                id SERIAL PRIMARY KEY,
                name VARCHAR(100) NOT NULL,
                price DOUBLE PRECISION NOT NULL CHECK (price > 0),
                availability BOOLEAN NOT NULL DEFAULT true,
                created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
            """
        )

    async def find_all(self) -> list[dict[str, Any]]:
        rows = await self.db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM products
            ORDER BY id DESC
            """
        )
        return [_to_record(r) for r in rows]

    async def find(self, product_id: int) -> dict[str, Any] | None:
        if not _valid_key(product_id):
            return None
        row = await self.db.fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM products
            WHERE id = $1
            """,
            product_id,
        )
        return _to_record(row) if row is not None else None

    async def insert(self, *, name: str, price: float, availability: bool = True) -> dict[str, Any]:
        row = await self.db.fetch_one(
            f"""
            INSERT INTO products (name, price, availability)
            VALUES ($1, $2, $3)
            RETURNING {_COLUMNS}
            """,
            name,
            price,
            availability,
        )
        if row is None:
            raise RuntimeError("Failed to insert product.")
        return _to_record(row)

    async def update(
        self,
        product_id: int,
        *,
        name: str,
        price: float,
        availability: bool,
    ) -> dict[str, Any] | None:
        if not _valid_key(product_id):
            return None
        row = await self.db.fetch_one(
            f"""
            UPDATE products
            SET name = $2,
                price = $3,
                availability = $4,
                updated_at = now()
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            product_id,
            name,
            price,
            availability,
        )
        return _to_record(row) if row is not None else None

    async def toggle_availability(self, product_id: int) -> dict[str, Any] | None:
        if not _valid_key(product_id):
            return None
        row = await self.db.fetch_one(
            f"""
            UPDATE products
            SET availability = NOT availability,
                updated_at = now()
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            product_id,
        )
        return _to_record(row) if row is not None else None

    async def delete(self, product_id: int) -> bool:
        if not _valid_key(product_id):
            return False
        row = await self.db.fetch_one(
            """
            DELETE FROM products
            WHERE id = $1
            RETURNING id
            """,
            product_id,
        )
        return row is not None
