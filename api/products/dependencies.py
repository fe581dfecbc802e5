"""
FastAPI dependencies for product routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_database

from .repository import ProductRepository


def get_repository(db: Database = Depends(get_database)) -> ProductRepository:
    return ProductRepository(db)
