"""
Product handlers.

Each function performs exactly one repository call and returns the response
payload; absence is raised as `NotFoundError`.
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import NotFoundError

from . import schemas
from .repository import ProductRepository

NOT_FOUND_MESSAGE = "Product not found"
DELETED_MESSAGE = "Product was deleted"

logger = logging.getLogger(__name__)


async def list_products(repo: ProductRepository) -> dict[str, Any]:
    return {"data": await repo.find_all()}


async def get_product(repo: ProductRepository, product_id: int) -> dict[str, Any]:
    product = await repo.find(product_id)
    if product is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return {"data": product}


async def create_product(repo: ProductRepository, payload: schemas.ProductCreate) -> dict[str, Any]:
    # Duplicate names are allowed.
    product = await repo.insert(name=payload.name, price=payload.price)
    logger.info("product_created id=%s", product["id"])
    return {"data": product}


async def update_product(
    repo: ProductRepository,
    product_id: int,
    payload: schemas.ProductUpdate,
) -> dict[str, Any]:
    """
    Overwrite name, price and availability. All three are required by validation.
    """
    product = await repo.update(
        product_id,
        name=payload.name,
        price=payload.price,
        availability=payload.availability,
    )
    if product is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    logger.info("product_updated id=%s", product_id)
    return {"data": product}


async def toggle_availability(repo: ProductRepository, product_id: int) -> dict[str, Any]:
    product = await repo.toggle_availability(product_id)
    if product is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    logger.info("product_availability_toggled id=%s availability=%s", product_id, product["availability"])
    return {"data": product}


async def delete_product(repo: ProductRepository, product_id: int) -> dict[str, Any]:
    if not await repo.delete(product_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    logger.info("product_deleted id=%s", product_id)
    return {"data": DELETED_MESSAGE}
