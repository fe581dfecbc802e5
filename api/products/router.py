"""
Product API endpoints.

Raw path/body input is checked by the validation chains in `validation.py`
(run as dependencies, before the handler), so the path parameter and request
bodies are described for OpenAPI through `openapi_extra`.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from . import schemas, service, validation
from .dependencies import get_repository
from .repository import ProductRepository

router = APIRouter()


def _id_parameter(description: str) -> dict[str, Any]:
    return {
        "in": "path",
        "name": "id",
        "description": description,
        "required": True,
        "schema": {"type": "integer"},
    }


def _json_body(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "required": True,
        "content": {
            "application/json": {
                "schema": {"type": "object", "properties": properties, "required": required},
            }
        },
    }


_NAME = {"type": "string", "example": "Curved Monitor"}
_PRICE = {"type": "number", "example": 300}
_AVAILABILITY = {"type": "boolean", "example": True}

_BAD_REQUEST = {"model": schemas.ValidationErrorResponse, "description": "Bad Request - Invalid input data"}
_INVALID_ID = {"model": schemas.ValidationErrorResponse, "description": "Bad Request - Invalid ID"}
_NOT_FOUND = {"model": schemas.ErrorResponse, "description": "Product Not Found"}


@router.get(
    "",
    response_model=schemas.ProductListResponse,
    summary="Get a list of the products",
    description="Return a list of products",
    responses={200: {"description": "Successful response"}},
)
async def get_products(repo: ProductRepository = Depends(get_repository)) -> dict:
    return await service.list_products(repo)


@router.get(
    "/{id}",
    response_model=schemas.ProductResponse,
    summary="Get a product by ID",
    description="Return a product based on its unique ID",
    responses={400: _INVALID_ID, 404: _NOT_FOUND},
    openapi_extra={"parameters": [_id_parameter("The ID of the product to retrieve")]},
)
async def get_product_by_id(
    product_id: int = Depends(validation.validated_id),
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    return await service.get_product(repo, product_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.ProductResponse,
    summary="Creates a new product",
    description="Returns a new record added to the database",
    responses={400: _BAD_REQUEST},
    openapi_extra={"requestBody": _json_body({"name": _NAME, "price": _PRICE}, ["name", "price"])},
)
async def create_product(
    payload: schemas.ProductCreate = Depends(validation.validated_create),
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    return await service.create_product(repo, payload)


@router.put(
    "/{id}",
    response_model=schemas.ProductResponse,
    summary="Updates an existing product with user input",
    description="Returns the updated product",
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    openapi_extra={
        "parameters": [_id_parameter("The ID of the product to update")],
        "requestBody": _json_body(
            {"name": _NAME, "price": _PRICE, "availability": _AVAILABILITY},
            ["name", "price", "availability"],
        ),
    },
)
async def update_product(
    validated: tuple[int, schemas.ProductUpdate] = Depends(validation.validated_update),
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    product_id, payload = validated
    return await service.update_product(repo, product_id, payload)


# Patch flips the availability of a product.
@router.patch(
    "/{id}",
    response_model=schemas.ProductResponse,
    summary="Update product availability",
    description="Returns the product with updated availability",
    responses={400: _INVALID_ID, 404: _NOT_FOUND},
    openapi_extra={"parameters": [_id_parameter("The ID of the product to update")]},
)
async def update_availability(
    product_id: int = Depends(validation.validated_id),
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    return await service.toggle_availability(repo, product_id)


@router.delete(
    "/{id}",
    response_model=schemas.MessageResponse,
    summary="Deletes a product by a given ID",
    description="Returns a confirmation message",
    responses={400: _INVALID_ID, 404: _NOT_FOUND},
    openapi_extra={"parameters": [_id_parameter("The ID of the product to delete")]},
)
async def delete_product(
    product_id: int = Depends(validation.validated_id),
    repo: ProductRepository = Depends(get_repository),
) -> dict:
    return await service.delete_product(repo, product_id)
