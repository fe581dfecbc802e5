"""
Pydantic schemas for product endpoints (typed inputs and response envelopes).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., gt=0)


class ProductUpdate(ProductCreate):
    availability: bool


class Product(BaseModel):
    id: int = Field(..., description="ID of the product", examples=[1])
    name: str = Field(..., description="Name of the product", examples=["Curved Monitor"])
    price: float = Field(..., description="Price of the product", examples=[300])
    availability: bool = Field(..., description="Availability of the product", examples=[True])


class ProductResponse(BaseModel):
    data: Product


class ProductListResponse(BaseModel):
    data: list[Product]


class MessageResponse(BaseModel):
    data: str = Field(..., examples=["Product was deleted"])


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Product not found"])


class FieldError(BaseModel):
    field: str
    message: str
    location: str


class ValidationErrorResponse(BaseModel):
    errors: list[FieldError]
