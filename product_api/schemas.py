# product_api/schemas.py

"""
Pydantic schemas for the Product Service API.
These define the data structures for incoming requests and outgoing responses,
including the uniform {hasError, message, data} response envelope.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

# Upper bound of a Numeric(10, 2) column.
MAX_PRICE = 99_999_999.99
# Upper bound of a 32-bit Integer column.
MAX_QUANTITY = 2**31 - 1

DataT = TypeVar("DataT")

# Lax mode would read JSON true/false as 1/0.
_BOOL_ERRORS = {
    "price": ("float_type", "Input should be a valid number"),
    "quantity": ("int_type", "Input should be a valid integer"),
}


def reject_bool(value: Any, field_name: str) -> Any:
    if isinstance(value, bool):
        error_type, message = _BOOL_ERRORS[field_name]
        raise PydanticCustomError(error_type, message)
    return value


# Schema for creating a new product.
# Used in POST /api/v1/products.
class ProductCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, description="Name of the product.")
    description: Optional[str] = Field(None, description="Detailed description of the product.")
    price: float = Field(
        ..., ge=0, le=MAX_PRICE, allow_inf_nan=False, description="Price of the product. Must be non-negative."
    )
    quantity: int = Field(0, ge=0, le=MAX_QUANTITY, description="Quantity in stock. Must be non-negative.")

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def numbers_not_bool(cls, value: Any, info: ValidationInfo) -> Any:
        return reject_bool(value, info.field_name)


# Schema for updating an existing product.
# All fields are optional, allowing partial updates (PATCH-like behavior for PUT).
# Only description may be explicitly set to null.
# Used in PUT /api/v1/products/{product_id}.
class ProductUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255, description="New name of the product.")
    description: Optional[str] = Field(None, description="New detailed description of the product.")
    price: Optional[float] = Field(
        None, ge=0, le=MAX_PRICE, allow_inf_nan=False, description="New price of the product. Must be non-negative."
    )
    quantity: Optional[int] = Field(
        None, ge=0, le=MAX_QUANTITY, description="New quantity in stock. Must be non-negative."
    )

    @field_validator("name", "price", "quantity", mode="before")
    @classmethod
    def reject_null_or_bool(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise PydanticCustomError(
                "null_value",
                "The {field} field may not be null.",
                {"field": info.field_name},
            )
        if info.field_name in _BOOL_ERRORS:
            return reject_bool(value, info.field_name)
        return value


# Schema for representing a product in API responses.
class ProductResponse(BaseModel):
    id: int = Field(..., description="Unique identifier of the product.")
    name: str
    description: Optional[str] = None
    price: float
    quantity: int
    created_at: Optional[datetime] = Field(None, description="Timestamp when the product was created.")
    updated_at: Optional[datetime] = Field(None, description="Timestamp when the product was last updated.")

    model_config = ConfigDict(from_attributes=True)


class Envelope(BaseModel, Generic[DataT]):
    """Uniform wrapper for every product endpoint response."""

    has_error: bool = Field(False, alias="hasError")
    message: Optional[str] = None
    data: Optional[DataT] = None


class ValidationErrorEnvelope(Envelope[None]):
    """422 body: the envelope plus a map of field name to messages."""

    errors: Dict[str, List[str]]
