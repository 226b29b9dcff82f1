# tests/test_validation.py

"""
Unit tests for the request validation functions. No database involved.
"""

import pytest
from pydantic import BaseModel, Field, ValidationError

from product_api.exceptions import ProductValidationError
from product_api.schemas import MAX_QUANTITY, ProductCreate
from product_api.validation import (
    format_validation_errors,
    validate_product_create,
    validate_product_update,
)


def create_errors(payload: dict) -> dict:
    with pytest.raises(ProductValidationError) as exc_info:
        validate_product_create(payload)
    return exc_info.value.errors


def update_errors(payload: dict) -> dict:
    with pytest.raises(ProductValidationError) as exc_info:
        validate_product_update(payload)
    return exc_info.value.errors


def test_valid_create_payload():
    product = validate_product_create(
        {"name": "  Desk Lamp ", "price": 19.99, "description": "Warm light"}
    )
    assert product.name == "Desk Lamp"
    assert product.price == 19.99
    assert product.description == "Warm light"
    assert product.quantity == 0


def test_create_accepts_numeric_string_price():
    assert validate_product_create({"name": "Lamp", "price": "12.50"}).price == 12.5


def test_create_ignores_unknown_fields():
    product = validate_product_create({"name": "Lamp", "price": 1, "sku": "L-1"})
    assert "sku" not in product.model_dump()


def test_create_requires_name_and_price():
    assert create_errors({}) == {
        "name": ["The name field is required."],
        "price": ["The price field is required."],
    }


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_rejects_blank_name(name):
    assert create_errors({"name": name, "price": 1}) == {
        "name": ["The name field is required."]
    }


def test_create_rejects_non_string_name():
    assert create_errors({"name": 123, "price": 1}) == {
        "name": ["The name field must be a string."]
    }


def test_create_rejects_overlong_name():
    assert create_errors({"name": "x" * 256, "price": 1}) == {
        "name": ["The name field may not be greater than 255 characters."]
    }


@pytest.mark.parametrize(
    "price, message",
    [
        (None, "The price field is required."),
        ("free", "The price field must be a number."),
        (-0.01, "The price field must be at least 0."),
        (100_000_000, "The price field may not be greater than 99999999.99."),
    ],
)
def test_create_rejects_bad_price(price, message):
    assert create_errors({"name": "Lamp", "price": price}) == {"price": [message]}


@pytest.mark.parametrize(
    "quantity, message",
    [
        (-1, "The quantity field must be at least 0."),
        (1.5, "The quantity field must be an integer."),
        ("many", "The quantity field must be an integer."),
    ],
)
def test_create_rejects_bad_quantity(quantity, message):
    assert create_errors({"name": "Lamp", "price": 1, "quantity": quantity}) == {
        "quantity": [message]
    }


def test_update_keeps_absent_fields_unset():
    assert validate_product_update({}).model_dump(exclude_unset=True) == {}
    assert validate_product_update({"name": "New"}).model_dump(exclude_unset=True) == {
        "name": "New"
    }


def test_update_allows_null_description():
    patch = validate_product_update({"description": None}).model_dump(exclude_unset=True)
    assert patch == {"description": None}


def test_update_rejects_null_required_fields():
    assert update_errors({"name": None, "price": None, "quantity": None}) == {
        "name": ["The name field may not be null."],
        "price": ["The price field may not be null."],
        "quantity": ["The quantity field may not be null."],
    }


def test_update_applies_create_rules_to_present_fields():
    assert update_errors({"name": "", "price": -3}) == {
        "name": ["The name field is required."],
        "price": ["The price field must be at least 0."],
    }


def test_validation_error_keeps_pydantic_cause():
    with pytest.raises(ProductValidationError) as exc_info:
        validate_product_create({"price": 1})
    assert isinstance(exc_info.value.__cause__, ValidationError)
    assert str(exc_info.value) == "The given data was invalid."


def test_format_validation_errors_for_non_object_input():
    with pytest.raises(ValidationError) as exc_info:
        ProductCreate.model_validate(["not", "a", "dict"])
    errors = format_validation_errors(exc_info.value)
    assert list(errors) == ["body"]


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("price", True, "The price field must be a number."),
        ("price", False, "The price field must be a number."),
        ("quantity", True, "The quantity field must be an integer."),
    ],
)
def test_create_rejects_booleans_as_numbers(field, value, message):
    payload = {"name": "Lamp", "price": 1, field: value}
    assert create_errors(payload) == {field: [message]}


def test_update_rejects_booleans_as_numbers():
    assert update_errors({"price": False, "quantity": True}) == {
        "price": ["The price field must be a number."],
        "quantity": ["The quantity field must be an integer."],
    }


def test_quantity_is_bounded_by_the_integer_column():
    message = f"The quantity field may not be greater than {MAX_QUANTITY}."
    assert create_errors({"name": "Lamp", "price": 1, "quantity": 10**20}) == {
        "quantity": [message]
    }
    assert update_errors({"quantity": MAX_QUANTITY + 1}) == {"quantity": [message]}
    assert validate_product_create({"name": "Lamp", "price": 1, "quantity": MAX_QUANTITY}).quantity == MAX_QUANTITY


def test_float_bounds_render_without_trailing_zero():
    class Gauge(BaseModel):
        level: float = Field(..., ge=0.0, le=5.0)

    for value, message in [
        (-1, "The level field must be at least 0."),
        (6, "The level field may not be greater than 5."),
    ]:
        with pytest.raises(ValidationError) as exc_info:
            Gauge.model_validate({"level": value})
        assert format_validation_errors(exc_info.value) == {"level": [message]}
