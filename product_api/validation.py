# product_api/validation.py

"""
Request body validation for product create and update.

Each function takes the raw JSON object and returns a validated schema, or
raises ProductValidationError with a field -> messages map.
"""

from typing import Any, Dict, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import ProductValidationError
from .schemas import ProductCreate, ProductUpdate

ModelT = TypeVar("ModelT", bound=BaseModel)

REQUIRED_MESSAGE = "The {field} field is required."

# pydantic error type -> message template
MESSAGES = {
    "missing": REQUIRED_MESSAGE,
    "string_too_short": REQUIRED_MESSAGE,
    "string_type": "The {field} field must be a string.",
    "string_too_long": "The {field} field may not be greater than {max_length} characters.",
    "float_type": "The {field} field must be a number.",
    "float_parsing": "The {field} field must be a number.",
    "finite_number": "The {field} field must be a number.",
    "int_type": "The {field} field must be an integer.",
    "int_parsing": "The {field} field must be an integer.",
    "int_from_float": "The {field} field must be an integer.",
    "greater_than_equal": "The {field} field must be at least {ge}.",
    "less_than_equal": "The {field} field may not be greater than {le}.",
}


def _render_bound(value: Any) -> Any:
    # pydantic reports float bounds as 0.0 on some releases and 0 on others
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_validation_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Turn a pydantic ValidationError into a field error map."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "body"
        error_type = error["type"]
        if error_type.endswith("_type") and error.get("input") is None:
            template = REQUIRED_MESSAGE
        else:
            template = MESSAGES.get(error_type)

        if template is None:
            message = error["msg"]
        else:
            ctx = {key: _render_bound(value) for key, value in error.get("ctx", {}).items()}
            message = template.format(field=field, **ctx)

        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def _validate(model: Type[ModelT], payload: Mapping[str, Any]) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ProductValidationError(format_validation_errors(e)) from e


def validate_product_create(payload: Mapping[str, Any]) -> ProductCreate:
    return _validate(ProductCreate, payload)


def validate_product_update(payload: Mapping[str, Any]) -> ProductUpdate:
    """Validate only the fields present in ``payload``; absent ones stay unset."""
    return _validate(ProductUpdate, payload)
