"""Product domain exceptions.

Raised by the validation functions and the HTTP handlers; the exception
handlers registered in ``product_api.main`` translate them into enveloped
JSON responses.
"""

from typing import Dict, List


class ProductNotFound(Exception):
    """The requested product does not exist."""

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found.")


class ProductValidationError(Exception):
    """Request data failed validation.

    ``errors`` maps each offending field to its human-readable messages.
    """

    def __init__(self, errors: Dict[str, List[str]]) -> None:
        self.errors = errors
        super().__init__("The given data was invalid.")
