"""Product domain errors.

Raised by the service layer; the API layer maps them to HTTP responses.
"""


class ProductError(Exception):
    """Base class for catalog errors."""


class ProductNotFound(ProductError):
    """The product does not exist or has been soft-deleted."""

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")
