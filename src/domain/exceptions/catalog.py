"""Catalog and stock domain exceptions."""

from .base import DomainException


class ResourceNotFoundException(DomainException):
    """Raised when a contact, category, product, stock row or sale is missing."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource.capitalize()} not found: {resource_id}",
            code=f"{resource.upper()}_NOT_FOUND",
        )
        self.resource = resource
        self.resource_id = resource_id


class InsufficientStockException(DomainException):
    """Raised when a sale asks for more units than the warehouse holds."""

    def __init__(self, product_id: str, available: int, requested: int):
        super().__init__(
            message=(
                f"Insufficient stock for product {product_id}: "
                f"{available} available, {requested} requested"
            ),
            code="INSUFFICIENT_STOCK",
        )
        self.available = available
        self.requested = requested
