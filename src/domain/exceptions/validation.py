"""Input validation exceptions."""

from datetime import date

from .base import DomainException


class InvalidInputException(DomainException):
    """Raised when request parameters violate a business rule."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_INPUT")


class InvalidRangeException(DomainException):
    """Raised when a date range ends before it starts."""

    def __init__(self, range_from: date, range_to: date):
        super().__init__(
            message=f"Invalid date range: {range_from.isoformat()} is after {range_to.isoformat()}",
            code="INVALID_RANGE",
        )
        self.range_from = range_from
        self.range_to = range_to
