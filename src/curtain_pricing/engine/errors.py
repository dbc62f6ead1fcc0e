"""
Exception types raised by the pricing engine.

Every error is recoverable by the caller. User-input problems derive from
ValueError, a bad removal index derives from IndexError so it reads as a
programming error rather than something to re-prompt for.
"""
from typing import Optional


class PricingError(Exception):
    """Base class for all pricing engine errors."""


class InvalidInput(PricingError, ValueError):
    """Malformed numeric value or unrecognized length unit."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        self.message = message
        super().__init__(message)


class ValidationError(PricingError, ValueError):
    """A named field on a line-item request is missing or invalid."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        self.message = message or f"Invalid value for '{field}'"
        super().__init__(self.message)


class IndexOutOfRange(PricingError, IndexError):
    """A removal referenced a line item that does not exist."""

    def __init__(self, index, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Item index {index} out of range for order with {size} item(s)")


class SubmissionError(PricingError):
    """An order does not meet the preconditions for submission."""


class MissingCustomerName(SubmissionError):
    def __init__(self):
        super().__init__("Customer name is required.")


class EmptyOrder(SubmissionError):
    def __init__(self):
        super().__init__("Cannot save an empty order. Please add items.")
