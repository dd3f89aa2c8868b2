"""
Domain errors raised by the TillTrack core.
"""


class TillTrackError(Exception):
    """Base class for TillTrack errors."""


class EmptyCartError(TillTrackError):
    """Raised when a payment is attempted on a cart without lines."""

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class ProductNotFoundError(TillTrackError):
    """Raised when a product id does not match any catalog entry."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")
