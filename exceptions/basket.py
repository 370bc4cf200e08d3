"""
Basket-related exceptions.
"""

from decimal import Decimal

from enums.error_kind import ErrorKind
from .base import ShopServiceException


class BasketNotFoundException(ShopServiceException):
    """Raised when no basket is stored for the user."""

    kind = ErrorKind.NOT_FOUND
    code = "BASKET_NOT_FOUND"

    def __init__(self, user_id: str):
        super().__init__(
            f"Basket for user '{user_id}' was not found.",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class BasketItemNotFoundException(ShopServiceException):
    """Raised when the basket has no line item for the product."""

    kind = ErrorKind.NOT_FOUND
    code = "BASKET_ITEM_NOT_FOUND"

    def __init__(self, user_id: str, product_id: int):
        super().__init__(
            f"Item with product id '{product_id}' was not found in the basket for user '{user_id}'.",
            details={'user_id': user_id, 'product_id': product_id}
        )
        self.user_id = user_id
        self.product_id = product_id


class CacheOperationException(ShopServiceException):
    """Raised when reading or writing the basket cache fails."""

    kind = ErrorKind.INTERNAL
    code = "CACHE_ERROR"

    def __init__(self, operation: str, message: str):
        super().__init__(message, details={'operation': operation})
        self.operation = operation


class InvalidQuantityException(ShopServiceException):
    """Raised when a line item quantity is outside the allowed range."""

    kind = ErrorKind.INVALID
    code = "INVALID_QUANTITY"

    def __init__(self, quantity: int):
        super().__init__(
            f"Quantity '{quantity}' is invalid. Quantity must be between 1 and 100.",
            details={'quantity': quantity}
        )
        self.quantity = quantity


class InvalidPriceException(ShopServiceException):
    """Raised when a line item price is negative."""

    kind = ErrorKind.INVALID
    code = "INVALID_PRICE"

    def __init__(self, price: Decimal):
        super().__init__(
            f"Price '{price}' is invalid. Price must not be negative.",
            details={'price': str(price)}
        )
        self.price = price
