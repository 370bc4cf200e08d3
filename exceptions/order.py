"""
Order-related exceptions.
"""

from enums.error_kind import ErrorKind
from .base import ShopServiceException


class OrderNotFoundException(ShopServiceException):
    """Raised when order is not found in database."""

    kind = ErrorKind.NOT_FOUND
    code = "ORDER_NOT_FOUND"

    def __init__(self, order_id: str):
        super().__init__(
            f"Order with id '{order_id}' was not found.",
            details={'order_id': order_id}
        )
        self.order_id = order_id


class InvalidOrderStatusTransitionException(ShopServiceException):
    """Raised when the transition table has no (current, target) entry."""

    kind = ErrorKind.INVALID
    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            f"Cannot change order status from '{current_status}' to '{target_status}'. "
            f"This transition is not allowed.",
            details={'current_status': current_status, 'target_status': target_status}
        )
        self.current_status = current_status
        self.target_status = target_status


class OrderCannotBeCancelledException(ShopServiceException):
    """Raised when cancelling an order that is neither Pending nor Confirmed."""

    kind = ErrorKind.INVALID
    code = "ORDER_CANNOT_BE_CANCELLED"

    def __init__(self, order_id: str, current_status: str):
        super().__init__(
            f"Order '{order_id}' cannot be cancelled. Orders can only be cancelled when in "
            f"'Pending' or 'Confirmed' status. Current status: '{current_status}'.",
            details={'order_id': order_id, 'current_status': current_status}
        )
        self.order_id = order_id
        self.current_status = current_status


class EmptyOrderException(ShopServiceException):
    """Raised when an order is submitted without items."""

    kind = ErrorKind.INVALID
    code = "EMPTY_ORDER"

    def __init__(self):
        super().__init__("Order must contain at least one item.")


class InvalidUserIdException(ShopServiceException):
    """Raised when the user id is blank or too long."""

    kind = ErrorKind.INVALID
    code = "INVALID_USER_ID"

    def __init__(self, reason: str = "User ID is required and cannot be empty."):
        super().__init__(reason)


class InvalidShippingAddressException(ShopServiceException):
    """Raised when a required shipping address field is missing."""

    kind = ErrorKind.INVALID
    code = "INVALID_SHIPPING_ADDRESS"

    def __init__(self, missing_field: str):
        super().__init__(
            f"Shipping address is invalid. Missing required field: '{missing_field}'.",
            details={'missing_field': missing_field}
        )
        self.missing_field = missing_field


class InvalidOrderItemException(ShopServiceException):
    """Raised when an order line item fails validation."""

    kind = ErrorKind.INVALID
    code = "INVALID_ORDER_ITEM"

    def __init__(self, product_id: int, reason: str):
        super().__init__(
            f"Order item with product id '{product_id}' is invalid: {reason}",
            details={'product_id': product_id, 'reason': reason}
        )
        self.product_id = product_id
        self.reason = reason


class DuplicateOrderNumberException(ShopServiceException):
    """
    Raised when the generated order number already exists.

    The order was not stored; the caller may retry the creation.
    """

    kind = ErrorKind.CONFLICT
    code = "DUPLICATE_ORDER_NUMBER"

    def __init__(self, order_number: str | None):
        super().__init__(
            f"Order with number '{order_number}' already exists.",
            details={'order_number': order_number, 'retryable': True}
        )
        self.order_number = order_number
