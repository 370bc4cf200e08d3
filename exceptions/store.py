"""
Store-level exceptions shared by all backing stores.

Raised by the adapters in utils/store_errors.py, never by driver code.
"""

from enums.error_kind import ErrorKind
from .base import ShopServiceException


class StoreUnavailableException(ShopServiceException):
    """Raised when a backing store cannot be reached."""

    kind = ErrorKind.UNAVAILABLE
    code = "STORE_UNAVAILABLE"

    def __init__(self, store: str, operation: str):
        super().__init__(
            f"The {store} is temporarily unavailable. Please try again later.",
            details={'store': store, 'operation': operation}
        )
        self.store = store
        self.operation = operation


class StoreTimeoutException(ShopServiceException):
    """Raised when a backing store does not answer in time."""

    kind = ErrorKind.TIMEOUT
    code = "STORE_TIMEOUT"

    def __init__(self, store: str, operation: str):
        super().__init__(
            f"The {store} did not respond in time. Please try again later.",
            details={'store': store, 'operation': operation}
        )
        self.store = store
        self.operation = operation


class DatabaseOperationException(ShopServiceException):
    """Raised when a database operation fails for an uncategorized reason."""

    kind = ErrorKind.INTERNAL
    code = "DATABASE_ERROR"

    def __init__(self, operation: str, message: str):
        super().__init__(message, details={'operation': operation})
        self.operation = operation


class DuplicateResourceException(ShopServiceException):
    """Raised when a unique constraint rejects a write."""

    kind = ErrorKind.CONFLICT
    code = "DUPLICATE_RESOURCE"

    def __init__(self, resource_type: str, property_name: str, property_value=None):
        super().__init__(
            f"A {resource_type} with {property_name} '{property_value}' already exists.",
            details={
                'resource_type': resource_type,
                'property_name': property_name,
                'property_value': property_value
            }
        )
        self.resource_type = resource_type
        self.property_name = property_name
        self.property_value = property_value
