"""
Custom exceptions for the basket, catalog and ordering services.

Every exception carries an ErrorKind (kind) and a machine-readable code.
The API boundary maps the kind to an HTTP status in one place
(utils/error_handler.py). The hierarchy is one level deep.

Exceptions by module:
---------------------
ShopServiceException (base)
├── store:   StoreUnavailableException, StoreTimeoutException,
│            DatabaseOperationException, DuplicateResourceException
├── basket:  BasketNotFoundException, BasketItemNotFoundException,
│            CacheOperationException, InvalidQuantityException, InvalidPriceException
├── catalog: ResourceNotFoundException, ForeignKeyViolationException,
│            ResourceHasDependenciesException
└── order:   OrderNotFoundException, InvalidOrderStatusTransitionException,
             OrderCannotBeCancelledException, EmptyOrderException,
             InvalidUserIdException, InvalidShippingAddressException,
             InvalidOrderItemException, DuplicateOrderNumberException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id)

The FastAPI exception handler turns them into the error envelope:
    {"code": "ORDER_NOT_FOUND", "message": "...", "details": {...}, "trace_id": "...", "timestamp": "..."}
"""

from .base import ShopServiceException
from .basket import (
    BasketNotFoundException,
    BasketItemNotFoundException,
    CacheOperationException,
    InvalidQuantityException,
    InvalidPriceException
)
from .catalog import ResourceNotFoundException, ForeignKeyViolationException, ResourceHasDependenciesException
from .order import (
    OrderNotFoundException,
    InvalidOrderStatusTransitionException,
    OrderCannotBeCancelledException,
    EmptyOrderException,
    InvalidUserIdException,
    InvalidShippingAddressException,
    InvalidOrderItemException,
    DuplicateOrderNumberException
)
from .store import (
    StoreUnavailableException,
    StoreTimeoutException,
    DatabaseOperationException,
    DuplicateResourceException
)

__all__ = [
    # Base
    'ShopServiceException',

    # Store
    'StoreUnavailableException',
    'StoreTimeoutException',
    'DatabaseOperationException',
    'DuplicateResourceException',

    # Basket
    'BasketNotFoundException',
    'BasketItemNotFoundException',
    'CacheOperationException',
    'InvalidQuantityException',
    'InvalidPriceException',

    # Catalog
    'ResourceNotFoundException',
    'ForeignKeyViolationException',
    'ResourceHasDependenciesException',

    # Order
    'OrderNotFoundException',
    'InvalidOrderStatusTransitionException',
    'OrderCannotBeCancelledException',
    'EmptyOrderException',
    'InvalidUserIdException',
    'InvalidShippingAddressException',
    'InvalidOrderItemException',
    'DuplicateOrderNumberException',
]
