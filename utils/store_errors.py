"""
Store error adapters.

Each backing store gets one context manager that turns driver exceptions into
the ShopServiceException taxonomy. Repositories wrap every driver call in the
adapter of their store, so services and the HTTP layer never see driver errors
or driver message text.

Usage:
    with translate_sql_errors("Category", "create", {"name": dto.name}):
        await session_flush(session)
"""

import logging
import re
from contextlib import contextmanager

from pymongo import errors as mongo_errors
from redis import exceptions as redis_errors
from sqlalchemy import exc as sql_errors

from exceptions import (
    CacheOperationException,
    DatabaseOperationException,
    DuplicateOrderNumberException,
    DuplicateResourceException,
    ForeignKeyViolationException,
    ResourceHasDependenciesException,
    StoreTimeoutException,
    StoreUnavailableException,
)

logger = logging.getLogger(__name__)

CACHE_STORE = "cache store"
SQL_STORE = "relational store"
DOCUMENT_STORE = "document store"

# SQLite: "UNIQUE constraint failed: categories.name"
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?:\w+\.)?(\w+)")
# PostgreSQL: "Key (name)=(Books) already exists."
_POSTGRES_UNIQUE = re.compile(r"Key \((\w+)\)=\((.*?)\) already exists")
_POSTGRES_UNIQUE_VIOLATION = "23505"
_POSTGRES_FK_VIOLATION = "23503"


@contextmanager
def translate_cache_errors(operation: str):
    try:
        yield
    except redis_errors.TimeoutError as e:
        logger.error(f"Cache store timeout during {operation}: {e}")
        raise StoreTimeoutException(CACHE_STORE, operation) from e
    except redis_errors.ConnectionError as e:
        logger.error(f"Cache store unreachable during {operation}: {e}")
        raise StoreUnavailableException(CACHE_STORE, operation) from e
    except redis_errors.RedisError as e:
        logger.error(f"Cache operation {operation} failed: {e}", exc_info=True)
        raise CacheOperationException(operation, f"Cache operation '{operation}' failed.") from e


def _sqlstate(error: sql_errors.DBAPIError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _duplicate_from_integrity_error(resource_type: str, error: sql_errors.IntegrityError,
                                    values: dict) -> DuplicateResourceException | None:
    text = str(error.orig)
    match = _POSTGRES_UNIQUE.search(text)
    if match:
        return DuplicateResourceException(resource_type, match.group(1), match.group(2))
    match = _SQLITE_UNIQUE.search(text)
    if match:
        column = match.group(1)
        return DuplicateResourceException(resource_type, column, values.get(column))
    if _sqlstate(error) == _POSTGRES_UNIQUE_VIOLATION:
        column = next(iter(values), "value")
        return DuplicateResourceException(resource_type, column, values.get(column))
    return None


@contextmanager
def translate_sql_errors(resource_type: str, operation: str, values: dict | None = None,
                         references: tuple[str, str] | None = None, dependents: str | None = None):
    """
    Translate SQLAlchemy errors raised by a catalog write or read.

    A foreign key failure on a delete means other rows still point at the
    deleted one; on any other write it means the written row points at a
    missing one.

    Args:
        resource_type: Entity being written, used in the duplicate/foreign key messages
        operation: Operation name for logs and error details
        values: Column values of the write, used to name the offending value of a duplicate.
            Deletes pass the row id as values["id"].
        references: (referenced type, foreign key column) of the written row, e.g. ("Category", "category_id")
        dependents: Type of the rows that may reference the deleted one, e.g. "Product"
    """
    values = values or {}
    try:
        yield
    except sql_errors.IntegrityError as e:
        duplicate = _duplicate_from_integrity_error(resource_type, e, values)
        if duplicate is not None:
            logger.warning(f"Duplicate {resource_type} rejected during {operation}: {duplicate.details}")
            raise duplicate from e
        if "FOREIGN KEY constraint failed" in str(e.orig) or _sqlstate(e) == _POSTGRES_FK_VIOLATION:
            logger.warning(f"Foreign key violation on {resource_type} during {operation}")
            if operation == "delete":
                raise ResourceHasDependenciesException(resource_type, values.get("id"),
                                                       dependents or "records") from e
            referenced_type, column = references or ("related resource", None)
            raise ForeignKeyViolationException(resource_type, referenced_type,
                                               values.get(column) if column else None) from e
        logger.error(f"Integrity error on {resource_type} during {operation}: {e}", exc_info=True)
        raise DatabaseOperationException(operation, f"Failed to {operation} {resource_type}.") from e
    except sql_errors.TimeoutError as e:
        logger.error(f"Relational store timeout during {operation}: {e}")
        raise StoreTimeoutException(SQL_STORE, operation) from e
    except (sql_errors.OperationalError, sql_errors.InterfaceError) as e:
        logger.error(f"Relational store unreachable during {operation}: {e}")
        raise StoreUnavailableException(SQL_STORE, operation) from e
    except sql_errors.SQLAlchemyError as e:
        logger.error(f"Database operation {operation} on {resource_type} failed: {e}", exc_info=True)
        raise DatabaseOperationException(operation, f"Failed to {operation} {resource_type}.") from e


def _duplicate_key_fields(error: mongo_errors.DuplicateKeyError) -> dict:
    details = error.details or {}
    return details.get("keyValue") or details.get("keyPattern") or {}


@contextmanager
def translate_mongo_errors(operation: str):
    try:
        yield
    except mongo_errors.DuplicateKeyError as e:
        fields = _duplicate_key_fields(e)
        if "order_number" in fields or "order_number" in str(e):
            order_number = fields.get("order_number") if isinstance(fields.get("order_number"), str) else None
            logger.warning(f"Order number collision during {operation}: {order_number}")
            raise DuplicateOrderNumberException(order_number) from e
        field_name = next(iter(fields), "key")
        logger.warning(f"Duplicate key during {operation}: {field_name}")
        raise DuplicateResourceException("Order", field_name, fields.get(field_name)) from e
    except (mongo_errors.NetworkTimeout, mongo_errors.ExecutionTimeout, mongo_errors.WTimeoutError) as e:
        logger.error(f"Document store timeout during {operation}: {e}")
        raise StoreTimeoutException(DOCUMENT_STORE, operation) from e
    except mongo_errors.ConnectionFailure as e:
        logger.error(f"Document store unreachable during {operation}: {e}")
        raise StoreUnavailableException(DOCUMENT_STORE, operation) from e
    except mongo_errors.PyMongoError as e:
        logger.error(f"Document store operation {operation} failed: {e}", exc_info=True)
        raise DatabaseOperationException(operation, f"Order {operation} failed.") from e
