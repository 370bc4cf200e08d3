from enum import Enum


class ErrorKind(Enum):
    """
    Closed set of error kinds shared by all services.

    Every ShopServiceException carries exactly one kind; the HTTP status
    is derived from it once, in utils/error_handler.py.
    """
    NOT_FOUND = "NOT_FOUND"
    INVALID = "INVALID"
    CONFLICT = "CONFLICT"
    UNAVAILABLE = "UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    INTERNAL = "INTERNAL"
