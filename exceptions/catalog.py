"""
Catalog-related exceptions (products and categories).
"""

from enums.error_kind import ErrorKind
from .base import ShopServiceException


class ResourceNotFoundException(ShopServiceException):
    """Raised when a product or category is not found in database."""

    kind = ErrorKind.NOT_FOUND
    code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id):
        super().__init__(
            f"{resource_type} with id '{resource_id}' was not found.",
            details={'resource_type': resource_type, 'resource_id': resource_id}
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ForeignKeyViolationException(ShopServiceException):
    """Raised when a write references a row that does not exist."""

    kind = ErrorKind.INVALID
    code = "FOREIGN_KEY_VIOLATION"

    def __init__(self, resource_type: str, referenced_resource_type: str, referenced_resource_id=None):
        super().__init__(
            f"Cannot perform operation on {resource_type}. Referenced {referenced_resource_type} "
            f"with id '{referenced_resource_id}' does not exist or is invalid.",
            details={
                'resource_type': resource_type,
                'referenced_resource_type': referenced_resource_type,
                'referenced_resource_id': referenced_resource_id
            }
        )
        self.resource_type = resource_type
        self.referenced_resource_type = referenced_resource_type
        self.referenced_resource_id = referenced_resource_id


class ResourceHasDependenciesException(ShopServiceException):
    """Raised when deleting a row that other rows still reference."""

    kind = ErrorKind.CONFLICT
    code = "RESOURCE_HAS_DEPENDENCIES"

    def __init__(self, resource_type: str, resource_id, dependent_resource_type: str):
        super().__init__(
            f"Cannot delete {resource_type} with id '{resource_id}' because it has related {dependent_resource_type}.",
            details={
                'resource_type': resource_type,
                'resource_id': resource_id,
                'dependent_resource_type': dependent_resource_type
            }
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.dependent_resource_type = dependent_resource_type
