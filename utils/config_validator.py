"""
Configuration Validation Module

Validates critical configuration values at startup to fail-fast
with clear error messages instead of runtime failures.
"""

import sys
from typing import Optional

from enums.service_name import ServiceName


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


SUPPORTED_SQL_SCHEMES = ("sqlite+aiosqlite://", "postgresql+asyncpg://")
SUPPORTED_MONGO_SCHEMES = ("mongodb://", "mongodb+srv://")


def validate_port(name: str, port: int) -> None:
    if not 1 <= port <= 65535:
        raise ConfigValidationError(f"{name} must be between 1 and 65535 (got: {port})")


def validate_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be positive (got: {value})")


def validate_catalog_db_url(url: str) -> None:
    """
    Validate the catalog database URL.

    Only async drivers are accepted because repositories run on AsyncSession.

    Raises:
        ConfigValidationError: If URL is empty or uses a sync driver
    """
    if not url:
        raise ConfigValidationError(
            "CATALOG_DB_URL is required!\n"
            "Example: CATALOG_DB_URL=sqlite+aiosqlite:///data/catalog.db"
        )
    if not url.startswith(SUPPORTED_SQL_SCHEMES):
        raise ConfigValidationError(
            f"CATALOG_DB_URL must use an async driver ({', '.join(SUPPORTED_SQL_SCHEMES)})"
        )


def validate_mongo_url(url: Optional[str]) -> None:
    if not url or not url.startswith(SUPPORTED_MONGO_SCHEMES):
        raise ConfigValidationError(
            "MONGO_URL must be a MongoDB connection string!\n"
            "Example: MONGO_URL=mongodb://localhost:27017"
        )


def validate_startup_config(config, service: ServiceName) -> None:
    """
    Validate the settings a service needs before it starts.

    Args:
        config: Config module
        service: Service about to start

    Raises:
        ConfigValidationError: If any validation fails
    """
    validate_positive("LOG_RETENTION_DAYS", config.LOG_RETENTION_DAYS)

    if service == ServiceName.BASKET:
        validate_port("BASKET_PORT", config.BASKET_PORT)
        validate_port("REDIS_PORT", config.REDIS_PORT)
        validate_positive("BASKET_TTL_HOURS", config.BASKET_TTL_HOURS)
        validate_positive("REDIS_CONNECT_RETRY", config.REDIS_CONNECT_RETRY)
        validate_positive("REDIS_CONNECT_TIMEOUT_SECONDS", config.REDIS_CONNECT_TIMEOUT_SECONDS)
        validate_positive("REDIS_SOCKET_TIMEOUT_SECONDS", config.REDIS_SOCKET_TIMEOUT_SECONDS)
    elif service == ServiceName.CATALOG:
        validate_port("CATALOG_PORT", config.CATALOG_PORT)
        validate_catalog_db_url(config.CATALOG_DB_URL)
    elif service == ServiceName.ORDERING:
        validate_port("ORDERING_PORT", config.ORDERING_PORT)
        validate_mongo_url(config.MONGO_URL)
        validate_positive("MONGO_TIMEOUT_MS", config.MONGO_TIMEOUT_MS)


def validate_or_exit(config, service: ServiceName) -> None:
    """
    Validate configuration and exit if invalid.

    Convenience wrapper for startup validation that exits
    with error message instead of raising exception.
    """
    try:
        validate_startup_config(config, service)
    except ConfigValidationError as e:
        print(f"\n CONFIGURATION ERROR ({service.value}):\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nPlease fix the configuration in .env and restart the service.\n", file=sys.stderr)
        sys.exit(1)
