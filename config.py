import os
import sys

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(os.environ.get("RUNTIME_ENVIRONMENT", "DEV"))
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('RUNTIME_ENVIRONMENT')}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)


def _int_setting(name: str, default: str) -> int:
    raw_value = os.environ.get(name, default)
    try:
        return int(raw_value)
    except ValueError:
        print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
        print(f"Expected: integer (e.g., {default})", file=sys.stderr)
        print(f"Current value: {raw_value}\n", file=sys.stderr)
        sys.exit(1)


# HTTP Configuration
SERVICE_HOST = os.environ.get("SERVICE_HOST", "0.0.0.0")
BASKET_PORT = _int_setting("BASKET_PORT", "8001")
CATALOG_PORT = _int_setting("CATALOG_PORT", "8002")
ORDERING_PORT = _int_setting("ORDERING_PORT", "8003")
CORS_ALLOWED_ORIGINS = [
    origin.strip() for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if origin.strip()
]

# Basket Service: Redis cache store
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT = _int_setting("REDIS_PORT", "6379")
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD") or None
REDIS_DB = _int_setting("REDIS_DB", "0")
REDIS_CONNECT_RETRY = _int_setting("REDIS_CONNECT_RETRY", "3")
REDIS_CONNECT_TIMEOUT_SECONDS = _int_setting("REDIS_CONNECT_TIMEOUT_SECONDS", "5")
REDIS_SOCKET_TIMEOUT_SECONDS = _int_setting("REDIS_SOCKET_TIMEOUT_SECONDS", "5")
BASKET_TTL_HOURS = _int_setting("BASKET_TTL_HOURS", "24")  # Every write resets the countdown

# Catalog Service: relational store (SQLAlchemy async URL)
CATALOG_DB_URL = os.environ.get("CATALOG_DB_URL", "sqlite+aiosqlite:///data/catalog.db")
CATALOG_SEED_DATA = os.environ.get("CATALOG_SEED_DATA", "true") == "true"

# Ordering Service: MongoDB document store
MONGO_URL = os.environ.get("MONGO_URL", "mongodb://localhost:27017")
MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "OrderingDb")
MONGO_ORDERS_COLLECTION = os.environ.get("MONGO_ORDERS_COLLECTION", "orders")
MONGO_TIMEOUT_MS = _int_setting("MONGO_TIMEOUT_MS", "5000")

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask credentials in logs
LOG_DIR = os.environ.get("LOG_DIR", "logs")

# Log Retention: Environment-specific defaults
# Dev: keep a month for debugging, otherwise a week
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = _int_setting("LOG_RETENTION_DAYS", "30")
else:
    LOG_RETENTION_DAYS = _int_setting("LOG_RETENTION_DAYS", "7")
