import logging

from pymongo import AsyncMongoClient, ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

import config

logger = logging.getLogger(__name__)


def create_mongo_client() -> AsyncMongoClient:
    return AsyncMongoClient(
        config.MONGO_URL,
        serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS,
        connectTimeoutMS=config.MONGO_TIMEOUT_MS,
        tz_aware=True,
    )


def get_orders_collection(client: AsyncMongoClient) -> AsyncCollection:
    return client[config.MONGO_DB_NAME][config.MONGO_ORDERS_COLLECTION]


async def ensure_order_indexes(collection: AsyncCollection) -> None:
    """Create the orders indexes. create_index is a no-op for an index that already exists."""
    await collection.create_index([("order_number", ASCENDING)], unique=True, name="order_number_unique")
    await collection.create_index([("user_id", ASCENDING)], name="user_id")
    await collection.create_index([("order_date", DESCENDING)], name="order_date_desc")
    await collection.create_index([("user_id", ASCENDING), ("order_date", DESCENDING)], name="user_id_order_date")
    logger.info(f"Ensured indexes on collection '{collection.name}'")
