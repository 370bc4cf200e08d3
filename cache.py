import logging

from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import ConstantBackoff
from redis.exceptions import ConnectionError, TimeoutError

import config

logger = logging.getLogger(__name__)


def create_redis_client() -> Redis:
    """Redis client for the basket store with a small fixed retry count and connect timeout."""
    retry = Retry(ConstantBackoff(0.1), config.REDIS_CONNECT_RETRY)
    return Redis(
        host=config.REDIS_HOST,
        port=config.REDIS_PORT,
        password=config.REDIS_PASSWORD,
        db=config.REDIS_DB,
        socket_connect_timeout=config.REDIS_CONNECT_TIMEOUT_SECONDS,
        socket_timeout=config.REDIS_SOCKET_TIMEOUT_SECONDS,
        retry=retry,
        retry_on_error=[ConnectionError, TimeoutError],
        decode_responses=True,
    )


async def close_redis_client(redis: Redis) -> None:
    await redis.aclose()
    logger.info("Redis connection closed")
