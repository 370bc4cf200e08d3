import json
import logging

from pydantic import ValidationError
from redis.asyncio import Redis

import config
from exceptions import CacheOperationException
from models.basket import Basket
from utils.store_errors import translate_cache_errors

logger = logging.getLogger(__name__)


def basket_key(user_id: str) -> str:
    return f"basket:{user_id}"


class BasketRepository:
    @staticmethod
    async def get_basket(user_id: str, redis: Redis) -> Basket | None:
        with translate_cache_errors("get"):
            raw = await redis.get(basket_key(user_id))
        if raw is None:
            return None
        try:
            return Basket.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.error(f"Stored basket for user {user_id} cannot be decoded: {e}")
            raise CacheOperationException("get", f"Stored basket for user '{user_id}' is corrupted.") from e

    @staticmethod
    async def update_basket(basket: Basket, redis: Redis) -> Basket:
        """
        Replace the stored basket wholesale and reset its TTL.

        The basket is read back after the write, so the caller gets what the store holds.
        """
        payload = basket.model_dump_json()
        ttl_seconds = config.BASKET_TTL_HOURS * 3600
        with translate_cache_errors("update"):
            stored = await redis.set(basket_key(basket.user_id), payload, ex=ttl_seconds)
        if not stored:
            raise CacheOperationException("update", f"Failed to store basket for user '{basket.user_id}'.")
        updated = await BasketRepository.get_basket(basket.user_id, redis)
        if updated is None:
            raise CacheOperationException("update", f"Basket for user '{basket.user_id}' vanished after write.")
        return updated

    @staticmethod
    async def delete_basket(user_id: str, redis: Redis) -> bool:
        with translate_cache_errors("delete"):
            deleted = await redis.delete(basket_key(user_id))
        return deleted > 0
