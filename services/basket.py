import logging
from decimal import Decimal

from redis.asyncio import Redis

from exceptions import (
    BasketNotFoundException,
    BasketItemNotFoundException,
    InvalidQuantityException,
    InvalidPriceException,
)
from models.basket import Basket, BasketItem, BasketItemDTO
from repositories.basket import BasketRepository

logger = logging.getLogger(__name__)

MAX_ITEM_QUANTITY = 100


class BasketService:

    @staticmethod
    def _validate_item(item: BasketItemDTO | BasketItem) -> None:
        if item.quantity < 1 or item.quantity > MAX_ITEM_QUANTITY:
            raise InvalidQuantityException(item.quantity)
        if item.price < Decimal("0"):
            raise InvalidPriceException(item.price)

    @staticmethod
    async def get_basket(user_id: str, redis: Redis) -> Basket:
        """Stored basket of the user, or an empty basket if none is stored."""
        basket = await BasketRepository.get_basket(user_id, redis)
        if basket is None:
            logger.info(f"No basket stored for user {user_id}, returning empty basket")
            return Basket(user_id=user_id, items=[])
        logger.info(f"Basket of user {user_id} retrieved ({len(basket.items)} items)")
        return basket

    @staticmethod
    async def update_basket(user_id: str, items: list[BasketItemDTO], redis: Redis) -> Basket:
        for item in items:
            BasketService._validate_item(item)
        basket = Basket(user_id=user_id, items=[item.to_item() for item in items])
        updated = await BasketRepository.update_basket(basket, redis)
        logger.info(f"Basket of user {user_id} replaced ({len(updated.items)} items)")
        return updated

    @staticmethod
    async def delete_basket(user_id: str, redis: Redis) -> None:
        deleted = await BasketRepository.delete_basket(user_id, redis)
        if not deleted:
            logger.warning(f"Delete requested for missing basket of user {user_id}")
            raise BasketNotFoundException(user_id)
        logger.info(f"Basket of user {user_id} deleted")

    @staticmethod
    async def add_item(user_id: str, item: BasketItemDTO, redis: Redis) -> Basket:
        """
        Merge an item into the basket.

        A product already in the basket gets its quantity increased by the added
        amount, and its price and name replaced by the incoming values.
        """
        BasketService._validate_item(item)
        basket = await BasketService.get_basket(user_id, redis)

        existing = next((line for line in basket.items if line.product_id == item.product_id), None)
        if existing is not None:
            existing.quantity += item.quantity
            existing.price = item.price
            existing.product_name = item.product_name
        else:
            basket.items.append(item.to_item())

        updated = await BasketRepository.update_basket(basket, redis)
        logger.info(f"Product {item.product_id} added to basket of user {user_id}")
        return updated

    @staticmethod
    async def update_item_quantity(user_id: str, product_id: int, quantity: int, redis: Redis) -> Basket:
        """Set the quantity of a line item. A quantity of 0 or less removes the item."""
        if quantity > MAX_ITEM_QUANTITY:
            raise InvalidQuantityException(quantity)
        basket = await BasketRepository.get_basket(user_id, redis)
        if basket is None:
            raise BasketNotFoundException(user_id)

        existing = next((line for line in basket.items if line.product_id == product_id), None)
        if existing is None:
            raise BasketItemNotFoundException(user_id, product_id)

        if quantity <= 0:
            basket.items.remove(existing)
            logger.info(f"Product {product_id} removed from basket of user {user_id} (quantity {quantity})")
        else:
            existing.quantity = quantity
            logger.info(f"Product {product_id} quantity set to {quantity} in basket of user {user_id}")
        return await BasketRepository.update_basket(basket, redis)

    @staticmethod
    async def remove_item(user_id: str, product_id: int, redis: Redis) -> Basket:
        basket = await BasketRepository.get_basket(user_id, redis)
        if basket is None:
            raise BasketNotFoundException(user_id)

        remaining = [line for line in basket.items if line.product_id != product_id]
        if len(remaining) == len(basket.items):
            raise BasketItemNotFoundException(user_id, product_id)

        basket.items = remaining
        logger.info(f"Product {product_id} removed from basket of user {user_id}")
        return await BasketRepository.update_basket(basket, redis)
