from fastapi import APIRouter, Depends, Response, status
from redis.asyncio import Redis

from models.basket import Basket, BasketItemDTO, UpdateBasketDTO, UpdateQuantityDTO
from services.basket import BasketService
from web.dependencies import get_redis

basket_router = APIRouter(prefix="/api/basket", tags=["basket"])


@basket_router.get("/{user_id}", response_model=Basket)
async def get_basket(user_id: str, redis: Redis = Depends(get_redis)):
    """Basket of the user. Users without a stored basket get an empty one."""
    return await BasketService.get_basket(user_id, redis)


@basket_router.post("/{user_id}", response_model=Basket)
async def update_basket(user_id: str, payload: UpdateBasketDTO, redis: Redis = Depends(get_redis)):
    """Replace the whole basket of the user and reset its expiry."""
    return await BasketService.update_basket(user_id, payload.items, redis)


@basket_router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_basket(user_id: str, redis: Redis = Depends(get_redis)):
    await BasketService.delete_basket(user_id, redis)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@basket_router.post("/{user_id}/items", response_model=Basket)
async def add_item(user_id: str, payload: BasketItemDTO, redis: Redis = Depends(get_redis)):
    return await BasketService.add_item(user_id, payload, redis)


@basket_router.put("/{user_id}/items/{product_id}", response_model=Basket)
async def update_item_quantity(user_id: str, product_id: int, payload: UpdateQuantityDTO,
                               redis: Redis = Depends(get_redis)):
    """Set the quantity of one item. Quantity 0 removes the item."""
    return await BasketService.update_item_quantity(user_id, product_id, payload.quantity, redis)


@basket_router.delete("/{user_id}/items/{product_id}", response_model=Basket)
async def remove_item(user_id: str, product_id: int, redis: Redis = Depends(get_redis)):
    return await BasketService.remove_item(user_id, product_id, redis)
