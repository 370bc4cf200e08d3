from fastapi import APIRouter, Depends, Response, status
from pymongo.asynchronous.collection import AsyncCollection

from models.order import CreateOrderDTO, Order, UpdateOrderStatusDTO
from services.order import OrderService
from web.dependencies import get_orders_collection

order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.get("", response_model=list[Order])
async def get_orders(collection: AsyncCollection = Depends(get_orders_collection)):
    """All orders, newest first."""
    return await OrderService.get_orders(collection)


@order_router.get("/user/{user_id}", response_model=list[Order])
async def get_orders_by_user(user_id: str, collection: AsyncCollection = Depends(get_orders_collection)):
    return await OrderService.get_orders_by_user(user_id, collection)


@order_router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str, collection: AsyncCollection = Depends(get_orders_collection)):
    return await OrderService.get_order(order_id, collection)


@order_router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(payload: CreateOrderDTO, response: Response,
                       collection: AsyncCollection = Depends(get_orders_collection)):
    """
    Create a Pending order. The order number, order date and total amount are set
    by the server, the total is computed once from the submitted items.
    """
    order = await OrderService.create_order(payload, collection)
    response.headers["Location"] = f"/api/orders/{order.id}"
    return order


@order_router.put("/{order_id}/status", response_model=Order)
async def update_order_status(order_id: str, payload: UpdateOrderStatusDTO,
                              collection: AsyncCollection = Depends(get_orders_collection)):
    return await OrderService.update_status(order_id, payload.status, collection)


@order_router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_order(order_id: str, collection: AsyncCollection = Depends(get_orders_collection)):
    """Cancel an order. Only Pending and Confirmed orders can be cancelled."""
    await OrderService.cancel_order(order_id, collection)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
