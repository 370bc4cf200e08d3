from datetime import datetime, timezone
from decimal import Decimal
import logging
import random

from pymongo.asynchronous.collection import AsyncCollection

from enums.order_status import OrderStatus
from exceptions import (
    OrderNotFoundException,
    OrderCannotBeCancelledException,
    EmptyOrderException,
    InvalidUserIdException,
    InvalidShippingAddressException,
    InvalidOrderItemException,
)
from models.order import Address, CreateOrderDTO, Order, OrderItem
from repositories.order import OrderRepository
from utils.order_state_machine import OrderStateMachine

logger = logging.getLogger(__name__)

MAX_USER_ID_LENGTH = 50
MAX_PRODUCT_NAME_LENGTH = 200
MAX_ITEM_QUANTITY = 100
REQUIRED_ADDRESS_FIELDS = ("street", "city", "state", "zip_code", "country")


class OrderService:

    @staticmethod
    def generate_order_number() -> str:
        """ORD-<yyyyMMddHHmmss in UTC>-<4 random digits>"""
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        return f"ORD-{timestamp}-{random.randint(1000, 9999)}"

    @staticmethod
    def calculate_total_amount(items: list[OrderItem]) -> Decimal:
        return sum((item.price * item.quantity for item in items), Decimal("0"))

    @staticmethod
    def _validate_user_id(user_id: str) -> None:
        if not user_id or not user_id.strip():
            raise InvalidUserIdException()
        if len(user_id) > MAX_USER_ID_LENGTH:
            raise InvalidUserIdException(f"User ID must not exceed {MAX_USER_ID_LENGTH} characters.")

    @staticmethod
    def _validate_shipping_address(address: Address | None) -> None:
        for field in REQUIRED_ADDRESS_FIELDS:
            value = getattr(address, field, None) if address is not None else None
            if not value or not value.strip():
                raise InvalidShippingAddressException(field)

    @staticmethod
    def _validate_item(item: OrderItem) -> None:
        if item.product_id <= 0:
            raise InvalidOrderItemException(item.product_id, "Product ID must be greater than 0.")
        if not item.product_name or not item.product_name.strip():
            raise InvalidOrderItemException(item.product_id, "Product name is required.")
        if len(item.product_name) > MAX_PRODUCT_NAME_LENGTH:
            raise InvalidOrderItemException(
                item.product_id, f"Product name must not exceed {MAX_PRODUCT_NAME_LENGTH} characters.")
        if item.price <= 0:
            raise InvalidOrderItemException(item.product_id, "Price must be greater than 0.")
        if item.quantity < 1 or item.quantity > MAX_ITEM_QUANTITY:
            raise InvalidOrderItemException(
                item.product_id, f"Quantity must be between 1 and {MAX_ITEM_QUANTITY}.")

    @staticmethod
    async def get_orders(collection: AsyncCollection) -> list[Order]:
        orders = await OrderRepository.get_all(collection)
        logger.info(f"Listed {len(orders)} orders")
        return orders

    @staticmethod
    async def get_order(order_id: str, collection: AsyncCollection) -> Order:
        order = await OrderRepository.get_by_id(order_id, collection)
        if order is None:
            logger.warning(f"Order {order_id} not found")
            raise OrderNotFoundException(order_id)
        return order

    @staticmethod
    async def get_orders_by_user(user_id: str, collection: AsyncCollection) -> list[Order]:
        orders = await OrderRepository.get_by_user_id(user_id, collection)
        logger.info(f"Listed {len(orders)} orders of user {user_id}")
        return orders

    @staticmethod
    async def create_order(order_dto: CreateOrderDTO, collection: AsyncCollection) -> Order:
        """
        Create a Pending order.

        Flow:
        1. Reject empty item lists and blank user ids
        2. Reject addresses missing a required field, naming the field
        3. Validate every line item
        4. Generate the order number, stamp the UTC order date
        5. Compute the total amount once, it is never recalculated afterwards
        6. Persist and return the stored order with its store-assigned id

        Raises:
            DuplicateOrderNumberException: If the generated order number already exists.
                The error is retryable, the service does not retry on its own.
        """
        if not order_dto.items:
            raise EmptyOrderException()
        OrderService._validate_user_id(order_dto.user_id)
        OrderService._validate_shipping_address(order_dto.shipping_address)
        for item in order_dto.items:
            OrderService._validate_item(item)

        items = [item.model_copy() for item in order_dto.items]
        order = Order(
            order_number=OrderService.generate_order_number(),
            user_id=order_dto.user_id,
            order_date=datetime.now(timezone.utc),
            status=OrderStatus.PENDING,
            total_amount=OrderService.calculate_total_amount(items),
            items=items,
            shipping_address=order_dto.shipping_address.model_copy(),
        )
        logger.info(f"Generated order number: {order.order_number}, Total: {order.total_amount}")

        created = await OrderRepository.create(order, collection)
        logger.info(f"✅ Order {created.id} created for user {created.user_id} (Status: {created.status.value})")
        return created

    @staticmethod
    async def update_status(order_id: str, new_status: OrderStatus, collection: AsyncCollection) -> Order:
        order = await OrderService.get_order(order_id, collection)
        OrderStateMachine.validate_transition(order_id, order.status, new_status)

        order.status = new_status
        updated = await OrderRepository.update(order, collection)
        if updated is None:
            raise OrderNotFoundException(order_id)
        return updated

    @staticmethod
    async def cancel_order(order_id: str, collection: AsyncCollection) -> Order:
        order = await OrderService.get_order(order_id, collection)
        if not OrderStateMachine.can_cancel(order.status):
            logger.warning(f"Cannot cancel order {order_id} with status {order.status.value}")
            raise OrderCannotBeCancelledException(order_id, order.status.value)

        order.status = OrderStatus.CANCELLED
        updated = await OrderRepository.update(order, collection)
        if updated is None:
            raise OrderNotFoundException(order_id)
        logger.info(f"Order {order_id} cancelled")
        return updated
