from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, computed_field

from enums.order_status import OrderStatus
from models.base import Money


class Address(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""


class OrderItem(BaseModel):
    product_id: int
    product_name: str = ""
    price: Money
    quantity: int

    @computed_field
    @property
    def subtotal(self) -> Money:
        return self.price * self.quantity


class Order(BaseModel):
    """
    Stored order. total_amount is fixed at creation and never recalculated,
    items are a snapshot of the submitted line items.
    """
    id: str | None = None
    order_number: str
    user_id: str
    order_date: datetime
    status: OrderStatus = OrderStatus.PENDING
    total_amount: Money = Decimal("0")
    items: list[OrderItem] = []
    shipping_address: Address


class CreateOrderDTO(BaseModel):
    # Shape only, the service raises the domain errors (empty order, missing address field, ...)
    user_id: str = ""
    items: list[OrderItem] = []
    shipping_address: Address | None = None


class UpdateOrderStatusDTO(BaseModel):
    status: OrderStatus = Field(...)
