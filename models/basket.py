from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from models.base import Money


class BasketItem(BaseModel):
    product_id: int
    product_name: str
    price: Money
    quantity: int

    @computed_field
    @property
    def subtotal(self) -> Money:
        return self.price * self.quantity


class Basket(BaseModel):
    user_id: str
    items: list[BasketItem] = []

    @computed_field
    @property
    def total_price(self) -> Money:
        # Recomputed on every read so it can't go stale after a mutation
        return sum((item.subtotal for item in self.items), Decimal("0"))


class BasketItemDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    product_id: int = Field(..., gt=0)
    product_name: str = Field(..., min_length=1, max_length=200)
    price: Money = Field(..., ge=0)
    quantity: int = Field(..., ge=1, le=100)

    def to_item(self) -> BasketItem:
        return BasketItem(**self.model_dump())


class UpdateBasketDTO(BaseModel):
    items: list[BasketItemDTO] = []


class UpdateQuantityDTO(BaseModel):
    quantity: int = Field(..., ge=0, le=100)
