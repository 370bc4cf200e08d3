from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from models.base import Base, Money


class Product(Base):
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, unique=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(String(1000), nullable=True)
    price = Column(Numeric(18, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=False, index=True)

    # Audit fields
    created_by = Column(String(100), nullable=False, default="System")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relations
    category = relationship('Category', back_populates='products')

    __table_args__ = (
        CheckConstraint('stock >= 0', name='check_product_stock_non_negative'),
    )


class ProductUpdateDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    price: Money = Field(..., gt=0, max_digits=18, decimal_places=2)
    stock: int = Field(..., ge=0)
    category_id: int = Field(..., gt=0)


class ProductCreateDTO(ProductUpdateDTO):
    created_by: str = Field("System", min_length=1, max_length=100)


class ProductDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    name: str | None = None
    description: str | None = None
    price: Money | None = None
    stock: int | None = None
    category_id: int | None = None
    category_name: str | None = None  # Filled from the loaded category relation
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
