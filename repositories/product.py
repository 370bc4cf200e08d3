from datetime import datetime, timezone

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from db import session_execute, session_flush
from models.category import Category
from models.product import Product, ProductDTO, ProductCreateDTO, ProductUpdateDTO
from utils.store_errors import translate_sql_errors

CATEGORY_REFERENCE = ("Category", "category_id")


def _to_dto(product: Product) -> ProductDTO:
    product_dto = ProductDTO.model_validate(product, from_attributes=True)
    product_dto.category_name = product.category.name if product.category is not None else None
    return product_dto


class ProductRepository:
    @staticmethod
    async def get_all(session: AsyncSession) -> list[ProductDTO]:
        stmt = select(Product).options(selectinload(Product.category)).order_by(Product.id)
        with translate_sql_errors("Product", "list"):
            products = await session_execute(stmt, session)
        return [_to_dto(product) for product in products.scalars().all()]

    @staticmethod
    async def get_by_id(product_id: int, session: AsyncSession) -> ProductDTO | None:
        stmt = select(Product).options(selectinload(Product.category)).where(Product.id == product_id)
        with translate_sql_errors("Product", "get"):
            product = await session_execute(stmt, session)
        product = product.scalar()
        if product is None:
            return None
        return _to_dto(product)

    @staticmethod
    async def get_by_category_id(category_id: int, session: AsyncSession) -> list[ProductDTO]:
        stmt = (select(Product)
                .options(selectinload(Product.category))
                .where(Product.category_id == category_id)
                .order_by(Product.id))
        with translate_sql_errors("Product", "list_by_category"):
            products = await session_execute(stmt, session)
        return [_to_dto(product) for product in products.scalars().all()]

    @staticmethod
    async def create(product_dto: ProductCreateDTO, session: AsyncSession) -> ProductDTO:
        values = product_dto.model_dump()
        product = Product(**values, created_at=datetime.now(timezone.utc))
        session.add(product)
        with translate_sql_errors("Product", "create", values, references=CATEGORY_REFERENCE):
            await session_flush(session)
            await session.refresh(product, attribute_names=["category"])
        return _to_dto(product)

    @staticmethod
    async def update(product_id: int, product_dto: ProductUpdateDTO, session: AsyncSession) -> ProductDTO | None:
        values = product_dto.model_dump()
        stmt = select(Product).where(Product.id == product_id)
        with translate_sql_errors("Product", "update", values, references=CATEGORY_REFERENCE):
            product = await session_execute(stmt, session)
            product = product.scalar()
            if product is None:
                return None
            for field, value in values.items():
                setattr(product, field, value)
            product.updated_at = datetime.now(timezone.utc)
            await session_flush(session)
            await session.refresh(product, attribute_names=["category"])
        return _to_dto(product)

    @staticmethod
    async def delete(product_id: int, session: AsyncSession) -> bool:
        stmt = select(Product).where(Product.id == product_id)
        with translate_sql_errors("Product", "delete", {"id": product_id}):
            product = await session_execute(stmt, session)
            product = product.scalar()
            if product is None:
                return False
            await session.delete(product)
            await session_flush(session)
        return True

    @staticmethod
    async def category_exists(category_id: int, session: AsyncSession) -> bool:
        stmt = select(func.count(Category.id)).where(Category.id == category_id)
        with translate_sql_errors("Product", "category_exists"):
            count = await session_execute(stmt, session)
        return count.scalar() > 0
