from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.category import Category, CategoryDTO, CategoryCreateDTO, CategoryUpdateDTO
from models.product import Product
from utils.store_errors import translate_sql_errors


class CategoryRepository:
    @staticmethod
    async def get_all(session: AsyncSession) -> list[CategoryDTO]:
        stmt = select(Category).order_by(Category.id)
        with translate_sql_errors("Category", "list"):
            categories = await session_execute(stmt, session)
        return [CategoryDTO.model_validate(category, from_attributes=True)
                for category in categories.scalars().all()]

    @staticmethod
    async def get_by_id(category_id: int, session: AsyncSession) -> CategoryDTO | None:
        stmt = select(Category).where(Category.id == category_id)
        with translate_sql_errors("Category", "get"):
            category = await session_execute(stmt, session)
        category = category.scalar()
        if category is None:
            return None
        return CategoryDTO.model_validate(category, from_attributes=True)

    @staticmethod
    async def create(category_dto: CategoryCreateDTO, session: AsyncSession) -> CategoryDTO:
        category = Category(**category_dto.model_dump())
        session.add(category)
        with translate_sql_errors("Category", "create", category_dto.model_dump()):
            await session_flush(session)
        return CategoryDTO.model_validate(category, from_attributes=True)

    @staticmethod
    async def update(category_id: int, category_dto: CategoryUpdateDTO, session: AsyncSession) -> CategoryDTO | None:
        stmt = select(Category).where(Category.id == category_id)
        with translate_sql_errors("Category", "update", category_dto.model_dump()):
            category = await session_execute(stmt, session)
            category = category.scalar()
            if category is None:
                return None
            category.name = category_dto.name
            category.description = category_dto.description
            await session_flush(session)
        return CategoryDTO.model_validate(category, from_attributes=True)

    @staticmethod
    async def delete(category_id: int, session: AsyncSession) -> bool:
        stmt = select(Category).where(Category.id == category_id)
        with translate_sql_errors("Category", "delete", {"id": category_id}, dependents="Product"):
            category = await session_execute(stmt, session)
            category = category.scalar()
            if category is None:
                return False
            await session.delete(category)
            await session_flush(session)
        return True

    @staticmethod
    async def exists(category_id: int, session: AsyncSession) -> bool:
        stmt = select(func.count(Category.id)).where(Category.id == category_id)
        with translate_sql_errors("Category", "exists"):
            count = await session_execute(stmt, session)
        return count.scalar() > 0

    @staticmethod
    async def has_products(category_id: int, session: AsyncSession) -> bool:
        stmt = select(func.count(Product.id)).where(Product.category_id == category_id)
        with translate_sql_errors("Category", "has_products"):
            count = await session_execute(stmt, session)
        return count.scalar() > 0
