import logging

from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from exceptions import ResourceNotFoundException, ResourceHasDependenciesException
from models.category import CategoryDTO, CategoryCreateDTO, CategoryUpdateDTO
from repositories.category import CategoryRepository
from utils.store_errors import translate_sql_errors

logger = logging.getLogger(__name__)


class CategoryService:

    @staticmethod
    async def get_categories(session: AsyncSession) -> list[CategoryDTO]:
        categories = await CategoryRepository.get_all(session)
        logger.info(f"Listed {len(categories)} categories")
        return categories

    @staticmethod
    async def get_category(category_id: int, session: AsyncSession) -> CategoryDTO:
        category = await CategoryRepository.get_by_id(category_id, session)
        if category is None:
            logger.warning(f"Category {category_id} not found")
            raise ResourceNotFoundException("Category", category_id)
        logger.info(f"Category {category_id} retrieved")
        return category

    @staticmethod
    async def create_category(category_dto: CategoryCreateDTO, session: AsyncSession) -> CategoryDTO:
        category = await CategoryRepository.create(category_dto, session)
        with translate_sql_errors("Category", "create", category_dto.model_dump()):
            await session_commit(session)
        logger.info(f"Category {category.id} '{category.name}' created")
        return category

    @staticmethod
    async def update_category(category_id: int, category_dto: CategoryUpdateDTO,
                              session: AsyncSession) -> CategoryDTO:
        category = await CategoryRepository.update(category_id, category_dto, session)
        if category is None:
            logger.warning(f"Category {category_id} not found for update")
            raise ResourceNotFoundException("Category", category_id)
        with translate_sql_errors("Category", "update", category_dto.model_dump()):
            await session_commit(session)
        logger.info(f"Category {category_id} updated")
        return category

    @staticmethod
    async def delete_category(category_id: int, session: AsyncSession) -> None:
        """
        Delete a category that no product references.

        Raises:
            ResourceHasDependenciesException: If at least one product belongs to the category
            ResourceNotFoundException: If the category does not exist
        """
        if await CategoryRepository.has_products(category_id, session):
            logger.warning(f"Category {category_id} still has products, delete rejected")
            raise ResourceHasDependenciesException("Category", category_id, "Product")
        deleted = await CategoryRepository.delete(category_id, session)
        if not deleted:
            logger.warning(f"Category {category_id} not found for delete")
            raise ResourceNotFoundException("Category", category_id)
        with translate_sql_errors("Category", "delete", {"id": category_id}, dependents="Product"):
            await session_commit(session)
        logger.info(f"Category {category_id} deleted")
