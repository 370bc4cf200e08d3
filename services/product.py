import logging

from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from exceptions import ResourceNotFoundException, ForeignKeyViolationException
from models.product import ProductDTO, ProductCreateDTO, ProductUpdateDTO
from repositories.product import ProductRepository, CATEGORY_REFERENCE
from utils.store_errors import translate_sql_errors

logger = logging.getLogger(__name__)


class ProductService:

    @staticmethod
    async def _ensure_category_exists(category_id: int, session: AsyncSession) -> None:
        if not await ProductRepository.category_exists(category_id, session):
            logger.warning(f"Product references missing category {category_id}")
            raise ForeignKeyViolationException("Product", "Category", category_id)

    @staticmethod
    async def get_products(session: AsyncSession) -> list[ProductDTO]:
        products = await ProductRepository.get_all(session)
        logger.info(f"Listed {len(products)} products")
        return products

    @staticmethod
    async def get_product(product_id: int, session: AsyncSession) -> ProductDTO:
        product = await ProductRepository.get_by_id(product_id, session)
        if product is None:
            logger.warning(f"Product {product_id} not found")
            raise ResourceNotFoundException("Product", product_id)
        logger.info(f"Product {product_id} retrieved")
        return product

    @staticmethod
    async def get_products_by_category(category_id: int, session: AsyncSession) -> list[ProductDTO]:
        products = await ProductRepository.get_by_category_id(category_id, session)
        logger.info(f"Listed {len(products)} products of category {category_id}")
        return products

    @staticmethod
    async def create_product(product_dto: ProductCreateDTO, session: AsyncSession) -> ProductDTO:
        await ProductService._ensure_category_exists(product_dto.category_id, session)
        product = await ProductRepository.create(product_dto, session)
        with translate_sql_errors("Product", "create", product_dto.model_dump(), references=CATEGORY_REFERENCE):
            await session_commit(session)
        logger.info(f"Product {product.id} '{product.name}' created in category {product.category_id}")
        return product

    @staticmethod
    async def update_product(product_id: int, product_dto: ProductUpdateDTO, session: AsyncSession) -> ProductDTO:
        await ProductService.get_product(product_id, session)
        await ProductService._ensure_category_exists(product_dto.category_id, session)
        product = await ProductRepository.update(product_id, product_dto, session)
        if product is None:
            raise ResourceNotFoundException("Product", product_id)
        with translate_sql_errors("Product", "update", product_dto.model_dump(), references=CATEGORY_REFERENCE):
            await session_commit(session)
        logger.info(f"Product {product_id} updated")
        return product

    @staticmethod
    async def delete_product(product_id: int, session: AsyncSession) -> None:
        deleted = await ProductRepository.delete(product_id, session)
        if not deleted:
            logger.warning(f"Product {product_id} not found for delete")
            raise ResourceNotFoundException("Product", product_id)
        with translate_sql_errors("Product", "delete", {"id": product_id}):
            await session_commit(session)
        logger.info(f"Product {product_id} deleted")
