"""
Tests for CategoryService and ProductService referential rules.
"""
import logging
from decimal import Decimal

import pytest

from db import seed_catalog
from exceptions import (
    ResourceNotFoundException,
    ResourceHasDependenciesException,
    ForeignKeyViolationException,
)
from models.category import CategoryCreateDTO, CategoryUpdateDTO
from models.product import ProductCreateDTO, ProductUpdateDTO
from services.category import CategoryService
from services.product import ProductService


def _product(category_id, name="Laptop"):
    return ProductCreateDTO(name=name, price=Decimal("10.00"), stock=1, category_id=category_id)


class TestCategoryService:

    @pytest.mark.asyncio
    async def test_get_missing_category_raises(self, test_session):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await CategoryService.get_category(404, test_session)

        assert exc_info.value.details == {"resource_type": "Category", "resource_id": 404}

    @pytest.mark.asyncio
    async def test_update_category(self, test_session):
        category = await CategoryService.create_category(CategoryCreateDTO(name="Books"), test_session)

        updated = await CategoryService.update_category(
            category.id, CategoryUpdateDTO(name="Literature", description="Reading"), test_session)

        assert updated.name == "Literature"
        assert updated.description == "Reading"

    @pytest.mark.asyncio
    async def test_update_missing_category_raises(self, test_session):
        with pytest.raises(ResourceNotFoundException):
            await CategoryService.update_category(404, CategoryUpdateDTO(name="X"), test_session)

    @pytest.mark.asyncio
    async def test_delete_category_with_products_is_conflict(self, test_session):
        """A category referenced by at least one product cannot be deleted."""
        category = await CategoryService.create_category(CategoryCreateDTO(name="Books"), test_session)
        await ProductService.create_product(_product(category.id), test_session)

        with pytest.raises(ResourceHasDependenciesException):
            await CategoryService.delete_category(category.id, test_session)

        assert (await CategoryService.get_category(category.id, test_session)).name == "Books"

    @pytest.mark.asyncio
    async def test_delete_empty_category(self, test_session):
        category = await CategoryService.create_category(CategoryCreateDTO(name="Books"), test_session)

        await CategoryService.delete_category(category.id, test_session)

        assert await CategoryService.get_categories(test_session) == []

    @pytest.mark.asyncio
    async def test_delete_missing_category_raises_not_found(self, test_session):
        with pytest.raises(ResourceNotFoundException):
            await CategoryService.delete_category(404, test_session)


class TestProductService:

    @pytest.mark.asyncio
    async def test_create_with_unknown_category_is_rejected(self, test_session):
        with pytest.raises(ForeignKeyViolationException) as exc_info:
            await ProductService.create_product(_product(category_id=404), test_session)

        assert exc_info.value.details["referenced_resource_id"] == 404

    @pytest.mark.asyncio
    async def test_update_with_unknown_category_is_rejected(self, test_session):
        category = await CategoryService.create_category(CategoryCreateDTO(name="Books"), test_session)
        product = await ProductService.create_product(_product(category.id), test_session)

        with pytest.raises(ForeignKeyViolationException):
            await ProductService.update_product(
                product.id,
                ProductUpdateDTO(name="Laptop", price=Decimal("10.00"), stock=1, category_id=404),
                test_session,
            )

    @pytest.mark.asyncio
    async def test_update_missing_product_raises_not_found(self, test_session):
        with pytest.raises(ResourceNotFoundException):
            await ProductService.update_product(
                404, ProductUpdateDTO(name="Laptop", price=Decimal("10.00"), stock=1, category_id=1), test_session)

    @pytest.mark.asyncio
    async def test_delete_product_is_unrestricted(self, test_session):
        category = await CategoryService.create_category(CategoryCreateDTO(name="Books"), test_session)
        product = await ProductService.create_product(_product(category.id), test_session)

        await ProductService.delete_product(product.id, test_session)

        with pytest.raises(ResourceNotFoundException):
            await ProductService.get_product(product.id, test_session)

    @pytest.mark.asyncio
    async def test_delete_missing_product_raises_not_found(self, test_session):
        with pytest.raises(ResourceNotFoundException):
            await ProductService.delete_product(404, test_session)

    @pytest.mark.asyncio
    async def test_reads_are_logged(self, test_session, caplog):
        category = await CategoryService.create_category(CategoryCreateDTO(name="Books"), test_session)
        await ProductService.create_product(_product(category.id), test_session)

        with caplog.at_level(logging.INFO):
            await ProductService.get_products(test_session)
            await ProductService.get_products_by_category(category.id, test_session)
            await CategoryService.get_categories(test_session)

        assert "Listed 1 products" in caplog.text
        assert f"Listed 1 products of category {category.id}" in caplog.text
        assert "Listed 1 categories" in caplog.text


class TestSeedCatalog:

    @pytest.mark.asyncio
    async def test_seeds_empty_database_once(self, test_session):
        assert await seed_catalog(test_session) is True
        assert await seed_catalog(test_session) is False

        categories = await CategoryService.get_categories(test_session)
        products = await ProductService.get_products(test_session)
        assert [category.name for category in categories] == ["Electronics", "Clothing", "Books"]
        assert {product.name: product.price for product in products} == {
            "Laptop": Decimal("999.99"),
            "T-Shirt": Decimal("19.99"),
            "Programming Book": Decimal("39.99"),
        }
