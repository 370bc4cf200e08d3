from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from models.category import CategoryDTO, CategoryCreateDTO, CategoryUpdateDTO
from models.product import ProductDTO, ProductCreateDTO, ProductUpdateDTO
from services.category import CategoryService
from services.product import ProductService
from web.dependencies import get_session

products_router = APIRouter(prefix="/api/products", tags=["products"])
categories_router = APIRouter(prefix="/api/categories", tags=["categories"])


# Products

@products_router.get("", response_model=list[ProductDTO])
async def get_products(session: AsyncSession = Depends(get_session)):
    return await ProductService.get_products(session)


@products_router.get("/category/{category_id}", response_model=list[ProductDTO])
async def get_products_by_category(category_id: int, session: AsyncSession = Depends(get_session)):
    return await ProductService.get_products_by_category(category_id, session)


@products_router.get("/{product_id}", response_model=ProductDTO)
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    return await ProductService.get_product(product_id, session)


@products_router.post("", response_model=ProductDTO, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductCreateDTO, response: Response, session: AsyncSession = Depends(get_session)):
    product = await ProductService.create_product(payload, session)
    response.headers["Location"] = f"/api/products/{product.id}"
    return product


@products_router.put("/{product_id}", response_model=ProductDTO)
async def update_product(product_id: int, payload: ProductUpdateDTO, session: AsyncSession = Depends(get_session)):
    return await ProductService.update_product(product_id, payload, session)


@products_router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: int, session: AsyncSession = Depends(get_session)):
    await ProductService.delete_product(product_id, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Categories

@categories_router.get("", response_model=list[CategoryDTO])
async def get_categories(session: AsyncSession = Depends(get_session)):
    return await CategoryService.get_categories(session)


@categories_router.get("/{category_id}", response_model=CategoryDTO)
async def get_category(category_id: int, session: AsyncSession = Depends(get_session)):
    return await CategoryService.get_category(category_id, session)


@categories_router.post("", response_model=CategoryDTO, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreateDTO, response: Response,
                          session: AsyncSession = Depends(get_session)):
    category = await CategoryService.create_category(payload, session)
    response.headers["Location"] = f"/api/categories/{category.id}"
    return category


@categories_router.put("/{category_id}", response_model=CategoryDTO)
async def update_category(category_id: int, payload: CategoryUpdateDTO,
                          session: AsyncSession = Depends(get_session)):
    return await CategoryService.update_category(category_id, payload, session)


@categories_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a category. Categories that still have products are rejected with 409."""
    await CategoryService.delete_category(category_id, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
