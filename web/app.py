"""
FastAPI application factories, one per service.

Each factory accepts an already-built store client so tests and embedding
callers can inject one. Without it, the lifespan creates the client from
config and closes it on shutdown.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.asynchronous.collection import AsyncCollection
from redis.asyncio import Redis
from sqlalchemy import text

import cache
import config
import db
import document_store
from enums.service_name import ServiceName
from middleware.trace_id import TraceIdMiddleware
from utils.error_handler import register_exception_handlers
from web.basket_router import basket_router
from web.catalog_router import products_router, categories_router
from web.order_router import order_router

logger = logging.getLogger(__name__)


def _build_app(service: ServiceName, title: str, lifespan) -> FastAPI:
    app = FastAPI(title=title, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TraceIdMiddleware)
    register_exception_handlers(app)
    app.state.service = service
    return app


def _health_response(service: ServiceName, healthy: bool) -> JSONResponse:
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "healthy" if healthy else "unhealthy", "service": service.value},
    )


def create_basket_app(redis: Redis | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_client = redis is None
        app.state.redis = cache.create_redis_client() if owns_client else redis
        logger.info("Basket service started")
        yield
        if owns_client:
            await cache.close_redis_client(app.state.redis)
        logger.info("Basket service stopped")

    app = _build_app(ServiceName.BASKET, "Basket API", lifespan)
    app.include_router(basket_router)

    @app.get("/health", tags=["health"])
    async def health(request: Request):
        try:
            healthy = bool(await request.app.state.redis.ping())
        except Exception as e:
            logger.error(f"Cache store health check failed: {e}")
            healthy = False
        return _health_response(ServiceName.BASKET, healthy)

    return app


def create_catalog_app(database_url: str | None = None, seed: bool | None = None) -> FastAPI:
    seed = config.CATALOG_SEED_DATA if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.init_db(database_url or config.CATALOG_DB_URL)
        await db.create_db_and_tables()
        if seed:
            async with db.get_db_session() as session:
                await db.seed_catalog(session)
        logger.info("Catalog service started")
        yield
        await db.dispose_db()
        logger.info("Catalog service stopped")

    app = _build_app(ServiceName.CATALOG, "Catalog API", lifespan)
    app.include_router(products_router)
    app.include_router(categories_router)

    @app.get("/health", tags=["health"])
    async def health():
        try:
            async with db.get_db_session() as session:
                await session.execute(text("SELECT 1"))
            healthy = True
        except Exception as e:
            logger.error(f"Relational store health check failed: {e}")
            healthy = False
        return _health_response(ServiceName.CATALOG, healthy)

    return app


def create_ordering_app(collection: AsyncCollection | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if collection is None:
            client = document_store.create_mongo_client()
            app.state.orders_collection = document_store.get_orders_collection(client)
            await document_store.ensure_order_indexes(app.state.orders_collection)
        else:
            app.state.orders_collection = collection
        logger.info("Ordering service started")
        yield
        if client is not None:
            await client.close()
        logger.info("Ordering service stopped")

    app = _build_app(ServiceName.ORDERING, "Ordering API", lifespan)
    app.include_router(order_router)

    @app.get("/health", tags=["health"])
    async def health(request: Request):
        try:
            await request.app.state.orders_collection.database.command("ping")
            healthy = True
        except Exception as e:
            logger.error(f"Document store health check failed: {e}")
            healthy = False
        return _health_response(ServiceName.ORDERING, healthy)

    return app


def create_app(service: ServiceName) -> FastAPI:
    factories = {
        ServiceName.BASKET: create_basket_app,
        ServiceName.CATALOG: create_catalog_app,
        ServiceName.ORDERING: create_ordering_app,
    }
    return factories[service]()
