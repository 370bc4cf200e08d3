from typing import AsyncIterator

from fastapi import Request
from pymongo.asynchronous.collection import AsyncCollection
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_db_session


def get_redis(request: Request) -> Redis:
    return request.app.state.redis


async def get_session() -> AsyncIterator[AsyncSession]:
    async with get_db_session() as session:
        yield session


def get_orders_collection(request: Request) -> AsyncCollection:
    return request.app.state.orders_collection
