from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any
import logging

from sqlalchemy import event, Engine, select, func, Result, CursorResult
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.pool import StaticPool

import config
from models import Base, Category, Product

logger = logging.getLogger(__name__)

# SQL echo stays off, statements would drown the service log
sql_echo = False

engine: AsyncEngine | None = None
session_maker: async_sessionmaker[AsyncSession] | None = None


def init_db(url: str | None = None) -> AsyncEngine:
    """
    Build the catalog engine and session factory.

    In-memory SQLite URLs share one connection (StaticPool) so every session
    sees the same database.
    """
    global engine, session_maker
    url = url or config.CATALOG_DB_URL
    engine_kwargs = {"echo": sql_echo}
    if url.startswith("sqlite"):
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            db_path = url.split(":///", 1)[-1]
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(url, **engine_kwargs)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return engine


async def dispose_db() -> None:
    global engine, session_maker
    if engine is not None:
        await engine.dispose()
    engine = None
    session_maker = None


@asynccontextmanager
async def get_db_session() -> AsyncSession:
    if session_maker is None:
        init_db()
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def session_execute(stmt, session: AsyncSession) -> Result[Any] | CursorResult[Any]:
    return await session.execute(stmt)


async def session_flush(session: AsyncSession) -> None:
    await session.flush()


async def session_commit(session: AsyncSession) -> None:
    await session.commit()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    # Only SQLite needs foreign keys switched on per connection
    if "sqlite" not in type(dbapi_connection).__module__.lower():
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def create_db_and_tables():
    if engine is None:
        init_db()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_catalog(session: AsyncSession) -> bool:
    """
    Insert the default categories and one product per category on an empty database.

    Returns:
        True if seed data was inserted, False if categories already existed
    """
    count = await session_execute(select(func.count(Category.id)), session)
    if count.scalar() > 0:
        return False

    electronics = Category(name="Electronics", description="Electronic devices and accessories")
    clothing = Category(name="Clothing", description="Apparel and fashion items")
    books = Category(name="Books", description="Books and publications")
    session.add_all([electronics, clothing, books])
    await session_flush(session)

    now = datetime.now(timezone.utc)
    session.add_all([
        Product(name="Laptop", description="High-performance laptop", price=Decimal("999.99"),
                stock=10, category_id=electronics.id, created_by="System", created_at=now),
        Product(name="T-Shirt", description="Cotton t-shirt", price=Decimal("19.99"),
                stock=50, category_id=clothing.id, created_by="System", created_at=now),
        Product(name="Programming Book", description="Learn programming", price=Decimal("39.99"),
                stock=25, category_id=books.id, created_by="System", created_at=now),
    ])
    await session_commit(session)
    logger.info("Seeded catalog with 3 categories and 3 products")
    return True
