"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Environment must be set before config is imported anywhere
os.environ["RUNTIME_ENVIRONMENT"] = "TEST"
os.environ.setdefault("CATALOG_DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CATALOG_SEED_DATA", "false")
os.environ.setdefault("BASKET_TTL_HOURS", "24")
os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite, foreign keys on)."""
    # db registers the PRAGMA foreign_keys listener
    from db import Base

    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


# ============================================================================
# Document Store Fixtures
# ============================================================================

@pytest.fixture
def orders_collection():
    """Mocked orders collection with the async methods the repository awaits."""
    collection = MagicMock()
    collection.name = "orders"
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.replace_one = AsyncMock()
    collection.create_index = AsyncMock()

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    collection.cursor = cursor
    return collection


@pytest.fixture
def shipping_address_data():
    return {
        "street": "1 Main Street",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "USA",
    }


@pytest.fixture
def make_order(shipping_address_data):
    """Factory for stored orders with a given status."""
    from enums.order_status import OrderStatus
    from models.order import Address, Order, OrderItem

    def _make_order(status=OrderStatus.PENDING, order_id="64b7f0c2a1b2c3d4e5f60718"):
        return Order(
            id=order_id,
            order_number="ORD-20240101120000-1234",
            user_id="user-1",
            order_date=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            status=status,
            total_amount=Decimal("20.00"),
            items=[OrderItem(product_id=1, product_name="Widget", price=Decimal("10.00"), quantity=2)],
            shipping_address=Address(**shipping_address_data),
        )

    return _make_order
