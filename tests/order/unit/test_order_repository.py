"""
Tests for OrderRepository document mapping against a mocked collection.
"""
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from bson.decimal128 import Decimal128
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError, NetworkTimeout

from enums.order_status import OrderStatus
from exceptions import DuplicateOrderNumberException, StoreUnavailableException, StoreTimeoutException
from repositories.order import OrderRepository

ORDER_ID = "64b7f0c2a1b2c3d4e5f60718"


def _document(status="Pending"):
    return {
        "_id": ObjectId(ORDER_ID),
        "order_number": "ORD-20240101120000-1234",
        "user_id": "user-1",
        "order_date": datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        "status": status,
        "total_amount": Decimal128("20.00"),
        "items": [{"product_id": 1, "product_name": "Widget", "price": Decimal128("10.00"), "quantity": 2}],
        "shipping_address": {
            "street": "1 Main Street", "city": "Springfield", "state": "IL", "zip_code": "62701", "country": "USA",
        },
    }


class TestOrderRepositoryReads:

    @pytest.mark.asyncio
    async def test_get_by_id_maps_document(self, orders_collection):
        orders_collection.find_one.return_value = _document("Confirmed")

        order = await OrderRepository.get_by_id(ORDER_ID, orders_collection)

        assert order.id == ORDER_ID
        assert order.status == OrderStatus.CONFIRMED
        assert order.total_amount == Decimal("20.00")
        assert order.items[0].price == Decimal("10.00")
        orders_collection.find_one.assert_awaited_once_with({"_id": ObjectId(ORDER_ID)})

    @pytest.mark.asyncio
    async def test_malformed_id_is_absent(self, orders_collection):
        assert await OrderRepository.get_by_id("not-an-object-id", orders_collection) is None
        orders_collection.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_document_returns_none(self, orders_collection):
        assert await OrderRepository.get_by_id(ORDER_ID, orders_collection) is None

    @pytest.mark.asyncio
    async def test_get_by_user_id_sorts_newest_first(self, orders_collection):
        orders_collection.cursor.to_list.return_value = [_document()]

        orders = await OrderRepository.get_by_user_id("user-1", orders_collection)

        assert len(orders) == 1
        orders_collection.find.assert_called_once_with({"user_id": "user-1"})
        orders_collection.cursor.sort.assert_called_once_with("order_date", DESCENDING)

    @pytest.mark.asyncio
    async def test_get_by_order_number(self, orders_collection):
        orders_collection.find_one.return_value = _document()

        order = await OrderRepository.get_by_order_number("ORD-20240101120000-1234", orders_collection)

        assert order.order_number == "ORD-20240101120000-1234"
        orders_collection.find_one.assert_awaited_once_with({"order_number": "ORD-20240101120000-1234"})


class TestOrderRepositoryWrites:

    @pytest.mark.asyncio
    async def test_create_stores_decimal128_and_returns_store_id(self, orders_collection, make_order):
        orders_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId(ORDER_ID))
        order = make_order(order_id=None)

        created = await OrderRepository.create(order, orders_collection)

        document = orders_collection.insert_one.await_args.args[0]
        assert "id" not in document
        assert document["status"] == "Pending"
        assert document["total_amount"] == Decimal128("20.00")
        assert document["items"][0]["price"] == Decimal128("10.00")
        assert "subtotal" not in document["items"][0]
        assert created.id == ORDER_ID

    @pytest.mark.asyncio
    async def test_update_replaces_whole_document(self, orders_collection, make_order):
        orders_collection.replace_one.return_value = MagicMock(matched_count=1)
        order = make_order(OrderStatus.CONFIRMED, order_id=ORDER_ID)

        updated = await OrderRepository.update(order, orders_collection)

        selector, document = orders_collection.replace_one.await_args.args
        assert selector == {"_id": ObjectId(ORDER_ID)}
        assert document["status"] == "Confirmed"
        assert updated is order

    @pytest.mark.asyncio
    async def test_update_of_missing_document_returns_none(self, orders_collection, make_order):
        orders_collection.replace_one.return_value = MagicMock(matched_count=0)

        assert await OrderRepository.update(make_order(order_id=ORDER_ID), orders_collection) is None


class TestOrderRepositoryStoreFailures:

    @pytest.mark.asyncio
    async def test_duplicate_order_number(self, orders_collection, make_order):
        orders_collection.insert_one.side_effect = DuplicateKeyError(
            "E11000 duplicate key error collection: OrderingDb.orders index: order_number_unique",
            11000,
            {"keyPattern": {"order_number": 1}, "keyValue": {"order_number": "ORD-20240101120000-1234"}},
        )

        with pytest.raises(DuplicateOrderNumberException) as exc_info:
            await OrderRepository.create(make_order(order_id=None), orders_collection)

        assert exc_info.value.details == {"order_number": "ORD-20240101120000-1234", "retryable": True}

    @pytest.mark.asyncio
    async def test_server_selection_timeout_is_unavailable(self, orders_collection):
        orders_collection.find_one.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(StoreUnavailableException):
            await OrderRepository.get_by_id(ORDER_ID, orders_collection)

    @pytest.mark.asyncio
    async def test_network_timeout_is_store_timeout(self, orders_collection):
        orders_collection.find_one.side_effect = NetworkTimeout("timed out")

        with pytest.raises(StoreTimeoutException):
            await OrderRepository.get_by_id(ORDER_ID, orders_collection)
