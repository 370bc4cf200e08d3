"""
API tests for the ordering service with a mocked orders collection.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from bson.decimal128 import Decimal128
from fastapi.testclient import TestClient

from web.app import create_ordering_app

ORDER_ID = "64b7f0c2a1b2c3d4e5f60718"


@pytest.fixture
def client(orders_collection):
    app = create_ordering_app(collection=orders_collection)
    with TestClient(app) as test_client:
        yield test_client


def _stored_document(status):
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


class TestCreateOrderApi:

    def test_create_order(self, client, orders_collection, shipping_address_data):
        orders_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId(ORDER_ID))

        response = client.post("/api/orders", json={
            "user_id": "user-1",
            "items": [{"product_id": 1, "product_name": "Widget", "price": 10.00, "quantity": 2}],
            "shipping_address": shipping_address_data,
        })

        body = response.json()
        assert response.status_code == 201
        assert body["id"] == ORDER_ID
        assert body["status"] == "Pending"
        assert body["total_amount"] == 20.0
        assert body["order_number"].startswith("ORD-")
        assert response.headers["Location"] == f"/api/orders/{ORDER_ID}"

    def test_empty_order_is_400(self, client, shipping_address_data):
        response = client.post("/api/orders", json={
            "user_id": "user-1", "items": [], "shipping_address": shipping_address_data,
        })

        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_ORDER"

    def test_missing_address_field_is_400(self, client, shipping_address_data):
        address = {**shipping_address_data, "city": ""}

        response = client.post("/api/orders", json={
            "user_id": "user-1",
            "items": [{"product_id": 1, "product_name": "Widget", "price": 10.00, "quantity": 2}],
            "shipping_address": address,
        })

        assert response.status_code == 400
        assert response.json()["details"] == {"missing_field": "city"}


class TestOrderStatusApi:

    def test_valid_transition(self, client, orders_collection):
        orders_collection.find_one.return_value = _stored_document("Pending")
        orders_collection.replace_one.return_value = MagicMock(matched_count=1)

        response = client.put(f"/api/orders/{ORDER_ID}/status", json={"status": "Confirmed"})

        assert response.status_code == 200
        assert response.json()["status"] == "Confirmed"

    def test_invalid_transition_is_400(self, client, orders_collection):
        orders_collection.find_one.return_value = _stored_document("Pending")

        response = client.put(f"/api/orders/{ORDER_ID}/status", json={"status": "Shipped"})

        body = response.json()
        assert response.status_code == 400
        assert body["code"] == "INVALID_STATUS_TRANSITION"
        assert body["details"] == {"current_status": "Pending", "target_status": "Shipped"}
        orders_collection.replace_one.assert_not_awaited()

    def test_unknown_status_is_400(self, client):
        response = client.put(f"/api/orders/{ORDER_ID}/status", json={"status": "Lost"})

        assert response.status_code == 400

    def test_missing_order_is_404(self, client):
        response = client.put(f"/api/orders/{ORDER_ID}/status", json={"status": "Confirmed"})

        assert response.status_code == 404


class TestOrderQueriesApi:

    def test_get_order(self, client, orders_collection):
        orders_collection.find_one.return_value = _stored_document("Shipped")

        response = client.get(f"/api/orders/{ORDER_ID}")

        assert response.status_code == 200
        assert response.json()["items"][0]["subtotal"] == 20.0

    def test_malformed_id_is_404(self, client):
        assert client.get("/api/orders/not-an-id").status_code == 404

    def test_orders_by_user(self, client, orders_collection):
        orders_collection.cursor.to_list.return_value = [_stored_document("Pending")]

        response = client.get("/api/orders/user/user-1")

        assert response.status_code == 200
        assert [order["user_id"] for order in response.json()] == ["user-1"]


class TestCancelOrderApi:

    def test_cancel_pending_order(self, client, orders_collection):
        orders_collection.find_one.return_value = _stored_document("Pending")
        orders_collection.replace_one.return_value = MagicMock(matched_count=1)

        response = client.delete(f"/api/orders/{ORDER_ID}")

        assert response.status_code == 204
        assert orders_collection.replace_one.await_args.args[1]["status"] == "Cancelled"

    def test_cancel_delivered_order_is_400(self, client, orders_collection):
        orders_collection.find_one.return_value = _stored_document("Delivered")

        response = client.delete(f"/api/orders/{ORDER_ID}")

        assert response.status_code == 400
        assert response.json()["details"]["current_status"] == "Delivered"
