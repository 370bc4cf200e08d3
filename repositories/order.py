import logging
from decimal import Decimal

from bson import ObjectId
from bson.decimal128 import Decimal128
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from models.order import Order
from utils.store_errors import translate_mongo_errors

logger = logging.getLogger(__name__)


def _to_document(order: Order) -> dict:
    document = order.model_dump(exclude={"id"}, mode="python")
    document["status"] = order.status.value
    document["total_amount"] = Decimal128(order.total_amount)
    for item in document["items"]:
        item.pop("subtotal", None)
        item["price"] = Decimal128(item["price"])
    return document


def _decimal(value) -> Decimal:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return Decimal(str(value))


def _from_document(document: dict) -> Order:
    document = dict(document)
    document["id"] = str(document.pop("_id"))
    document["total_amount"] = _decimal(document["total_amount"])
    document["items"] = [{**item, "price": _decimal(item["price"])} for item in document.get("items", [])]
    return Order.model_validate(document)


def _object_id(order_id: str) -> ObjectId | None:
    try:
        return ObjectId(order_id)
    except (InvalidId, TypeError):
        return None


class OrderRepository:
    @staticmethod
    async def get_all(collection: AsyncCollection) -> list[Order]:
        with translate_mongo_errors("list"):
            cursor = collection.find().sort("order_date", DESCENDING)
            documents = await cursor.to_list()
        return [_from_document(document) for document in documents]

    @staticmethod
    async def get_by_id(order_id: str, collection: AsyncCollection) -> Order | None:
        object_id = _object_id(order_id)
        if object_id is None:
            logger.debug(f"Malformed order id '{order_id}' treated as absent")
            return None
        with translate_mongo_errors("get"):
            document = await collection.find_one({"_id": object_id})
        return _from_document(document) if document else None

    @staticmethod
    async def get_by_order_number(order_number: str, collection: AsyncCollection) -> Order | None:
        with translate_mongo_errors("get_by_order_number"):
            document = await collection.find_one({"order_number": order_number})
        return _from_document(document) if document else None

    @staticmethod
    async def get_by_user_id(user_id: str, collection: AsyncCollection) -> list[Order]:
        with translate_mongo_errors("list_by_user"):
            cursor = collection.find({"user_id": user_id}).sort("order_date", DESCENDING)
            documents = await cursor.to_list()
        return [_from_document(document) for document in documents]

    @staticmethod
    async def create(order: Order, collection: AsyncCollection) -> Order:
        with translate_mongo_errors("create"):
            result = await collection.insert_one(_to_document(order))
        return order.model_copy(update={"id": str(result.inserted_id)})

    @staticmethod
    async def update(order: Order, collection: AsyncCollection) -> Order | None:
        """Replace the whole stored document. Returns None when no document has the order's id."""
        object_id = _object_id(order.id)
        if object_id is None:
            return None
        with translate_mongo_errors("update"):
            result = await collection.replace_one({"_id": object_id}, _to_document(order))
        if result.matched_count == 0:
            return None
        return order
