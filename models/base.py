from decimal import Decimal
from typing import Annotated

from pydantic import BeforeValidator, PlainSerializer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _to_decimal(value):
    # floats go through str() so 9.99 stays 9.99 instead of its binary expansion
    if isinstance(value, float):
        return Decimal(str(value))
    return value


# Monetary amount: exact Decimal in Python, plain JSON number on the wire
Money = Annotated[
    Decimal,
    BeforeValidator(_to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]
