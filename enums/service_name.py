from enum import Enum


class ServiceName(Enum):
    BASKET = "basket"
    CATALOG = "catalog"
    ORDERING = "ordering"
