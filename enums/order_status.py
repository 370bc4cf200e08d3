from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "Pending"          # Created, awaiting confirmation
    CONFIRMED = "Confirmed"      # Accepted, awaiting shipment
    SHIPPED = "Shipped"          # Handed over to the carrier
    DELIVERED = "Delivered"      # Final
    CANCELLED = "Cancelled"      # Final
