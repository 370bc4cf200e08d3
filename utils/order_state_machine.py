"""
Order State Machine for validating order status transitions.

The transition table is a closed allow-list: every (current, target) pair that is
not listed is rejected, including "transitions" to the current status.
"""

import logging
from typing import Dict, List, Set

from enums.order_status import OrderStatus
from exceptions import InvalidOrderStatusTransitionException

logger = logging.getLogger(__name__)


class OrderStatusTransition:
    """Represents a valid status transition with metadata"""

    def __init__(self, from_status: OrderStatus, to_status: OrderStatus, description: str = ""):
        self.from_status = from_status
        self.to_status = to_status
        self.description = description

    def __repr__(self):
        return f"{self.from_status.value} -> {self.to_status.value}"


class OrderStateMachine:
    """
    Finite state machine for order status transitions.

    Valid status transitions:
    - PENDING -> CONFIRMED
    - PENDING -> CANCELLED
    - CONFIRMED -> SHIPPED
    - CONFIRMED -> CANCELLED
    - SHIPPED -> DELIVERED

    DELIVERED and CANCELLED are final.
    """

    VALID_TRANSITIONS: List[OrderStatusTransition] = [
        # From PENDING
        OrderStatusTransition(OrderStatus.PENDING, OrderStatus.CONFIRMED, "Order confirmed"),
        OrderStatusTransition(OrderStatus.PENDING, OrderStatus.CANCELLED, "Pending order cancelled"),

        # From CONFIRMED
        OrderStatusTransition(OrderStatus.CONFIRMED, OrderStatus.SHIPPED, "Order shipped"),
        OrderStatusTransition(OrderStatus.CONFIRMED, OrderStatus.CANCELLED, "Confirmed order cancelled"),

        # From SHIPPED
        OrderStatusTransition(OrderStatus.SHIPPED, OrderStatus.DELIVERED, "Order delivered"),
    ]

    CANCELLABLE_STATUSES: Set[OrderStatus] = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

    _transition_map: Dict[OrderStatus, Set[OrderStatus]] = {}
    _transition_descriptions: Dict[tuple, str] = {}

    @classmethod
    def _build_transition_map(cls):
        if cls._transition_map:
            return

        for transition in cls.VALID_TRANSITIONS:
            cls._transition_map.setdefault(transition.from_status, set()).add(transition.to_status)
            cls._transition_descriptions[(transition.from_status, transition.to_status)] = transition.description

    @classmethod
    def is_valid_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        """
        Check if a status transition is in the transition table.

        Args:
            from_status: Current order status
            to_status: Desired new status

        Returns:
            True if transition is valid, False otherwise
        """
        cls._build_transition_map()
        return to_status in cls._transition_map.get(from_status, set())

    @classmethod
    def get_valid_transitions(cls, from_status: OrderStatus) -> List[OrderStatus]:
        cls._build_transition_map()
        return sorted(cls._transition_map.get(from_status, set()), key=lambda status: status.value)

    @classmethod
    def get_transition_description(cls, from_status: OrderStatus, to_status: OrderStatus) -> str:
        cls._build_transition_map()
        return cls._transition_descriptions.get(
            (from_status, to_status),
            f"Transition from {from_status.value} to {to_status.value}"
        )

    @classmethod
    def is_final_status(cls, status: OrderStatus) -> bool:
        """A status is final when the table has no transition leaving it."""
        cls._build_transition_map()
        return not cls._transition_map.get(status)

    @classmethod
    def can_cancel(cls, status: OrderStatus) -> bool:
        return status in cls.CANCELLABLE_STATUSES

    @classmethod
    def validate_transition(cls, order_id: str, from_status: OrderStatus, to_status: OrderStatus) -> None:
        """
        Validate a status transition and log it.

        Raises:
            InvalidOrderStatusTransitionException: If the pair is not in the transition table
        """
        if not cls.is_valid_transition(from_status, to_status):
            logger.warning(f"Invalid status transition for order {order_id}: "
                           f"{from_status.value} -> {to_status.value}")
            raise InvalidOrderStatusTransitionException(from_status.value, to_status.value)

        transition_desc = cls.get_transition_description(from_status, to_status)
        logger.info(f"ORDER_STATUS_TRANSITION: Order {order_id} {from_status.value} -> {to_status.value}: "
                    f"{transition_desc}")
