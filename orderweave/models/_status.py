"""
Order and payment statuses, plus the transition rule between order statuses.
"""

from __future__ import annotations

from enum import Enum


class OrderStatus(Enum):
    """
    Order lifecycle.

        PENDING → PROCESSING → SHIPPED → DELIVERED
        (any non-terminal) → CANCELLED → (any, reactivation)
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: object) -> OrderStatus:
        """Lenient parse; unknown or missing values read as PENDING."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.PENDING

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def step_index(self) -> int:
        """Position on the delivery timeline; CANCELLED is off the timeline."""
        return _STEPS.get(self, -1)

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


_STEPS = {
    OrderStatus.PENDING: 0,
    OrderStatus.PROCESSING: 1,
    OrderStatus.SHIPPED: 2,
    OrderStatus.DELIVERED: 3,
}


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"

    @classmethod
    def parse(cls, value: object) -> PaymentStatus:
        if isinstance(value, str) and value.strip().lower() == "paid":
            return cls.PAID
        return cls.PENDING

    @property
    def label(self) -> str:
        return self.value.capitalize()


def is_valid_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """
    Whether an order may move from `current` to `target`.

    - cancelled orders may be reactivated to anything
    - delivered orders are final
    - shipped orders cannot go back to pending or processing
    """
    match current:
        case OrderStatus.CANCELLED:
            return True
        case OrderStatus.DELIVERED:
            return False
        case OrderStatus.SHIPPED:
            return target not in (OrderStatus.PENDING, OrderStatus.PROCESSING)
        case _:
            return True


__all__ = ("OrderStatus", "PaymentStatus", "is_valid_transition")
