"""Write-path errors surfaced to callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from orderweave.models import OrderStatus
from orderweave.store import StoreError


class OrderErrorKind(Enum):
    NOT_FOUND = auto()
    INVALID_TRANSITION = auto()
    STORE = auto()


@dataclass(frozen=True, slots=True)
class OrderError:
    kind: OrderErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.message}"


class OrderErrors:
    @staticmethod
    def not_found(order_id: str) -> OrderError:
        return OrderError(OrderErrorKind.NOT_FOUND, f"Order not found: {order_id}")

    @staticmethod
    def invalid_transition(current: OrderStatus, target: OrderStatus) -> OrderError:
        return OrderError(
            OrderErrorKind.INVALID_TRANSITION,
            f"Cannot change status from {current.value} to {target.value}",
        )

    @staticmethod
    def store(error: StoreError) -> OrderError:
        return OrderError(OrderErrorKind.STORE, error.message)


__all__ = ("OrderErrorKind", "OrderError", "OrderErrors")
