"""
Order aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from orderweave.models._items import LineItem, BundleItem
from orderweave.models._status import OrderStatus, PaymentStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class ShippingAddress:
    first_name: str = ""
    last_name: str = ""
    street: str = ""
    landmark: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    phone: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def full_address(self) -> str:
        parts = (self.street, self.landmark, self.city, self.state, self.pincode)
        return ", ".join(p for p in parts if p)


@dataclass(frozen=True, slots=True)
class StatusChange:
    status: OrderStatus
    timestamp: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Order:
    """
    A customer purchase.

    `total_price` is authoritative: it is never recomputed from the items.
    """

    id: str
    customer_name: str
    customer_email: str
    total_price: float
    total_products: int
    payment_mode: str
    status: OrderStatus
    payment_status: PaymentStatus
    created_at: datetime
    items: tuple[LineItem, ...]
    shipping_address: ShippingAddress
    payment_id: str | None = None
    razorpay_order_id: str | None = None
    user_id: str | None = None
    status_history: tuple[StatusChange, ...] = ()

    @property
    def is_cod(self) -> bool:
        return self.payment_mode.lower() == "cod"

    @property
    def is_online_payment(self) -> bool:
        return self.payment_mode.lower() == "online"

    @property
    def is_active(self) -> bool:
        return not self.status.is_terminal

    @property
    def short_id(self) -> str:
        return f"{self.id[:8]}..." if len(self.id) > 8 else self.id

    @property
    def bundle_items(self) -> tuple[BundleItem, ...]:
        return tuple(i for i in self.items if isinstance(i, BundleItem))


__all__ = ("ShippingAddress", "StatusChange", "Order")
