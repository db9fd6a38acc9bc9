"""
List queries — pure functions over already-loaded orders.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from orderweave.models import Order, OrderStatus

CURRENT = (OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.SHIPPED)
PREVIOUS = (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


def filter_orders(orders: Sequence[Order], query: str = "", status_filter: str = "all") -> list[Order]:
    """
    Filter by status, then by a case-insensitive search over customer name,
    email and order id. An empty filter or `"all"` keeps every status.
    """
    result = list(orders)
    if status_filter and status_filter.lower() != "all":
        status = OrderStatus.parse(status_filter)
        result = [o for o in result if o.status is status]
    if query:
        needle = query.lower()
        result = [
            o
            for o in result
            if needle in o.customer_name.lower()
            or needle in o.customer_email.lower()
            or needle in o.id.lower()
        ]
    return result


def current_orders(orders: Sequence[Order]) -> list[Order]:
    return [o for o in orders if o.status in CURRENT]


def previous_orders(orders: Sequence[Order]) -> list[Order]:
    return [o for o in orders if o.status in PREVIOUS]


def order_stats(orders: Sequence[Order]) -> dict[str, int]:
    """`{"total": n, "pending": .., ..., "cancelled": ..}`"""
    stats = {"total": len(orders)} | {s.value: 0 for s in OrderStatus}
    for order in orders:
        stats[order.status.value] += 1
    return stats


def paginate(orders: Sequence[Order], page: int, page_size: int) -> list[Order]:
    """1-based pages; past the end yields `[]`."""
    start = max(page - 1, 0) * page_size
    return list(orders[start : start + page_size])


def has_more_pages(orders: Sequence[Order], page: int, page_size: int) -> bool:
    return page * page_size < len(orders)


def total_revenue(orders: Sequence[Order]) -> float:
    """Sum of `total_price` over delivered orders."""
    return sum((o.total_price for o in orders if o.status is OrderStatus.DELIVERED), 0.0)


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


def orders_in_range(orders: Sequence[Order], start: datetime, end: datetime) -> list[Order]:
    """Orders created after `start` and before `end` plus one day."""
    lower = _aware(start)
    upper = _aware(end) + timedelta(days=1)
    return [o for o in orders if lower < o.created_at < upper]


__all__ = (
    "CURRENT",
    "PREVIOUS",
    "filter_orders",
    "current_orders",
    "previous_orders",
    "order_stats",
    "paginate",
    "has_more_pages",
    "total_revenue",
    "orders_in_range",
)
