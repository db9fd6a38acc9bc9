"""
Service — order reads, live views, writes and list queries.

    from orderweave.service import OrderService, filter_orders

    service = OrderService(store, settings=Settings.from_env())
    orders = filter_orders(await service.list_orders(), "asha", "pending")
"""

from orderweave.service._errors import OrderErrorKind, OrderError, OrderErrors
from orderweave.service._queries import (
    CURRENT,
    PREVIOUS,
    filter_orders,
    current_orders,
    previous_orders,
    order_stats,
    paginate,
    has_more_pages,
    total_revenue,
    orders_in_range,
)
from orderweave.service._orders import OrderService

__all__ = (
    "OrderErrorKind",
    "OrderError",
    "OrderErrors",
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
    "OrderService",
)
