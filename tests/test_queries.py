from dataclasses import replace
from datetime import UTC, datetime

from orderweave.codec import decode_order
from orderweave.models import Order, OrderStatus
from orderweave.service import (
    current_orders,
    filter_orders,
    has_more_pages,
    order_stats,
    orders_in_range,
    paginate,
    previous_orders,
    total_revenue,
)
from orderweave.store import Document

from support import order_doc, simple_item


def _order(order_id: str, status: str, amount: float, day: int, **fields: object) -> Order:
    return decode_order(
        Document(
            order_id,
            order_doc(
                [simple_item()],
                status=status,
                amount=amount,
                createdAt=datetime(2024, 5, day, 12, tzinfo=UTC),
                **fields,
            ),
        )
    )


ORDERS = [
    _order("A100", "pending", 100, 1, customerEmail="asha@example.com"),
    _order("B200", "shipped", 200, 2, customerEmail="ben@example.com"),
    _order("C300", "delivered", 300, 3, customerEmail="chen@example.com"),
    _order("D400", "cancelled", 400, 4, customerEmail="dev@example.com"),
    _order("E500", "delivered", 500, 5, customerEmail="eve@example.com"),
]


def test_filter_by_status() -> None:
    assert [o.id for o in filter_orders(ORDERS, "", "delivered")] == ["C300", "E500"]
    assert filter_orders(ORDERS, "", "all") == ORDERS
    assert filter_orders(ORDERS, "", "") == ORDERS


def test_filter_by_query() -> None:
    assert [o.id for o in filter_orders(ORDERS, "BEN@", "all")] == ["B200"]
    assert [o.id for o in filter_orders(ORDERS, "c3", "all")] == ["C300"]
    assert len(filter_orders(ORDERS, "asha rao", "all")) == 5
    assert [o.id for o in filter_orders(ORDERS, "asha", "shipped")] == ["B200"]
    assert filter_orders(ORDERS, "zed", "all") == []


def test_current_and_previous() -> None:
    assert [o.id for o in current_orders(ORDERS)] == ["A100", "B200"]
    assert [o.id for o in previous_orders(ORDERS)] == ["C300", "D400", "E500"]


def test_stats() -> None:
    assert order_stats(ORDERS) == {
        "total": 5,
        "pending": 1,
        "processing": 0,
        "shipped": 1,
        "delivered": 2,
        "cancelled": 1,
    }


def test_pagination() -> None:
    assert [o.id for o in paginate(ORDERS, 2, 2)] == ["C300", "D400"]
    assert [o.id for o in paginate(ORDERS, 3, 2)] == ["E500"]
    assert paginate(ORDERS, 4, 2) == []
    assert has_more_pages(ORDERS, 2, 2)
    assert not has_more_pages(ORDERS, 3, 2)


def test_revenue_counts_delivered_only() -> None:
    assert total_revenue(ORDERS) == 800.0
    assert total_revenue([replace(ORDERS[0], status=OrderStatus.DELIVERED)]) == 100.0
    assert total_revenue([]) == 0.0


def test_date_range_includes_whole_end_day() -> None:
    selected = orders_in_range(ORDERS, datetime(2024, 5, 2), datetime(2024, 5, 4))
    assert [o.id for o in selected] == ["B200", "C300", "D400"]
