import asyncio
from contextlib import aclosing
from datetime import UTC, datetime

from orderweave.enrich import Enricher
from orderweave.models import BundleItem, Order, OrderStatus, PaymentStatus
from orderweave.service import OrderErrorKind, OrderService
from orderweave.store import InMemoryStore

from support import order_doc, simple_item, unwrap, unwrap_err


async def _stored(store: InMemoryStore, order_id: str) -> dict:
    doc = unwrap(await store.get("orders", order_id))
    assert doc is not None
    return dict(doc.data)


async def test_get_order_fills_email_and_enriches(service: OrderService) -> None:
    order = await service.get_order("ord_bundle")

    assert order is not None
    assert order.customer_email == "asha@example.com"
    item = order.items[0]
    assert isinstance(item, BundleItem)
    assert item.bundle_name == "Summer Pack"
    assert len(item.products) == 3


async def test_get_stored_order_is_not_enriched(service: OrderService) -> None:
    order = await service.get_stored_order("ord_bundle")
    assert order is not None
    assert order.bundle_items[0].bundle_products is None


async def test_missing_order_is_none(service: OrderService) -> None:
    assert await service.get_order("nope") is None


async def test_lists_are_newest_first(service: OrderService) -> None:
    orders = await service.list_orders()
    assert [o.id for o in orders] == ["ord_simple", "ord_bundle"]

    mine = await service.get_user_orders("u1")
    assert [o.id for o in mine] == ["ord_bundle"]


async def test_find_by_contact(service: OrderService) -> None:
    assert [o.id for o in await service.find_by_contact(email="VIKRAM@example.com")] == ["ord_simple"]
    assert len(await service.find_by_contact(phone="9876543210")) == 2
    assert await service.find_by_contact() == []


async def test_update_status_appends_history(service: OrderService, store: InMemoryStore) -> None:
    unwrap(await service.update_status("ord_bundle", OrderStatus.SHIPPED))

    data = await _stored(store, "ord_bundle")
    assert data["status"] == "shipped"
    assert [h["status"] for h in data["statusHistory"]] == ["shipped"]
    assert isinstance(data["updatedAt"], datetime)

    order = await service.get_order("ord_bundle")
    assert order is not None
    assert [c.status for c in order.status_history] == [OrderStatus.SHIPPED]


async def test_invalid_transition_writes_nothing(service: OrderService, store: InMemoryStore) -> None:
    before = await _stored(store, "ord_simple")

    error = unwrap_err(await service.update_status("ord_simple", OrderStatus.PENDING))

    assert error.kind is OrderErrorKind.INVALID_TRANSITION
    assert await _stored(store, "ord_simple") == before


async def test_update_unknown_order(service: OrderService) -> None:
    error = unwrap_err(await service.update_status("nope", OrderStatus.SHIPPED))
    assert error.kind is OrderErrorKind.NOT_FOUND

    error = unwrap_err(await service.update_payment_status("nope", PaymentStatus.PAID))
    assert error.kind is OrderErrorKind.NOT_FOUND


async def test_update_order_and_payment_status(service: OrderService, store: InMemoryStore) -> None:
    unwrap(
        await service.update_order_and_payment_status(
            "ord_bundle", OrderStatus.PROCESSING, PaymentStatus.PAID
        )
    )
    data = await _stored(store, "ord_bundle")
    assert (data["status"], data["paymentStatus"]) == ("processing", "paid")

    unwrap(await service.update_payment_status("ord_bundle", PaymentStatus.PENDING))
    assert (await _stored(store, "ord_bundle"))["paymentStatus"] == "pending"


async def test_create_and_delete(service: OrderService) -> None:
    template = await service.get_stored_order("ord_bundle")
    assert template is not None

    order_id = unwrap(await service.create_order(template))
    created = await service.get_order(order_id)
    assert created is not None
    assert created.total_price == template.total_price

    assert unwrap(await service.delete_order(order_id)) is True
    assert unwrap(await service.delete_order(order_id)) is False
    assert await service.get_order(order_id) is None


async def test_unreadable_order_is_skipped(store: InMemoryStore) -> None:
    class Flaky(Enricher):
        async def enrich(self, order: Order) -> Order:
            if order.id == "ord_bundle":
                raise RuntimeError("boom")
            return await super().enrich(order)

    service = OrderService(store, Flaky(store))

    assert [o.id for o in await service.list_orders()] == ["ord_simple"]
    assert await service.get_order("ord_bundle") is None


async def test_watch_order_re_enriches_each_snapshot(service: OrderService, store: InMemoryStore) -> None:
    async with aclosing(service.watch_order("ord_bundle")) as snapshots:
        first = await anext(snapshots)
        assert first is not None
        assert first.bundle_items[0].bundle_name == "Summer Pack"

        await store.set("bundles", "b1", {"name": "Winter Pack", "products": []})
        await store.update("orders", "ord_bundle", {"status": "processing"})

        second = await asyncio.wait_for(anext(snapshots), timeout=1)
        assert second is not None
        assert second.status is OrderStatus.PROCESSING
        assert second.bundle_items[0].bundle_name == "Winter Pack"

    assert store.feed.watcher_count("orders") == 0


async def test_watch_user_orders(service: OrderService, store: InMemoryStore) -> None:
    async with aclosing(service.watch_user_orders("u3")) as snapshots:
        assert await anext(snapshots) == []

        await store.set(
            "orders",
            "ord_new",
            order_doc([simple_item()], userId="u3", createdAt=datetime(2024, 7, 1, tzinfo=UTC)),
        )
        orders = await asyncio.wait_for(anext(snapshots), timeout=1)
        assert [o.id for o in orders] == ["ord_new"]


async def test_bundle_summaries(service: OrderService) -> None:
    order = await service.get_order("ord_bundle")
    assert order is not None
    assert [s.bundle_id for s in await service.bundle_summaries(order)] == ["b1"]


async def test_paging_uses_settings(service: OrderService) -> None:
    orders = await service.list_orders()
    assert service.page(orders, 1) == orders
    assert not service.has_more(orders, 1)
