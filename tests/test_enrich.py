import asyncio
from dataclasses import replace

from kungfu import Result, Error

from orderweave.codec import decode_order
from orderweave.config import EnrichmentSettings
from orderweave.enrich import Enricher
from orderweave.models import BundleItem, BundleProduct, Order, SimpleItem
from orderweave.store import Document, InMemoryStore, StoreError

from support import bundle_item, order_doc, seeded_store, simple_item


def _order(*items: dict) -> Order:
    return decode_order(Document("ord_t", order_doc(list(items))))


def _bundle(order: Order) -> BundleItem:
    (item,) = order.bundle_items
    return item


class CountingStore(InMemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.reads = 0

    async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
        self.reads += 1
        return await super().get(collection, doc_id)


class SuspendingStore(InMemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.reads: list[tuple[str, str]] = []

    async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
        self.reads.append((collection, doc_id))
        await asyncio.sleep(0)
        return await super().get(collection, doc_id)


async def test_bundle_item_is_resolved(enricher: Enricher) -> None:
    enriched = await enricher.enrich(_order(bundle_item(), simple_item()))
    item = _bundle(enriched)

    assert item.bundle_name == "Summer Pack"
    assert item.bundle_price == "1799"
    assert item.original_individual_price == "2499"
    assert item.savings == 700.0
    assert [(p.product_id, p.title, p.price, p.image, p.size) for p in item.products] == [
        ("p1", "Tee", "499", "tee.png", "XL"),
        ("p2", "Cap", "299", "cap.png", ""),
        ("x", "Unknown Product", "0", None, ""),
    ]


async def test_non_bundle_fields_pass_through(enricher: Enricher) -> None:
    order = _order(bundle_item(), simple_item())
    enriched = await enricher.enrich(order)

    assert enriched.total_price == order.total_price
    assert enriched.shipping_address == order.shipping_address
    assert enriched.items[1] == order.items[1]
    assert replace(enriched, items=order.items) == order


async def test_item_order_is_preserved(enricher: Enricher) -> None:
    order = _order(simple_item(id="s1"), bundle_item(id="bb"), simple_item(id="s2"))
    enriched = await enricher.enrich(order)

    assert [i.unique_key for i in enriched.items] == ["s1", "bb", "s2"]


async def test_enrichment_is_idempotent(enricher: Enricher) -> None:
    once = await enricher.enrich(_order(bundle_item(), simple_item()))
    twice = await enricher.enrich(once)
    assert twice == once


async def test_unresolvable_bundle_keeps_item(enricher: Enricher) -> None:
    order = _order(bundle_item(bundleId="missing"))
    enriched = await enricher.enrich(order)
    assert enriched == order


async def test_bundle_item_without_id_is_untouched(enricher: Enricher) -> None:
    data = bundle_item()
    del data["bundleId"]
    order = _order(data)
    assert await enricher.enrich(order) == order


async def test_simple_only_order_is_returned_as_is(enricher: Enricher) -> None:
    order = _order(simple_item(), simple_item(id="other"))
    enriched = await enricher.enrich(order)
    assert enriched is order


async def test_missing_bundle_fields_keep_stored_values() -> None:
    store = seeded_store()
    store.seed("bundles", "b2", {"products": [{"productId": "p1"}]})
    order = _order(bundle_item(bundleId="b2"))

    item = _bundle(await Enricher(store).enrich(order))

    assert item.bundle_name == "Old Pack Name"
    assert item.bundle_price == "1500"
    assert item.original_individual_price == "2000"
    assert [p.title for p in item.products] == ["Tee"]


async def test_malformed_bundle_products_resolve_to_empty() -> None:
    class ProductsDown(InMemoryStore):
        async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
            if collection == "products":
                return Error(StoreError("down"))
            return await super().get(collection, doc_id)

    store = ProductsDown()
    store.seed("bundles", "b1", {"name": "Pack", "products": "not-a-list"})

    item = _bundle(await Enricher(store).enrich(_order(bundle_item())))

    assert item.bundle_name == "Pack"
    assert item.products == ()


async def test_products_down_fall_back_to_bundle_entries() -> None:
    class ProductsDown(InMemoryStore):
        async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
            if collection == "products":
                raise ConnectionError("products unreachable")
            return await super().get(collection, doc_id)

    store = ProductsDown()
    store.seed("bundles", "b1", {"products": [{"productId": "p1", "title": "Old Tee", "price": "450"}]})

    item = _bundle(await Enricher(store).enrich(_order(bundle_item())))

    assert [(p.title, p.price, p.size) for p in item.products] == [("Old Tee", "450", "XL")]


async def test_unexpected_failure_returns_input(store: InMemoryStore) -> None:
    class Exploding(Enricher):
        async def _resolve_entry(self, *args: object) -> BundleProduct:
            raise RuntimeError("boom")

    order = _order(bundle_item(), simple_item())
    assert await Exploding(store).enrich(order) is order


async def test_placeholder_title_comes_from_settings(store: InMemoryStore) -> None:
    enricher = Enricher(store, EnrichmentSettings(unknown_product_title="(missing)"))
    item = _bundle(await enricher.enrich(_order(bundle_item())))
    assert item.products[-1].title == "(missing)"


async def test_memo_is_scoped_to_one_pass() -> None:
    store = CountingStore()
    store.seed("bundles", "b1", {"products": [{"productId": "p1"}]})
    store.seed("products", "p1", {"name": "Tee"})
    order = _order(bundle_item(id="a"), bundle_item(id="b"))
    enricher = Enricher(store)

    await enricher.enrich(order)
    first_pass = store.reads
    await enricher.enrich(order)

    assert store.reads == 2 * first_pass


async def test_enrich_many(enricher: Enricher) -> None:
    orders = [_order(simple_item()), _order(bundle_item())]
    enriched = await enricher.enrich_many(orders)

    assert enriched[0] is orders[0]
    assert _bundle(enriched[1]).bundle_name == "Summer Pack"


async def test_simple_item_type_survives(enricher: Enricher) -> None:
    enriched = await enricher.enrich(_order(bundle_item(), simple_item()))
    assert isinstance(enriched.items[1], SimpleItem)


async def test_zero_memo_size_still_enriches(store: InMemoryStore) -> None:
    enricher = Enricher(store, EnrichmentSettings(memo_size=0))
    item = _bundle(await enricher.enrich(_order(bundle_item(), simple_item())))

    assert item.bundle_name == "Summer Pack"
    assert [p.title for p in item.products] == ["Tee", "Cap", "Unknown Product"]


async def test_repeated_bundle_is_read_once_per_pass() -> None:
    store = SuspendingStore()
    store.seed("bundles", "b1", {"name": "Pack", "products": [{"productId": "p1"}]})
    store.seed("products", "p1", {"name": "Tee"})
    order = _order(bundle_item(id="a"), bundle_item(id="b"))

    enriched = await Enricher(store).enrich(order)

    assert [i.bundle_name for i in enriched.bundle_items] == ["Pack", "Pack"]
    assert [[p.title for p in i.products] for i in enriched.bundle_items] == [["Tee"], ["Tee"]]
    assert store.reads.count(("bundles", "b1")) == 1
    assert store.reads.count(("products", "p1")) == 1
