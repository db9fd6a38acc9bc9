"""
Enrichment pipeline — turn a stored order into a display-ready order.

    enricher = Enricher(store)
    order = await enricher.enrich(order)

For each bundle item with a resolvable bundle, the bundle's authoritative
name and prices replace the stored ones and every nominal product is
resolved against the catalog, with the purchase-time sizes applied.
Everything else passes through untouched.

`enrich` is total: a failed lookup leaves the affected item as stored, and
an unexpected failure anywhere in the pass returns the input order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

import combinators as C
from combinators import lift as L
from kungfu import Ok, Error

from orderweave._types import EnrichmentError, Lazy
from orderweave.config import EnrichmentSettings
from orderweave.models import (
    Bundle,
    BundleEntry,
    BundleItem,
    BundleProduct,
    LineItem,
    Order,
    Product,
)
from orderweave.resolve import BundleResolver, PassMemo, ProductResolver, reconcile_entry
from orderweave.store import DocumentStore

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Resolution pass
# ═══════════════════════════════════════════════════════════════════════════════


class ResolutionPass:
    """Resolvers for one enrichment call, with memos that die with it."""

    __slots__ = ("bundles", "products")

    def __init__(self, store: DocumentStore, settings: EnrichmentSettings) -> None:
        self.bundles = BundleResolver(store, PassMemo[Bundle](settings.memo_size), settings)
        self.products = ProductResolver(store, PassMemo[Product](settings.memo_size))


def _prefer[T](authoritative: T | None, stored: T | None) -> T | None:
    return authoritative if authoritative is not None else stored


# ═══════════════════════════════════════════════════════════════════════════════
# Enricher
# ═══════════════════════════════════════════════════════════════════════════════


class Enricher:
    def __init__(
        self,
        store: DocumentStore,
        settings: EnrichmentSettings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or EnrichmentSettings()

    @property
    def settings(self) -> EnrichmentSettings:
        return self._settings

    async def enrich(self, order: Order) -> Order:
        if not order.bundle_items:
            return order

        resolution = ResolutionPass(self._store, self._settings)
        result = await C.traverse_par(
            order.items,
            lambda item: self._enrich_item(resolution, item),
        )()

        match result:
            case Ok(items):
                return replace(order, items=tuple(items))
            case Error(e):
                logger.warning("Enrichment of order %s failed, keeping stored items: %s", order.id, e)
                return order

    async def enrich_many(self, orders: Iterable[Order]) -> list[Order]:
        """Each order enriched independently, input order preserved."""
        orders = list(orders)
        result = await C.traverse_par(
            orders,
            lambda order: L.catching_async(
                lambda: self.enrich(order),
                on_error=lambda e: EnrichmentError(str(e)),
            ),
        )()

        match result:
            case Ok(enriched):
                return list(enriched)
            case Error(e):
                logger.warning("Batch enrichment failed, keeping stored orders: %s", e)
                return orders

    # ─── items ────────────────────────────────────────────────────────────────

    def _enrich_item(
        self,
        resolution: ResolutionPass,
        item: LineItem,
    ) -> Lazy[LineItem, EnrichmentError]:
        match item:
            case BundleItem(bundle_id=str() as bundle_id) if bundle_id:
                return L.catching_async(
                    lambda: self._enrich_bundle_item(resolution, item, bundle_id),
                    on_error=lambda e: EnrichmentError(f"item {item.unique_key!r}: {e!r}"),
                )
            case _:
                return L.pure(item)

    async def _enrich_bundle_item(
        self,
        resolution: ResolutionPass,
        item: BundleItem,
        bundle_id: str,
    ) -> BundleItem:
        bundle = await resolution.bundles.get_bundle_details(bundle_id)
        if bundle is None:
            return item

        sizes = item.bundle_product_sizes
        result = await C.traverse_par(
            bundle.products,
            lambda entry: L.catching_async(
                lambda: self._resolve_entry(resolution, entry, sizes),
                on_error=lambda e: e,
            ),
        )()

        match result:
            case Ok(products):
                return replace(
                    item,
                    bundle_name=_prefer(bundle.name, item.bundle_name),
                    bundle_price=_prefer(bundle.bundle_price, item.bundle_price),
                    original_individual_price=_prefer(
                        bundle.original_total_price, item.original_individual_price
                    ),
                    bundle_products=tuple(products),
                )
            case Error(e):
                raise e

    async def _resolve_entry(
        self,
        resolution: ResolutionPass,
        entry: BundleEntry,
        sizes: Mapping[str, str],
    ) -> BundleProduct:
        product = None
        if entry.product_id is not None:
            product = await resolution.products.fetch_product_details(entry.product_id)
        return reconcile_entry(
            entry,
            sizes,
            product,
            unknown_title=self._settings.unknown_product_title,
            default_price=self._settings.default_price,
        )


__all__ = ("ResolutionPass", "Enricher")
