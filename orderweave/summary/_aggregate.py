"""
Aggregation — read-only views derived from an (enriched) order.

Only `bundle_summaries` touches the store; every other function is pure
and works with whatever the order already carries.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace

import combinators as C
from combinators import lift as L
from kungfu import Ok, Error

from orderweave._types import EnrichmentError
from orderweave.models import BundleItem, BundleProduct, Order, SimpleItem
from orderweave.resolve import BundleResolver

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Views
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class BundleSummaryLine:
    product_id: str
    title: str
    quantity: int
    image: str | None


@dataclass(frozen=True, slots=True, kw_only=True)
class BundleSummary:
    """One distinct bundle of an order, described by the bundle document."""

    bundle_id: str
    name: str | None
    description: str | None
    bundle_price: str | None
    original_total_price: str | None
    discount: float | None
    image: str | None
    category: str | None
    items: tuple[BundleSummaryLine, ...]

    @property
    def item_count(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True, kw_only=True)
class BundleLine:
    product_id: str
    bundle_id: str | None
    bundle_name: str | None
    title: str
    quantity: int
    bundle_price: str | None
    original_individual_price: str | None
    image: str | None
    savings: float
    product_sizes: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class BundleSizes:
    title: str
    bundle_name: str | None
    product_sizes: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class RegularSize:
    title: str
    size: str
    quantity: int


@dataclass(frozen=True, slots=True)
class SizesOverview:
    bundle_items: tuple[BundleSizes, ...] = ()
    regular_items: tuple[RegularSize, ...] = ()

    @property
    def has_bundles(self) -> bool:
        return bool(self.bundle_items)

    @property
    def has_regular_sized_items(self) -> bool:
        return bool(self.regular_items)


@dataclass(frozen=True, slots=True, kw_only=True)
class BundleProductsSummary:
    bundle_id: str | None
    bundle_name: str | None
    bundle_price: str | None
    original_price: str | None
    products: tuple[BundleProduct, ...] = ()

    @property
    def product_count(self) -> int:
        return len(self.products)


# ═══════════════════════════════════════════════════════════════════════════════
# Bundle membership
# ═══════════════════════════════════════════════════════════════════════════════


def has_bundle_items(order: Order) -> bool:
    return any(isinstance(item, BundleItem) for item in order.items)


def distinct_bundle_ids(order: Order) -> tuple[str, ...]:
    """Bundle ids referenced by the order, first occurrence order."""
    seen: dict[str, None] = {}
    for item in order.items:
        match item:
            case BundleItem(bundle_id=str() as bundle_id) if bundle_id:
                seen.setdefault(bundle_id, None)
    return tuple(seen)


async def bundle_summaries(order: Order, resolver: BundleResolver) -> list[BundleSummary]:
    """
    One summary per distinct, resolvable bundle id of the order.

    Unresolvable bundles are omitted; an unexpected failure yields `[]`.
    """
    bundle_ids = distinct_bundle_ids(order)
    if not bundle_ids:
        return []

    result = await C.traverse_par(
        bundle_ids,
        lambda bundle_id: L.catching_async(
            lambda: resolver.get_bundle_details(bundle_id),
            on_error=lambda e: EnrichmentError(f"bundle {bundle_id!r}: {e!r}"),
        ),
    )()

    match result:
        case Ok(bundles):
            pass
        case Error(e):
            logger.warning("Bundle summaries of order %s failed: %s", order.id, e)
            return []

    summaries: list[BundleSummary] = []
    for bundle_id, bundle in zip(bundle_ids, bundles):
        if bundle is None:
            continue
        lines = tuple(
            BundleSummaryLine(item.product_id, item.title, item.quantity, item.image)
            for item in order.bundle_items
            if item.bundle_id == bundle_id
        )
        summaries.append(
            BundleSummary(
                bundle_id=bundle_id,
                name=bundle.name,
                description=bundle.description,
                bundle_price=bundle.bundle_price,
                original_total_price=bundle.original_total_price,
                discount=bundle.discount,
                image=bundle.image,
                category=bundle.category,
                items=lines,
            )
        )
    return summaries


# ═══════════════════════════════════════════════════════════════════════════════
# Pure views
# ═══════════════════════════════════════════════════════════════════════════════


def bundle_lines(order: Order) -> list[BundleLine]:
    return [
        BundleLine(
            product_id=item.product_id,
            bundle_id=item.bundle_id,
            bundle_name=item.bundle_name,
            title=item.title,
            quantity=item.quantity,
            bundle_price=item.bundle_price,
            original_individual_price=item.original_individual_price,
            image=item.image,
            savings=item.savings,
            product_sizes=dict(item.bundle_product_sizes),
        )
        for item in order.bundle_items
    ]


def sizes_overview(order: Order) -> SizesOverview:
    """Sizes of every bundle item; regular items only when they carry a size."""
    bundles: list[BundleSizes] = []
    regular: list[RegularSize] = []
    for item in order.items:
        match item:
            case BundleItem():
                bundles.append(
                    BundleSizes(item.title, item.bundle_name, dict(item.bundle_product_sizes))
                )
            case SimpleItem(size=str() as size) if size:
                regular.append(RegularSize(item.title, size, item.quantity))
    return SizesOverview(tuple(bundles), tuple(regular))


def bundle_products_with_details(item: BundleItem) -> tuple[BundleProduct, ...]:
    """Resolved products of `item` with the purchase-time sizes re-applied."""
    sizes = item.bundle_product_sizes
    return tuple(
        replace(p, size=sizes[p.product_id])
        if p.product_id is not None and p.product_id in sizes
        else p
        for p in item.products
    )


def bundle_products_summary(order: Order) -> list[BundleProductsSummary]:
    return [
        BundleProductsSummary(
            bundle_id=item.bundle_id,
            bundle_name=item.bundle_name,
            bundle_price=item.bundle_price,
            original_price=item.original_individual_price,
            products=bundle_products_with_details(item),
        )
        for item in order.bundle_items
    ]


__all__ = (
    "BundleSummaryLine",
    "BundleSummary",
    "BundleLine",
    "BundleSizes",
    "RegularSize",
    "SizesOverview",
    "BundleProductsSummary",
    "has_bundle_items",
    "distinct_bundle_ids",
    "bundle_summaries",
    "bundle_lines",
    "sizes_overview",
    "bundle_products_with_details",
    "bundle_products_summary",
)
