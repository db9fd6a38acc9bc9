"""
Size reconciliation — which size applies to each product of a bundle purchase.

The purchase-time assignment map always wins over whatever size the bundle
document carries for that product.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from orderweave.models import BundleEntry, BundleProduct, Product

UNKNOWN_PRODUCT = "Unknown Product"


def effective_size(entry: BundleEntry, assignments: Mapping[str, str]) -> str:
    if entry.product_id is not None and entry.product_id in assignments:
        return assignments[entry.product_id]
    return entry.size or ""


def reconcile_entry(
    entry: BundleEntry,
    assignments: Mapping[str, str],
    product: Product | None = None,
    *,
    unknown_title: str = UNKNOWN_PRODUCT,
    default_price: str = "0",
) -> BundleProduct:
    """
    One resolved bundle product.

    Canonical product data is preferred field by field; the bundle entry fills
    the gaps, and `unknown_title` stands in when neither has a title.
    """
    if product is None:
        title = entry.title
        price = entry.price
        image = entry.image
    else:
        title = product.title if product.title is not None else entry.title
        price = product.price if product.price is not None else entry.price
        image = product.image if product.image is not None else entry.image

    return BundleProduct(
        product_id=entry.product_id,
        title=title if title is not None else unknown_title,
        price=price if price is not None else default_price,
        quantity=entry.quantity if entry.quantity is not None else 1,
        image=image,
        size=effective_size(entry, assignments),
    )


def reconcile_sizes(
    entries: Iterable[BundleEntry],
    assignments: Mapping[str, str],
    *,
    unknown_title: str = UNKNOWN_PRODUCT,
    default_price: str = "0",
) -> tuple[BundleProduct, ...]:
    """Entries as-is with sizes applied; no product lookups."""
    return tuple(
        reconcile_entry(e, assignments, unknown_title=unknown_title, default_price=default_price)
        for e in entries
    )


__all__ = ("UNKNOWN_PRODUCT", "effective_size", "reconcile_entry", "reconcile_sizes")
