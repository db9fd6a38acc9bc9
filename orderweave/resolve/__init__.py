"""
Resolve — reference resolution (order → bundle → product) and size reconciliation.

    from orderweave import resolve as R

    bundles = R.BundleResolver(store, R.PassMemo[Bundle]())
    products = R.ProductResolver(store)

    bundle = await bundles.get_bundle_details("b1")
    product = await products.fetch_product_details("p1")
"""

from orderweave.resolve._memo import (
    Tier,
    PassMemo,
    Lookup,
    Memoized,
    MemoExecutor,
    memoized,
)
from orderweave.resolve._documents import fetch_document
from orderweave.resolve._sizes import (
    UNKNOWN_PRODUCT,
    effective_size,
    reconcile_entry,
    reconcile_sizes,
)
from orderweave.resolve._resolvers import BundleResolver, ProductResolver

__all__ = (
    "Tier",
    "PassMemo",
    "Lookup",
    "Memoized",
    "MemoExecutor",
    "memoized",
    "fetch_document",
    "UNKNOWN_PRODUCT",
    "effective_size",
    "reconcile_entry",
    "reconcile_sizes",
    "BundleResolver",
    "ProductResolver",
)
