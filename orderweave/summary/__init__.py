"""
Summary — aggregation and formatting over enriched orders.

    from orderweave import summary as Sm

    Sm.sizes_overview(order)
    await Sm.bundle_summaries(order, BundleResolver(store))
    print(Sm.format_order(order))
"""

from orderweave.summary._aggregate import (
    BundleSummaryLine,
    BundleSummary,
    BundleLine,
    BundleSizes,
    RegularSize,
    SizesOverview,
    BundleProductsSummary,
    has_bundle_items,
    distinct_bundle_ids,
    bundle_summaries,
    bundle_lines,
    sizes_overview,
    bundle_products_with_details,
    bundle_products_summary,
)
from orderweave.summary._format import RUPEE, format_inr, format_order

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
    "RUPEE",
    "format_inr",
    "format_order",
)
