"""
Line items — the tagged union `LineItem = SimpleItem | BundleItem`.

Both variants share the purchase fields; only BundleItem carries bundle data,
so consuming code branches with `match` instead of null-checks.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

_NOT_PRICE = re.compile(r"[^\d.]")


def price_value(text: str | None) -> float:
    """
    Parse a stored price string.

        price_value("₹1,234.56")  # 1234.56
        price_value("abc")        # 0.0
    """
    if not text:
        return 0.0
    try:
        return float(_NOT_PRICE.sub("", text))
    except ValueError:
        return 0.0


# ═══════════════════════════════════════════════════════════════════════════════
# Value objects
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ColorInfo:
    name: str
    hex: str


@dataclass(frozen=True, slots=True, kw_only=True)
class BundleProduct:
    """One product inside a bundle purchase, as resolved by enrichment."""

    product_id: str | None
    title: str
    price: str
    quantity: int = 1
    image: str | None = None
    size: str = ""

    @property
    def display_text(self) -> str:
        """`Title • (Qty: 2) • Size: M • ₹499`"""
        parts = [self.title]
        if self.quantity > 1:
            parts.append(f"(Qty: {self.quantity})")
        if self.size:
            parts.append(f"Size: {self.size}")
        parts.append(f"₹{self.price}")
        return " • ".join(parts)


# ═══════════════════════════════════════════════════════════════════════════════
# Line items
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True, kw_only=True)
class _Purchase:
    product_id: str
    title: str
    quantity: int = 1
    price: str = "0"
    size: str | None = None
    color: ColorInfo | None = None
    image: str | None = None
    is_combo: bool = False
    id: str = ""
    unique_key: str = ""

    @property
    def unit_price_value(self) -> float:
        return price_value(self.price)

    @property
    def total_price(self) -> float:
        return self.unit_price_value * self.quantity


@dataclass(frozen=True, slots=True, kw_only=True)
class SimpleItem(_Purchase):
    """A plain product purchase."""


@dataclass(frozen=True, slots=True, kw_only=True)
class BundleItem(_Purchase):
    """
    A bundle purchase.

    `bundle_products` is absent (or stale) at checkout and filled in by
    enrichment; `bundle_product_sizes` maps product id → size chosen for
    this purchase.
    """

    bundle_id: str | None = None
    bundle_name: str | None = None
    bundle_price: str | None = None
    original_individual_price: str | None = None
    bundle_product_sizes: Mapping[str, str] = field(default_factory=dict[str, str])
    bundle_products: tuple[BundleProduct, ...] | None = None

    @property
    def bundle_price_value(self) -> float:
        return price_value(self.bundle_price)

    @property
    def original_individual_price_value(self) -> float:
        return price_value(self.original_individual_price)

    @property
    def savings(self) -> float:
        return (self.original_individual_price_value - self.bundle_price_value) * self.quantity

    @property
    def products(self) -> tuple[BundleProduct, ...]:
        return self.bundle_products or ()

    def size_for(self, product_id: str) -> str:
        """Size recorded for `product_id` in this purchase, or ""."""
        return self.bundle_product_sizes.get(product_id, "")

    def product(self, product_id: str) -> BundleProduct | None:
        for p in self.products:
            if p.product_id == product_id:
                return p
        return None

    def format_sizes(self) -> str:
        """`p1: XL, p2: M`"""
        return ", ".join(f"{pid}: {size}" for pid, size in self.bundle_product_sizes.items())

    def format_products(self) -> str:
        """`Tee (XL), Cap, Hoodie (M)`"""
        rendered: list[str] = []
        for p in self.products:
            title = p.title or p.product_id or "Unknown"
            size = p.size or (self.size_for(p.product_id) if p.product_id else "")
            rendered.append(f"{title} ({size})" if size else title)
        return ", ".join(rendered)


type LineItem = SimpleItem | BundleItem


__all__ = (
    "price_value",
    "ColorInfo",
    "BundleProduct",
    "SimpleItem",
    "BundleItem",
    "LineItem",
)
