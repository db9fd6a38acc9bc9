"""
Catalog documents — read-only from orderweave's point of view.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class BundleEntry:
    """
    One entry of a bundle's nominal product list.

    Only the product id is reliable; everything else may be missing or stale.
    """

    product_id: str | None = None
    title: str | None = None
    price: str | None = None
    quantity: int | None = None
    image: str | None = None
    size: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Bundle:
    id: str
    name: str | None = None
    description: str | None = None
    products: tuple[BundleEntry, ...] = ()
    bundle_price: str | None = None
    original_total_price: str | None = None
    discount: float | None = None
    category: str | None = None
    image: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Product:
    """Canonical product record, normalized from `name|title` and `image|imageUrl`."""

    id: str
    title: str | None = None
    price: str | None = None
    image: str | None = None


__all__ = ("BundleEntry", "Bundle", "Product")
