"""
Decoding — loose store documents into typed models.

All "loose schema" handling lives here: every decoder accepts a small closed
set of alternate keys (`name|title`, `image|imageUrl`, string-or-map colors,
...) and falls back to a default instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from orderweave.models import (
    Bundle,
    BundleEntry,
    BundleItem,
    BundleProduct,
    ColorInfo,
    LineItem,
    Order,
    OrderStatus,
    PaymentStatus,
    Product,
    ShippingAddress,
    SimpleItem,
    StatusChange,
    price_value,
)
from orderweave.store import Document

# ═══════════════════════════════════════════════════════════════════════════════
# Field helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not None."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str | None:
    match value:
        case None:
            return None
        case str():
            return value
        case _:
            return str(value)


def _int(value: Any, default: int | None) -> int | None:
    match value:
        case bool():
            return default
        case int():
            return value
        case float() if value.is_integer():
            return int(value)
        case str():
            try:
                return int(value.strip())
            except ValueError:
                return default
        case _:
            return default


def _float(value: Any) -> float | None:
    match value:
        case bool() | None:
            return None
        case int() | float():
            return float(value)
        case str():
            return price_value(value)
        case _:
            return None


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _maps(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list | tuple):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def _datetime(value: Any) -> datetime:
    """Aware datetime; naive values are taken as UTC."""
    match value:
        case datetime():
            parsed = value
        case str():
            try:
                parsed = datetime.fromisoformat(value)
            except ValueError:
                return datetime.now(UTC)
        case _:
            return datetime.now(UTC)
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


# ═══════════════════════════════════════════════════════════════════════════════
# Line items
# ═══════════════════════════════════════════════════════════════════════════════


def decode_color(value: Any) -> ColorInfo | None:
    """Hex string (`"#FF0000"`) or `{name, hex}` map."""
    match value:
        case str():
            return ColorInfo(name="", hex=value)
        case Mapping():
            return ColorInfo(
                name=_text(value.get("name")) or "",
                hex=_text(value.get("hex")) or "#000000",
            )
        case _:
            return None


def decode_bundle_product(data: Mapping[str, Any]) -> BundleProduct:
    product_id = _text(data.get("productId"))
    return BundleProduct(
        product_id=product_id,
        title=_text(_first(data, "title", "name")) or product_id or "",
        price=_text(data.get("price")) or "0",
        quantity=_int(data.get("quantity"), 1) or 1,
        image=_text(_first(data, "image", "imageUrl")),
        size=_text(data.get("size")) or "",
    )


def decode_line_item(data: Mapping[str, Any], position: int = 0) -> LineItem:
    """
    Decode one entry of an order's `items` array.

    `isBundleItem` selects the variant. `uniqueKey` falls back to the item id,
    then to `<productId>#<position>` so decoding stays deterministic.
    """
    product_id = _text(_first(data, "productId", "id")) or ""
    item_id = _text(data.get("id")) or ""
    common: dict[str, Any] = {
        "product_id": product_id,
        "title": _text(_first(data, "title", "name")) or "",
        "quantity": _int(data.get("quantity"), 1) or 1,
        "price": _text(data.get("price")) or "0",
        "size": _text(data.get("size")),
        "color": decode_color(data.get("color")),
        "image": _text(_first(data, "image", "imageUrl")),
        "is_combo": _flag(data.get("isCombo")),
        "id": item_id,
        "unique_key": _text(data.get("uniqueKey")) or item_id or f"{product_id}#{position}",
    }
    if not _flag(data.get("isBundleItem")):
        return SimpleItem(**common)

    sizes = data.get("bundleProductSizes")
    stored_products = data.get("bundleProducts")
    return BundleItem(
        **common,
        bundle_id=_text(data.get("bundleId")) or None,
        bundle_name=_text(data.get("bundleName")),
        bundle_price=_text(data.get("bundlePrice")),
        original_individual_price=_text(data.get("originalIndividualPrice")),
        bundle_product_sizes=(
            {str(k): str(v) for k, v in sizes.items() if v is not None}
            if isinstance(sizes, Mapping)
            else {}
        ),
        bundle_products=(
            tuple(decode_bundle_product(p) for p in _maps(stored_products))
            if isinstance(stored_products, list | tuple)
            else None
        ),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════


def decode_address(data: Any) -> ShippingAddress:
    if not isinstance(data, Mapping):
        return ShippingAddress()
    return ShippingAddress(
        first_name=_text(data.get("firstName")) or "",
        last_name=_text(data.get("lastName")) or "",
        street=_text(_first(data, "streetAddress", "street")) or "",
        landmark=_text(data.get("landmark")) or "",
        city=_text(data.get("city")) or "",
        state=_text(data.get("state")) or "",
        pincode=_text(data.get("pincode")) or "",
        phone=_text(_first(data, "mobileNumber", "phone")) or "",
    )


def decode_status_history(value: Any) -> tuple[StatusChange, ...]:
    return tuple(
        StatusChange(
            status=OrderStatus.parse(entry.get("status")),
            timestamp=_text(entry.get("timestamp")) or "",
        )
        for entry in _maps(value)
    )


def decode_order(doc: Document) -> Order:
    data = doc.data
    items = tuple(decode_line_item(item, i) for i, item in enumerate(_maps(data.get("items"))))
    address = decode_address(data.get("address"))

    return Order(
        id=doc.id,
        customer_name=address.full_name or "Unknown",
        customer_email=_text(_first(data, "customerEmail", "userEmail")) or "",
        total_price=_float(data.get("amount")) or 0.0,
        total_products=sum(item.quantity for item in items),
        payment_mode=_text(data.get("paymentMode")) or "cod",
        payment_id=_text(data.get("razorpayPaymentId")),
        status=OrderStatus.parse(data.get("status")),
        payment_status=PaymentStatus.parse(data.get("paymentStatus")),
        created_at=_datetime(data.get("createdAt")),
        items=items,
        shipping_address=address,
        razorpay_order_id=_text(data.get("razorpayOrderId")),
        user_id=_text(data.get("userId")),
        status_history=decode_status_history(data.get("statusHistory")),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


def decode_bundle_entry(data: Mapping[str, Any]) -> BundleEntry:
    product_id = data.get("productId")
    return BundleEntry(
        product_id=product_id if isinstance(product_id, str) and product_id else None,
        title=_text(data.get("title")),
        price=_text(data.get("price")),
        quantity=_int(data.get("quantity"), None),
        image=_text(_first(data, "image", "imageUrl")),
        size=_text(data.get("size")),
    )


def decode_bundle(doc: Document) -> Bundle:
    data = doc.data
    return Bundle(
        id=doc.id,
        name=_text(data.get("name")),
        description=_text(data.get("description")),
        products=tuple(decode_bundle_entry(p) for p in _maps(data.get("products"))),
        bundle_price=_text(data.get("bundlePrice")),
        original_total_price=_text(data.get("originalTotalPrice")),
        discount=_float(data.get("discount")),
        category=_text(data.get("category")),
        image=_text(data.get("image")),
    )


def decode_product(doc: Document) -> Product:
    data = doc.data
    return Product(
        id=doc.id,
        title=_text(_first(data, "name", "title")),
        price=_text(data.get("price")),
        image=_text(_first(data, "image", "imageUrl")),
    )


__all__ = (
    "decode_color",
    "decode_bundle_product",
    "decode_line_item",
    "decode_address",
    "decode_status_history",
    "decode_order",
    "decode_bundle_entry",
    "decode_bundle",
    "decode_product",
)
