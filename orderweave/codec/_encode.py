"""
Encoding — typed models back into store documents (canonical key names).
"""

from __future__ import annotations

from typing import Any

from orderweave.models import (
    BundleItem,
    BundleProduct,
    LineItem,
    Order,
    ShippingAddress,
    SimpleItem,
    StatusChange,
)


def encode_bundle_product(product: BundleProduct) -> dict[str, Any]:
    return {
        "productId": product.product_id,
        "title": product.title,
        "price": product.price,
        "quantity": product.quantity,
        "image": product.image,
        "size": product.size,
    }


def encode_line_item(item: LineItem) -> dict[str, Any]:
    data: dict[str, Any] = {
        "productId": item.product_id,
        "title": item.title,
        "quantity": item.quantity,
        "price": item.price,
        "size": item.size,
        "color": {"name": item.color.name, "hex": item.color.hex} if item.color else None,
        "image": item.image,
        "isCombo": item.is_combo,
        "id": item.id,
        "uniqueKey": item.unique_key,
    }
    match item:
        case BundleItem():
            data |= {
                "isBundleItem": True,
                "bundleId": item.bundle_id,
                "bundleName": item.bundle_name,
                "bundlePrice": item.bundle_price,
                "originalIndividualPrice": item.original_individual_price,
                "bundleProductSizes": dict(item.bundle_product_sizes),
                "bundleProducts": (
                    [encode_bundle_product(p) for p in item.bundle_products]
                    if item.bundle_products is not None
                    else None
                ),
            }
        case SimpleItem():
            data["isBundleItem"] = False
    return data


def encode_address(address: ShippingAddress) -> dict[str, Any]:
    return {
        "firstName": address.first_name,
        "lastName": address.last_name,
        "streetAddress": address.street,
        "landmark": address.landmark,
        "city": address.city,
        "state": address.state,
        "pincode": address.pincode,
        "mobileNumber": address.phone,
    }


def encode_status_change(change: StatusChange) -> dict[str, Any]:
    return {"status": change.status.value, "timestamp": change.timestamp}


def encode_order(order: Order) -> dict[str, Any]:
    """Document fields for `order`; the id is the document key, not a field."""
    return {
        "userId": order.user_id,
        "items": [encode_line_item(item) for item in order.items],
        "address": encode_address(order.shipping_address),
        "amount": order.total_price,
        "status": order.status.value,
        "paymentStatus": order.payment_status.value,
        "paymentMode": order.payment_mode,
        "razorpayOrderId": order.razorpay_order_id,
        "razorpayPaymentId": order.payment_id,
        "createdAt": order.created_at,
        "customerEmail": order.customer_email,
        "statusHistory": [encode_status_change(c) for c in order.status_history],
    }


__all__ = (
    "encode_bundle_product",
    "encode_line_item",
    "encode_address",
    "encode_status_change",
    "encode_order",
)
