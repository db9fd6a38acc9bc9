"""
Formatting — human-readable text for orders. Never resolves anything.
"""

from __future__ import annotations

from orderweave.models import BundleItem, Order, SimpleItem
from orderweave.summary._aggregate import bundle_products_with_details

RUPEE = "₹"


def format_inr(amount: float | None) -> str:
    """
    Indian digit grouping, two decimals.

        format_inr(123456.5)  # "₹1,23,456.50"
        format_inr(None)      # "₹0.00"
    """
    value = amount or 0.0
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    head, tail = whole[:-3], whole[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"{sign}{RUPEE}{','.join([*groups, tail])}.{fraction}"


def format_order(order: Order) -> str:
    """Multi-line receipt of `order` as currently held (enriched or not)."""
    lines = [
        f"Order ID: {order.id}",
        f"Customer: {order.customer_name}",
        f"Email: {order.customer_email}",
        f"Phone: {order.shipping_address.phone}",
        f"Status: {order.status.label}",
        f"Payment: {order.payment_status.label}",
        f"Amount: {format_inr(order.total_price)}",
        "---",
    ]

    for item in order.items:
        match item:
            case BundleItem():
                lines += [
                    f"Bundle: {item.bundle_name or item.title}",
                    f"  Price: {RUPEE}{item.bundle_price or '0'}",
                    f"  Original: {RUPEE}{item.original_individual_price or '0'}",
                    f"  Savings: {format_inr(item.savings)}",
                    "  Products:",
                ]
                for product in bundle_products_with_details(item):
                    label = f"{product.title} ({product.size})" if product.size else product.title
                    lines.append(f"    - {label} - {RUPEE}{product.price}")
            case SimpleItem():
                lines += [
                    f"Item: {item.title}",
                    f"  Quantity: {item.quantity}",
                    f"  Price: {RUPEE}{item.price}",
                ]
                if item.size:
                    lines.append(f"  Size: {item.size}")
                lines.append(f"  Subtotal: {format_inr(item.total_price)}")

    return "\n".join(lines) + "\n"


__all__ = ("RUPEE", "format_inr", "format_order")
