"""
Models — orders, line items, catalog records.

    from orderweave import models as M

    match item:
        case M.BundleItem(bundle_id=bid):
            ...
        case M.SimpleItem():
            ...
"""

from orderweave.models._status import (
    OrderStatus,
    PaymentStatus,
    is_valid_transition,
)
from orderweave.models._items import (
    price_value,
    ColorInfo,
    BundleProduct,
    SimpleItem,
    BundleItem,
    LineItem,
)
from orderweave.models._order import (
    ShippingAddress,
    StatusChange,
    Order,
)
from orderweave.models._catalog import (
    BundleEntry,
    Bundle,
    Product,
)

__all__ = (
    "OrderStatus",
    "PaymentStatus",
    "is_valid_transition",
    "price_value",
    "ColorInfo",
    "BundleProduct",
    "SimpleItem",
    "BundleItem",
    "LineItem",
    "ShippingAddress",
    "StatusChange",
    "Order",
    "BundleEntry",
    "Bundle",
    "Product",
)
