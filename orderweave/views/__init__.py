"""
Views — composed read models built as nodnod graphs.

    from orderweave.views import OrderDetailsNode, OrderRef

    details = await OrderDetailsNode.execute(OrderRef("ord_1"), service)
"""

from orderweave.views._graph import node, TypedScope, Run, run
from orderweave.views._nodes import (
    OrderRef,
    OrderUnavailable,
    OrderDetails,
    RawOrderNode,
    EnrichedOrderNode,
    BundleSummariesNode,
    SizesNode,
    ReceiptNode,
    OrderDetailsNode,
)

__all__ = (
    "node",
    "TypedScope",
    "Run",
    "run",
    "OrderRef",
    "OrderUnavailable",
    "OrderDetails",
    "RawOrderNode",
    "EnrichedOrderNode",
    "BundleSummariesNode",
    "SizesNode",
    "ReceiptNode",
    "OrderDetailsNode",
)
