"""
Order details view — one order composed into everything a detail screen shows.

    OrderRef
      └─ RawOrderNode          decoded order, customer email filled in
           └─ EnrichedOrderNode
                ├─ BundleSummariesNode   (store reads)
                ├─ SizesNode             (pure)
                └─ ReceiptNode           (pure)
                     └─ OrderDetailsNode

    match await OrderDetailsNode.execute(OrderRef("ord_1"), service):
        case Ok(details):
            print(details.receipt)
        case Error(e):
            ...
"""

import logging
from dataclasses import dataclass

from kungfu import Result, Ok, Error

from orderweave.models import Order
from orderweave.service import OrderError, OrderErrors, OrderService
from orderweave.summary import BundleSummary, SizesOverview, format_order, sizes_overview
from orderweave.views._graph import node, run

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OrderRef:
    order_id: str


class OrderUnavailable(Exception):
    def __init__(self, error: OrderError) -> None:
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True, slots=True)
class OrderDetails:
    order: Order
    bundle_summaries: tuple[BundleSummary, ...]
    sizes: SizesOverview
    receipt: str


# ═══════════════════════════════════════════════════════════════════════════════
# Nodes
# ═══════════════════════════════════════════════════════════════════════════════


@node
class RawOrderNode:
    def __init__(self, data: Order) -> None:
        self.data = data

    @classmethod
    async def __compose__(cls, ref: OrderRef, service: OrderService) -> "RawOrderNode":
        order = await service.get_stored_order(ref.order_id)
        if order is None:
            raise OrderUnavailable(OrderErrors.not_found(ref.order_id))
        return cls(order)


@node
class EnrichedOrderNode:
    def __init__(self, data: Order) -> None:
        self.data = data

    @classmethod
    async def __compose__(cls, raw: RawOrderNode, service: OrderService) -> "EnrichedOrderNode":
        return cls(await service.enricher.enrich(raw.data))


@node
class BundleSummariesNode:
    def __init__(self, data: tuple[BundleSummary, ...]) -> None:
        self.data = data

    @classmethod
    async def __compose__(
        cls,
        order: EnrichedOrderNode,
        service: OrderService,
    ) -> "BundleSummariesNode":
        return cls(tuple(await service.bundle_summaries(order.data)))


@node
class SizesNode:
    def __init__(self, data: SizesOverview) -> None:
        self.data = data

    @classmethod
    def __compose__(cls, order: EnrichedOrderNode) -> "SizesNode":
        return cls(sizes_overview(order.data))


@node
class ReceiptNode:
    def __init__(self, data: str) -> None:
        self.data = data

    @classmethod
    def __compose__(cls, order: EnrichedOrderNode) -> "ReceiptNode":
        return cls(format_order(order.data))


@node
class OrderDetailsNode:
    def __init__(self, data: OrderDetails) -> None:
        self.data = data

    @classmethod
    def __compose__(
        cls,
        order: EnrichedOrderNode,
        summaries: BundleSummariesNode,
        sizes: SizesNode,
        receipt: ReceiptNode,
    ) -> "OrderDetailsNode":
        return cls(OrderDetails(order.data, summaries.data, sizes.data, receipt.data))

    @classmethod
    async def execute(
        cls,
        ref: OrderRef,
        service: OrderService,
    ) -> Result[OrderDetails, OrderError]:
        try:
            result = await run(cls).inject(ref).inject_as(OrderService, service)
            return Ok(result.data)
        except OrderUnavailable as e:
            logger.debug("Order details unavailable: %s", e.error)
            return Error(e.error)


__all__ = (
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
