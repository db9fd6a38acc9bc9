"""
Live orders — every snapshot re-read and re-enriched.

Status changes go through the transition rule; a rejected change never
reaches the store, so no snapshot is emitted for it.
"""

import asyncio
from contextlib import aclosing

from kungfu import Ok, Error

from orderweave.models import OrderStatus, PaymentStatus
from orderweave.service import OrderService
from examples._infra import banner, demo_store, run


async def main() -> None:
    service = OrderService(demo_store())

    async def admin() -> None:
        await asyncio.sleep(0.05)
        steps = [
            (OrderStatus.PROCESSING, None),
            (OrderStatus.SHIPPED, PaymentStatus.PAID),
            (OrderStatus.PENDING, None),
            (OrderStatus.DELIVERED, None),
        ]
        for status, payment in steps:
            if payment is None:
                result = await service.update_status("ord_summer", status)
            else:
                result = await service.update_order_and_payment_status("ord_summer", status, payment)
            match result:
                case Ok(_):
                    print(f"  → {status.label}")
                case Error(e):
                    print(f"  ✗ {e}")
            await asyncio.sleep(0.05)

    banner("Watching ord_summer")
    writer = asyncio.create_task(admin())
    async with aclosing(service.watch_order("ord_summer")) as snapshots:
        async for order in snapshots:
            if order is None:
                break
            bundle = order.bundle_items[0]
            print(f"  [{order.status.label} / {order.payment_status.label}] {bundle.format_products()}")
            if order.status is OrderStatus.DELIVERED:
                break
    await writer


if __name__ == "__main__":
    run(main)
