"""
Order details — one order resolved into everything a detail screen needs,
read from the SQL document store named by ORDERWEAVE_DATABASE_URL.

    OrderRef → stored order → enriched order → summaries / sizes / receipt
"""

from kungfu import Ok, Error

from orderweave.config import Settings
from orderweave.service import OrderService, order_stats, total_revenue
from orderweave.views import OrderDetailsNode, OrderRef
from examples._infra import banner, demo_sql_store, run


async def main() -> None:
    settings = Settings.from_env()
    store, engine = await demo_sql_store(settings.database_url)
    try:
        await show(OrderService(store, settings=settings))
    finally:
        await engine.dispose()


async def show(service: OrderService) -> None:
    banner("Order details (graph)")
    match await OrderDetailsNode.execute(OrderRef("ord_summer"), service):
        case Ok(details):
            print(details.receipt)
            for summary in details.bundle_summaries:
                print(f"  bundle {summary.bundle_id}: {summary.name} ({summary.item_count} item)")
            for sizes in details.sizes.bundle_items:
                print(f"  sizes in {sizes.bundle_name}: {dict(sizes.product_sizes)}")
        case Error(e):
            print(f"  ✗ {e}")

    banner("Missing order")
    match await OrderDetailsNode.execute(OrderRef("ord_missing"), service):
        case Ok(_):
            print("  unexpected")
        case Error(e):
            print(f"  ✗ {e}")

    banner("Dashboard")
    orders = await service.list_orders()
    print(f"  stats:   {order_stats(orders)}")
    print(f"  revenue: ₹{total_revenue(orders):.2f}")


if __name__ == "__main__":
    run(main)
