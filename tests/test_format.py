import pytest

from orderweave.codec import decode_order
from orderweave.enrich import Enricher
from orderweave.store import Document
from orderweave.summary import format_inr, format_order

from support import bundle_item, order_doc, simple_item


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (123456.5, "₹1,23,456.50"),
        (999, "₹999.00"),
        (1000, "₹1,000.00"),
        (12345678, "₹1,23,45,678.00"),
        (0, "₹0.00"),
        (None, "₹0.00"),
        (-1500.25, "-₹1,500.25"),
    ],
)
def test_format_inr(amount: float | None, expected: str) -> None:
    assert format_inr(amount) == expected


async def test_receipt(enricher: Enricher) -> None:
    order = decode_order(
        Document("ord_r", order_doc([bundle_item(), simple_item()], customerEmail="asha@example.com"))
    )
    receipt = format_order(await enricher.enrich(order))

    assert receipt.splitlines() == [
        "Order ID: ord_r",
        "Customer: Asha Rao",
        "Email: asha@example.com",
        "Phone: 9876543210",
        "Status: Pending",
        "Payment: Pending",
        "Amount: ₹2,197.00",
        "---",
        "Bundle: Summer Pack",
        "  Price: ₹1799",
        "  Original: ₹2499",
        "  Savings: ₹700.00",
        "  Products:",
        "    - Tee (XL) - ₹499",
        "    - Cap - ₹299",
        "    - Unknown Product - ₹0",
        "Item: Socks",
        "  Quantity: 2",
        "  Price: ₹199",
        "  Size: M",
        "  Subtotal: ₹398.00",
    ]


def test_receipt_never_resolves() -> None:
    order = decode_order(Document("ord_r", order_doc([bundle_item()])))
    receipt = format_order(order)

    assert "Bundle: Old Pack Name" in receipt
    assert "  Savings: ₹500.00" in receipt
    assert receipt.rstrip().endswith("Products:")
