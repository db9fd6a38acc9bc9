import pytest

from orderweave.models import BundleItem, BundleProduct, SimpleItem, price_value


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("₹1,234.56", 1234.56),
        ("499", 499.0),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("1.2.3", 0.0),
    ],
)
def test_price_value(text: str | None, expected: float) -> None:
    assert price_value(text) == expected


def test_bundle_savings() -> None:
    item = BundleItem(
        product_id="b1",
        title="Pack",
        bundle_price="1799",
        original_individual_price="2499",
        quantity=1,
    )
    assert item.savings == 700.0


def test_bundle_savings_scale_with_quantity() -> None:
    item = BundleItem(
        product_id="b1",
        title="Pack",
        bundle_price="₹1,000",
        original_individual_price="₹1,250.50",
        quantity=2,
    )
    assert item.savings == 501.0


def test_simple_total_price() -> None:
    item = SimpleItem(product_id="p1", title="Tee", price="₹1,299", quantity=3)
    assert item.total_price == 3897.0


def test_bundle_helpers() -> None:
    item = BundleItem(
        product_id="b1",
        title="Pack",
        bundle_product_sizes={"p1": "XL", "p2": "M"},
        bundle_products=(
            BundleProduct(product_id="p1", title="Tee", price="499"),
            BundleProduct(product_id="p3", title="Cap", price="299"),
        ),
    )
    assert item.size_for("p1") == "XL"
    assert item.size_for("nope") == ""
    assert item.format_sizes() == "p1: XL, p2: M"
    assert item.format_products() == "Tee (XL), Cap"
    assert item.product("p3") is not None
    assert item.product("p2") is None


def test_display_text() -> None:
    assert (
        BundleProduct(product_id="p1", title="Tee", price="499", quantity=2, size="M").display_text
        == "Tee • (Qty: 2) • Size: M • ₹499"
    )
    assert BundleProduct(product_id="p1", title="Cap", price="299").display_text == "Cap • ₹299"
