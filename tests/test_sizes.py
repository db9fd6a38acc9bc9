from orderweave.models import BundleEntry, Product
from orderweave.resolve import effective_size, reconcile_entry, reconcile_sizes


def test_assignment_wins_over_embedded_size() -> None:
    entry = BundleEntry(product_id="p1", size="M")
    assert effective_size(entry, {"p1": "XL"}) == "XL"


def test_embedded_size_is_the_fallback() -> None:
    entry = BundleEntry(product_id="p1", size="M")
    assert effective_size(entry, {"p2": "XL"}) == "M"


def test_no_size_anywhere_is_empty() -> None:
    products = reconcile_sizes([BundleEntry(product_id="p1", title="Tee")], {})
    assert len(products) == 1
    assert products[0].size == ""
    assert products[0].quantity == 1


def test_entry_without_product_id_keeps_embedded_size() -> None:
    assert effective_size(BundleEntry(size="L"), {"p1": "XL"}) == "L"


def test_canonical_product_data_is_preferred() -> None:
    entry = BundleEntry(product_id="p1", title="Old Tee", price="450", image="old.png", quantity=2)
    product = Product(id="p1", title="Tee", price="499", image=None)

    resolved = reconcile_entry(entry, {"p1": "S"}, product)

    assert resolved.title == "Tee"
    assert resolved.price == "499"
    assert resolved.image == "old.png"
    assert resolved.quantity == 2
    assert resolved.size == "S"


def test_unresolved_product_gets_placeholder_title() -> None:
    resolved = reconcile_entry(BundleEntry(product_id="x"), {}, None)
    assert resolved.title == "Unknown Product"
    assert resolved.price == "0"


def test_placeholder_is_configurable() -> None:
    resolved = reconcile_entry(BundleEntry(product_id="x"), {}, None, unknown_title="?", default_price="1")
    assert (resolved.title, resolved.price) == ("?", "1")
