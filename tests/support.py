"""Shared document factories and helpers for the test suite."""

from datetime import UTC, datetime
from typing import Any

from kungfu import Ok, Error

from orderweave.store import InMemoryStore


def unwrap(result: Any) -> Any:
    match result:
        case Ok(value):
            return value
        case Error(e):
            raise AssertionError(f"expected Ok, got Error({e!r})")


def unwrap_err(result: Any) -> Any:
    match result:
        case Error(e):
            return e
        case Ok(value):
            raise AssertionError(f"expected Error, got Ok({value!r})")


def address(**overrides: Any) -> dict[str, Any]:
    return {
        "firstName": "Asha",
        "lastName": "Rao",
        "streetAddress": "12 MG Road",
        "city": "Pune",
        "state": "MH",
        "pincode": "411001",
        "mobileNumber": "9876543210",
    } | overrides


def simple_item(**overrides: Any) -> dict[str, Any]:
    return {
        "productId": "p9",
        "title": "Socks",
        "quantity": 2,
        "price": "199",
        "size": "M",
        "id": "item-simple",
        "isBundleItem": False,
    } | overrides


def bundle_item(**overrides: Any) -> dict[str, Any]:
    return {
        "productId": "b1",
        "title": "Summer Pack",
        "quantity": 1,
        "price": "1799",
        "id": "item-bundle",
        "isBundleItem": True,
        "bundleId": "b1",
        "bundleName": "Old Pack Name",
        "bundlePrice": "1500",
        "originalIndividualPrice": "2000",
        "bundleProductSizes": {"p1": "XL"},
    } | overrides


def order_doc(items: list[dict[str, Any]], **overrides: Any) -> dict[str, Any]:
    return {
        "userId": "u1",
        "items": items,
        "address": address(),
        "amount": 2197,
        "status": "pending",
        "paymentStatus": "pending",
        "paymentMode": "cod",
        "createdAt": datetime(2024, 5, 1, 10, 30, tzinfo=UTC),
    } | overrides


BUNDLE_B1 = {
    "name": "Summer Pack",
    "description": "Three summer essentials",
    "bundlePrice": "1799",
    "originalTotalPrice": "2499",
    "discount": 28,
    "category": "combo",
    "image": "pack.png",
    "products": [
        {"productId": "p1", "title": "Old Tee", "size": "M"},
        {"productId": "p2", "title": "Cap"},
        {"productId": "x"},
    ],
}

PRODUCT_P1 = {"name": "Tee", "price": "499", "imageUrl": "tee.png"}
PRODUCT_P2 = {"title": "Cap", "price": "299", "image": "cap.png"}


def seeded_store() -> InMemoryStore:
    store = InMemoryStore()
    store.seed("bundles", "b1", BUNDLE_B1)
    store.seed("products", "p1", PRODUCT_P1)
    store.seed("products", "p2", PRODUCT_P2)
    store.seed("users", "u1", {"email": "asha@example.com"})
    store.seed("orders", "ord_bundle", order_doc([bundle_item(), simple_item()]))
    store.seed(
        "orders",
        "ord_simple",
        order_doc(
            [simple_item()],
            userId="u2",
            customerEmail="vikram@example.com",
            status="delivered",
            amount=398,
            createdAt=datetime(2024, 6, 1, tzinfo=UTC),
        ),
    )
    return store
