"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from typing import Any

from kungfu import Ok, Error
from sqlalchemy.ext.asyncio import AsyncEngine

from orderweave.config import Settings, configure_logging
from orderweave.store import InMemoryStore, SQLAlchemyDocumentStore, create_document_store


# Demo data: a small catalog plus two orders, one with a bundle
_ADDRESS = {
    "firstName": "Asha",
    "lastName": "Rao",
    "streetAddress": "12 MG Road",
    "city": "Pune",
    "state": "MH",
    "pincode": "411001",
    "mobileNumber": "9876543210",
}

DEMO_DOCUMENTS: list[tuple[str, str, dict[str, Any]]] = [
    ("products", "tee", {"name": "Classic Tee", "price": "499", "imageUrl": "tee.png"}),
    ("products", "cap", {"title": "Sun Cap", "price": "299", "image": "cap.png"}),
    (
        "bundles",
        "summer",
        {
            "name": "Summer Pack",
            "description": "Tee, cap and a surprise",
            "bundlePrice": "1799",
            "originalTotalPrice": "2499",
            "discount": 28,
            "category": "combo",
            "products": [
                {"productId": "tee", "size": "M"},
                {"productId": "cap"},
                {"productId": "retired-item", "title": "Beach Towel"},
            ],
        },
    ),
    ("users", "u1", {"email": "asha@example.com"}),
    (
        "orders",
        "ord_summer",
        {
            "userId": "u1",
            "address": _ADDRESS,
            "amount": 2197,
            "status": "pending",
            "paymentStatus": "pending",
            "paymentMode": "online",
            "createdAt": datetime(2024, 5, 1, 10, 30, tzinfo=UTC),
            "items": [
                {
                    "productId": "summer",
                    "title": "Summer Pack",
                    "quantity": 1,
                    "price": "1799",
                    "isBundleItem": True,
                    "bundleId": "summer",
                    "bundlePrice": 1799,
                    "originalIndividualPrice": 2499,
                    "bundleProductSizes": {"tee": "XL"},
                },
                {"productId": "socks", "title": "Socks", "quantity": 2, "price": "199", "size": "M"},
            ],
        },
    ),
    (
        "orders",
        "ord_socks",
        {
            "userId": "u1",
            "address": _ADDRESS,
            "amount": 398,
            "status": "delivered",
            "paymentStatus": "paid",
            "createdAt": datetime(2024, 4, 2, 9, 0, tzinfo=UTC),
            "items": [{"productId": "socks", "title": "Socks", "quantity": 2, "price": "199"}],
        },
    ),
]


def demo_store() -> InMemoryStore:
    store = InMemoryStore()
    for collection, doc_id, fields in DEMO_DOCUMENTS:
        store.seed(collection, doc_id, fields)
    return store


async def demo_sql_store(url: str) -> tuple[SQLAlchemyDocumentStore, AsyncEngine]:
    """The demo documents written to a SQL-backed store at `url`."""
    store, engine = await create_document_store(url)
    for collection, doc_id, fields in DEMO_DOCUMENTS:
        match await store.set(collection, doc_id, fields):
            case Ok(_):
                pass
            case Error(e):
                raise RuntimeError(e.message)
    return store, engine


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    configure_logging(Settings.from_env())
    asyncio.run(main())
