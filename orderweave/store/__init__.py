"""
Store — document store gateway.

    from orderweave import store as S

    db = S.InMemoryStore()
    match await db.get("orders", "ord_1"):
        case Ok(doc):
            ...

    async for docs in db.watch("orders", S.where("userId", "u1")):
        ...
"""

from orderweave.store._types import (
    Document,
    FieldFilter,
    where,
    StoreError,
    DocumentStore,
)
from orderweave.store._feed import SnapshotFeed
from orderweave.store._memory import InMemoryStore
from orderweave.store._sqlalchemy import (
    DocumentTable,
    SQLAlchemyDocumentStore,
    create_document_store,
)

__all__ = (
    "Document",
    "FieldFilter",
    "where",
    "StoreError",
    "DocumentStore",
    "SnapshotFeed",
    "InMemoryStore",
    "DocumentTable",
    "SQLAlchemyDocumentStore",
    "create_document_store",
)
