"""
Document store gateway — typed protocol over a Firestore-like document database.

All reads and writes return Result for explicit error handling;
live views are async iterators of full snapshots.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from kungfu import Result


# ═══════════════════════════════════════════════════════════════════════════════
# Documents
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Document:
    """A stored document: store-assigned id + loosely-typed fields."""

    id: str
    data: Mapping[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


@dataclass(frozen=True, slots=True)
class FieldFilter:
    """Equality filter: `field == value`."""

    field: str
    value: Any

    def matches(self, data: Mapping[str, Any]) -> bool:
        return self.field in data and data[self.field] == self.value


def where(field: str, value: Any) -> FieldFilter:
    return FieldFilter(field, value)


# ═══════════════════════════════════════════════════════════════════════════════
# Store Error
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class StoreError:
    """Storage operation error."""

    message: str
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════════════════════════
# Store Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class DocumentStore(Protocol):
    """
    Document store protocol.

    Implement this for custom backends (Firestore, Mongo, ...).

    Example:
        class FirestoreStore:
            def __init__(self, client: firestore.AsyncClient) -> None:
                self.client = client

            async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
                try:
                    snap = await self.client.collection(collection).document(doc_id).get()
                    return Ok(Document(snap.id, snap.to_dict()) if snap.exists else None)
                except Exception as e:
                    return Error(StoreError(f"Failed to get {collection}/{doc_id}: {e}", e))

            # ... other methods
    """

    async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
        """Get document by id. Returns Ok(None) if not found."""
        ...

    async def query(
        self,
        collection: str,
        where: FieldFilter | None = None,
    ) -> Result[list[Document], StoreError]:
        """All documents of a collection, optionally filtered."""
        ...

    def watch(
        self,
        collection: str,
        where: FieldFilter | None = None,
    ) -> AsyncIterator[list[Document]]:
        """
        Live query. First emission is the current snapshot, then one full
        snapshot after every committed write to the collection.
        """
        ...

    def watch_document(self, collection: str, doc_id: str) -> AsyncIterator[Document | None]:
        """Live single document; None while it does not exist."""
        ...

    async def set(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
        *,
        merge: bool = False,
    ) -> Result[None, StoreError]:
        """Create or overwrite (merge=False) / shallow-merge (merge=True)."""
        ...

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
    ) -> Result[None, StoreError]:
        """Update fields of an existing document. Missing document is an error."""
        ...

    async def add(self, collection: str, fields: Mapping[str, Any]) -> Result[str, StoreError]:
        """Create document with a store-assigned id. Returns the id."""
        ...

    async def delete(self, collection: str, doc_id: str) -> Result[bool, StoreError]:
        """Delete document. Returns Ok(True) if existed."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Document",
    "FieldFilter",
    "where",
    "StoreError",
    "DocumentStore",
)
