"""
In-memory document store — for tests and local development.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import aclosing
from typing import Any

from kungfu import Result, Ok, Error

from orderweave.store._feed import SnapshotFeed, new_document_id
from orderweave.store._types import Document, FieldFilter, StoreError

logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    In-memory document store.

    Note: single process only; data does not survive a restart.
    Documents are deep-copied on the way in and out, so callers can never
    mutate stored state by accident.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()
        self._feed = SnapshotFeed()

    @property
    def feed(self) -> SnapshotFeed:
        return self._feed

    def seed(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        """Synchronously place a document (fixtures / examples)."""
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(dict(fields))

    # ─── reads ────────────────────────────────────────────────────────────────

    async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
        async with self._lock:
            data = self._collections.get(collection, {}).get(doc_id)
            if data is None:
                return Ok(None)
            return Ok(Document(doc_id, copy.deepcopy(data)))

    async def query(
        self,
        collection: str,
        where: FieldFilter | None = None,
    ) -> Result[list[Document], StoreError]:
        async with self._lock:
            docs = [
                Document(doc_id, copy.deepcopy(data))
                for doc_id, data in self._collections.get(collection, {}).items()
                if where is None or where.matches(data)
            ]
            return Ok(docs)

    async def watch(
        self,
        collection: str,
        where: FieldFilter | None = None,
    ) -> AsyncIterator[list[Document]]:
        async def snapshot() -> list[Document]:
            match await self.query(collection, where):
                case Ok(docs):
                    return docs
                case Error(e):
                    logger.warning("Snapshot of %s failed: %s", collection, e)
                    return []

        async with aclosing(self._feed.follow(collection, snapshot)) as snapshots:
            async for docs in snapshots:
                yield docs

    async def watch_document(self, collection: str, doc_id: str) -> AsyncIterator[Document | None]:
        async def snapshot() -> Document | None:
            match await self.get(collection, doc_id):
                case Ok(doc):
                    return doc
                case Error(e):
                    logger.warning("Snapshot of %s/%s failed: %s", collection, doc_id, e)
                    return None

        async with aclosing(self._feed.follow(collection, snapshot)) as snapshots:
            async for doc in snapshots:
                yield doc

    # ─── writes ───────────────────────────────────────────────────────────────

    async def set(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
        *,
        merge: bool = False,
    ) -> Result[None, StoreError]:
        async with self._lock:
            docs = self._collections.setdefault(collection, {})
            new_fields = copy.deepcopy(dict(fields))
            if merge and doc_id in docs:
                docs[doc_id].update(new_fields)
            else:
                docs[doc_id] = new_fields
        self._feed.notify(collection)
        return Ok(None)

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
    ) -> Result[None, StoreError]:
        async with self._lock:
            existing = self._collections.get(collection, {}).get(doc_id)
            if existing is None:
                return Error(StoreError(f"No document to update: {collection}/{doc_id}"))
            existing.update(copy.deepcopy(dict(fields)))
        self._feed.notify(collection)
        return Ok(None)

    async def add(self, collection: str, fields: Mapping[str, Any]) -> Result[str, StoreError]:
        doc_id = new_document_id()
        async with self._lock:
            self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(dict(fields))
        self._feed.notify(collection)
        return Ok(doc_id)

    async def delete(self, collection: str, doc_id: str) -> Result[bool, StoreError]:
        async with self._lock:
            docs = self._collections.get(collection, {})
            if doc_id not in docs:
                return Ok(False)
            del docs[doc_id]
        self._feed.notify(collection)
        return Ok(True)


__all__ = ("InMemoryStore",)
