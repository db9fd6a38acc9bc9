"""
SQLAlchemy integration — a document store on top of any async SQL database.

Usage:
    store, engine = await create_document_store("sqlite+aiosqlite:///orders.db")

    match await store.get("orders", order_id):
        case Ok(doc):
            ...
        case Error(e):
            ...

    await engine.dispose()

Every document lives in one `documents` table keyed by (collection, id);
the fields are stored as JSON. Datetimes are written as ISO-8601 strings,
which the order codec reads back transparently.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import aclosing
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, ColumnElement, DateTime, String, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from kungfu import Result, Ok, Error

from orderweave.store._feed import SnapshotFeed, new_document_id
from orderweave.store._types import Document, FieldFilter, StoreError

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Table
# ═══════════════════════════════════════════════════════════════════════════════


class Base(DeclarativeBase):
    pass


class DocumentTable(Base):
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


def _to_json(value: Any) -> Any:
    """Make a field value JSON-safe."""
    match value:
        case datetime():
            return value.isoformat()
        case Mapping():
            return {str(k): _to_json(v) for k, v in value.items()}
        case list() | tuple():
            return [_to_json(v) for v in value]
        case _:
            return value


def _field_equals(where: FieldFilter) -> ColumnElement[bool] | None:
    """SQL equality on one JSON field; None when the value has no scalar SQL form."""
    element = DocumentTable.data[where.field]
    match _to_json(where.value):
        case bool() as value:
            return element.as_boolean() == value
        case int() as value:
            return element.as_integer() == value
        case float() as value:
            return element.as_float() == value
        case str() as value:
            return element.as_string() == value
        case _:
            return None


def _now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


# ═══════════════════════════════════════════════════════════════════════════════
# Store
# ═══════════════════════════════════════════════════════════════════════════════


class SQLAlchemyDocumentStore:
    """
    Document store backed by SQLAlchemy.

    Live watchers are notified after every write committed through this
    instance; writes made by other processes are not observed.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._feed = SnapshotFeed()

    @property
    def feed(self) -> SnapshotFeed:
        return self._feed

    async def get(self, collection: str, doc_id: str) -> Result[Document | None, StoreError]:
        try:
            async with self._session_factory() as session:
                row = await session.get(DocumentTable, (collection, doc_id))
                if row is None:
                    return Ok(None)
                return Ok(Document(row.id, dict(row.data)))

        except Exception as e:
            return Error(StoreError(f"Failed to get {collection}/{doc_id}: {e}", e))

    async def query(
        self,
        collection: str,
        where: FieldFilter | None = None,
    ) -> Result[list[Document], StoreError]:
        try:
            async with self._session_factory() as session:
                stmt = (
                    select(DocumentTable)
                    .where(DocumentTable.collection == collection)
                    .order_by(DocumentTable.created_at, DocumentTable.id)
                )
                if where is not None and (clause := _field_equals(where)) is not None:
                    stmt = stmt.where(clause)
                rows = (await session.execute(stmt)).scalars().all()
                docs = [Document(row.id, dict(row.data)) for row in rows]
                if where is not None:
                    expected = FieldFilter(where.field, _to_json(where.value))
                    docs = [d for d in docs if expected.matches(d.data)]
                return Ok(docs)

        except Exception as e:
            return Error(StoreError(f"Failed to query {collection}: {e}", e))

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

    async def set(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
        *,
        merge: bool = False,
    ) -> Result[None, StoreError]:
        try:
            async with self._session_factory() as session:
                data = _to_json(fields)
                now = _now()
                row = await session.get(DocumentTable, (collection, doc_id))
                if row is None:
                    session.add(
                        DocumentTable(
                            collection=collection,
                            id=doc_id,
                            data=data,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                else:
                    # New dict instance so the JSON column is flagged dirty
                    row.data = {**row.data, **data} if merge else data
                    row.updated_at = now
                await session.commit()

        except Exception as e:
            return Error(StoreError(f"Failed to set {collection}/{doc_id}: {e}", e))

        self._feed.notify(collection)
        return Ok(None)

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Mapping[str, Any],
    ) -> Result[None, StoreError]:
        try:
            async with self._session_factory() as session:
                row = await session.get(DocumentTable, (collection, doc_id))
                if row is None:
                    return Error(StoreError(f"No document to update: {collection}/{doc_id}"))

                row.data = {**row.data, **_to_json(fields)}
                row.updated_at = _now()
                await session.commit()

        except Exception as e:
            return Error(StoreError(f"Failed to update {collection}/{doc_id}: {e}", e))

        self._feed.notify(collection)
        return Ok(None)

    async def add(self, collection: str, fields: Mapping[str, Any]) -> Result[str, StoreError]:
        doc_id = new_document_id()
        match await self.set(collection, doc_id, fields):
            case Ok(_):
                return Ok(doc_id)
            case Error(e):
                return Error(e)

    async def delete(self, collection: str, doc_id: str) -> Result[bool, StoreError]:
        try:
            async with self._session_factory() as session:
                row = await session.get(DocumentTable, (collection, doc_id))
                if row is None:
                    return Ok(False)

                await session.delete(row)
                await session.commit()

        except Exception as e:
            return Error(StoreError(f"Failed to delete {collection}/{doc_id}: {e}", e))

        self._feed.notify(collection)
        return Ok(True)


# ═══════════════════════════════════════════════════════════════════════════════
# Database Setup
# ═══════════════════════════════════════════════════════════════════════════════


async def create_document_store(
    url: str = "sqlite+aiosqlite:///:memory:",
) -> tuple[SQLAlchemyDocumentStore, AsyncEngine]:
    """Create schema and return (store, engine). Dispose the engine when done."""
    engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    return SQLAlchemyDocumentStore(async_sessionmaker(engine, expire_on_commit=False)), engine


__all__ = (
    "DocumentTable",
    "SQLAlchemyDocumentStore",
    "create_document_store",
)
