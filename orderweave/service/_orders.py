"""
Order service — the application boundary.

Reads are total: they decode, fill in the customer email and enrich, and
absorb failures (a broken order is skipped, a missing one is None).
Writes return Result[..., OrderError].

    service = OrderService(store)

    order = await service.get_order("ord_1")

    match await service.update_status("ord_1", OrderStatus.SHIPPED):
        case Ok(_):
            ...
        case Error(OrderError(kind=OrderErrorKind.INVALID_TRANSITION)):
            ...
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

import combinators as C
from combinators import lift as L
from kungfu import Result, Ok, Error

from orderweave._types import ORDERS, USERS, EnrichmentError
from orderweave.codec import decode_order, encode_order, encode_status_change
from orderweave.config import Settings
from orderweave.enrich import Enricher
from orderweave.models import (
    Order,
    OrderStatus,
    PaymentStatus,
    StatusChange,
    is_valid_transition,
)
from orderweave.resolve import BundleResolver
from orderweave.service._errors import OrderError, OrderErrors
from orderweave.service._queries import has_more_pages, paginate
from orderweave.store import Document, DocumentStore, FieldFilter, where
from orderweave.summary import BundleSummary, bundle_summaries

logger = logging.getLogger(__name__)


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


class OrderService:
    def __init__(
        self,
        store: DocumentStore,
        enricher: Enricher | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or Settings()
        self._enricher = enricher or Enricher(store, self._settings.enrichment)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def enricher(self) -> Enricher:
        return self._enricher

    # ═══════════════════════════════════════════════════════════════════════════
    # Reads
    # ═══════════════════════════════════════════════════════════════════════════

    async def fetch_user_email(self, user_id: str) -> str:
        """`users/{user_id}.email`, or "" when unavailable."""
        match await self._store.get(USERS, user_id):
            case Ok(None):
                return ""
            case Ok(doc):
                email = doc.get("email")
                return email if isinstance(email, str) else ""
            case Error(e):
                logger.debug("User %s unavailable: %s", user_id, e)
                return ""

    async def get_order(self, order_id: str) -> Order | None:
        return await self._read(order_id, enrich=True)

    async def get_stored_order(self, order_id: str) -> Order | None:
        """Decoded order with the customer email filled in, without enrichment."""
        return await self._read(order_id, enrich=False)

    async def list_orders(self) -> list[Order]:
        """All orders, newest first."""
        return await self._query(None)

    async def get_user_orders(self, user_id: str) -> list[Order]:
        """Orders of one customer, newest first."""
        return await self._query(where("userId", user_id))

    async def find_by_contact(
        self,
        email: str | None = None,
        phone: str | None = None,
    ) -> list[Order]:
        """
        Guest lookup. An email matches the customer email (case-insensitive)
        or the shipping phone; a phone is used only when no email is given.
        """
        if not email and not phone:
            return []

        def matches(order: Order) -> bool:
            if email:
                return (
                    order.customer_email.lower() == email.lower()
                    or order.shipping_address.phone == email
                )
            return order.shipping_address.phone == phone

        return [o for o in await self.list_orders() if matches(o)]

    async def bundle_summaries(self, order: Order) -> list[BundleSummary]:
        resolver = BundleResolver(self._store, settings=self._enricher.settings)
        return await bundle_summaries(order, resolver)

    # ─── live ─────────────────────────────────────────────────────────────────

    async def watch_order(self, order_id: str) -> AsyncIterator[Order | None]:
        """Each snapshot of one order, independently re-enriched."""
        async with aclosing(self._store.watch_document(ORDERS, order_id)) as snapshots:
            async for doc in snapshots:
                yield None if doc is None else await self._hydrate(doc)

    async def watch_orders(self) -> AsyncIterator[list[Order]]:
        async with aclosing(self._store.watch(ORDERS)) as snapshots:
            async for docs in snapshots:
                yield _newest_first(await self._hydrate_all(docs))

    async def watch_user_orders(self, user_id: str) -> AsyncIterator[list[Order]]:
        async with aclosing(self._store.watch(ORDERS, where("userId", user_id))) as snapshots:
            async for docs in snapshots:
                yield _newest_first(await self._hydrate_all(docs))

    # ─── paging ───────────────────────────────────────────────────────────────

    def page(self, orders: Sequence[Order], page: int) -> list[Order]:
        return paginate(orders, page, self._settings.page_size)

    def has_more(self, orders: Sequence[Order], page: int) -> bool:
        return has_more_pages(orders, page, self._settings.page_size)

    # ─── internals ────────────────────────────────────────────────────────────

    async def _query(self, condition: FieldFilter | None) -> list[Order]:
        match await self._store.query(ORDERS, condition):
            case Ok(docs):
                return _newest_first(await self._hydrate_all(docs))
            case Error(e):
                logger.warning("Listing orders failed: %s", e)
                return []

    async def _read(self, order_id: str, *, enrich: bool) -> Order | None:
        match await self._store.get(ORDERS, order_id):
            case Ok(None):
                return None
            case Ok(doc):
                return await self._hydrate(doc, enrich=enrich)
            case Error(e):
                logger.warning("Reading order %s failed: %s", order_id, e)
                return None

    async def _load(self, doc: Document, enrich: bool) -> Order:
        order = decode_order(doc)
        if not order.customer_email and order.user_id:
            order = replace(order, customer_email=await self.fetch_user_email(order.user_id))
        return await self._enricher.enrich(order) if enrich else order

    async def _hydrate(self, doc: Document, *, enrich: bool = True) -> Order | None:
        result = await L.catching_async(
            lambda: self._load(doc, enrich),
            on_error=lambda e: EnrichmentError(repr(e)),
        )
        match result:
            case Ok(order):
                return order
            case Error(e):
                logger.warning("Skipping unreadable order %s: %s", doc.id, e.message)
                return None

    async def _hydrate_all(self, docs: Sequence[Document]) -> list[Order]:
        result = await C.traverse_par(
            docs,
            lambda doc: L.catching_async(
                lambda: self._hydrate(doc),
                on_error=lambda e: EnrichmentError(repr(e)),
            ),
        )()
        match result:
            case Ok(orders):
                return [o for o in orders if o is not None]
            case Error(e):
                logger.warning("Loading orders failed: %s", e.message)
                return []

    # ═══════════════════════════════════════════════════════════════════════════
    # Writes
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_status(self, order_id: str, status: OrderStatus) -> Result[None, OrderError]:
        """
        Move an order to `status`.

        The transition is validated against the stored status first; a
        rejected transition writes nothing. On success the change is
        appended to `statusHistory`.
        """
        return await self._change_status(order_id, status, None)

    async def update_order_and_payment_status(
        self,
        order_id: str,
        status: OrderStatus,
        payment_status: PaymentStatus,
    ) -> Result[None, OrderError]:
        return await self._change_status(order_id, status, payment_status)

    async def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
    ) -> Result[None, OrderError]:
        match await self._existing(order_id):
            case Error(e):
                return Error(e)
            case Ok(_):
                pass

        fields = {"paymentStatus": payment_status.value, "updatedAt": datetime.now(UTC)}
        match await self._store.update(ORDERS, order_id, fields):
            case Ok(_):
                logger.info("Order %s payment -> %s", order_id, payment_status.value)
                return Ok(None)
            case Error(e):
                return Error(OrderErrors.store(e))

    async def create_order(self, order: Order) -> Result[str, OrderError]:
        """Persist `order` under a store-assigned id. Returns the id."""
        match await self._store.add(ORDERS, encode_order(order)):
            case Ok(order_id):
                logger.info("Created order %s", order_id)
                return Ok(order_id)
            case Error(e):
                return Error(OrderErrors.store(e))

    async def delete_order(self, order_id: str) -> Result[bool, OrderError]:
        match await self._store.delete(ORDERS, order_id):
            case Ok(existed):
                logger.info("Deleted order %s (existed=%s)", order_id, existed)
                return Ok(existed)
            case Error(e):
                return Error(OrderErrors.store(e))

    async def _existing(self, order_id: str) -> Result[Document, OrderError]:
        match await self._store.get(ORDERS, order_id):
            case Ok(None):
                return Error(OrderErrors.not_found(order_id))
            case Ok(doc):
                return Ok(doc)
            case Error(e):
                return Error(OrderErrors.store(e))

    async def _change_status(
        self,
        order_id: str,
        status: OrderStatus,
        payment_status: PaymentStatus | None,
    ) -> Result[None, OrderError]:
        match await self._existing(order_id):
            case Ok(doc):
                pass
            case Error(e):
                return Error(e)

        current = OrderStatus.parse(doc.get("status"))
        if not is_valid_transition(current, status):
            logger.warning(
                "Rejected status change of order %s: %s -> %s",
                order_id,
                current.value,
                status.value,
            )
            return Error(OrderErrors.invalid_transition(current, status))

        now = datetime.now(UTC)
        stored_history = doc.get("statusHistory")
        history = list(stored_history) if isinstance(stored_history, list) else []
        history.append(encode_status_change(StatusChange(status, now.isoformat())))

        fields: dict[str, Any] = {
            "status": status.value,
            "statusHistory": history,
            "updatedAt": now,
        }
        if payment_status is not None:
            fields["paymentStatus"] = payment_status.value

        match await self._store.update(ORDERS, order_id, fields):
            case Ok(_):
                logger.info("Order %s status %s -> %s", order_id, current.value, status.value)
                return Ok(None)
            case Error(e):
                return Error(OrderErrors.store(e))


__all__ = ("OrderService",)
