"""
Resolvers — bundle and product lookups that never fail.

Every miss (not found, store error, raised exception, malformed document)
reads as "absent" and is logged at debug level.

    bundles = BundleResolver(store, PassMemo[Bundle]())
    bundle = await bundles.get_bundle_details("b1")  # Bundle | None
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from kungfu import Ok, Error

from orderweave._types import BUNDLES, PRODUCTS, Lazy, Miss
from orderweave.config import EnrichmentSettings
from orderweave.codec import decode_bundle, decode_product
from orderweave.models import Bundle, BundleEntry, BundleProduct, Product
from orderweave.resolve._documents import fetch_document
from orderweave.resolve._memo import MemoExecutor, Tier, memoized
from orderweave.resolve._sizes import reconcile_sizes
from orderweave.store import DocumentStore

logger = logging.getLogger(__name__)


def _bundle_key(bundle_id: str) -> str:
    return f"bundle:{bundle_id}"


def _product_key(product_id: str) -> str:
    return f"product:{product_id}"


# ═══════════════════════════════════════════════════════════════════════════════
# Bundles
# ═══════════════════════════════════════════════════════════════════════════════


class BundleResolver:
    def __init__(
        self,
        store: DocumentStore,
        memo: Tier[Bundle] | None = None,
        settings: EnrichmentSettings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or EnrichmentSettings()
        builder = memoized(_bundle_key, self._fetch)
        if memo is not None:
            builder = builder.tier(memo)
        self._lookup: MemoExecutor[str, Bundle, Miss] = builder.build()

    def _fetch(self, bundle_id: str) -> Lazy[Bundle, Miss]:
        return fetch_document(self._store, BUNDLES, bundle_id, decode_bundle)

    async def get_bundle_details(self, bundle_id: str) -> Bundle | None:
        match await self._lookup.get(bundle_id):
            case Ok(found):
                return found.value
            case Error(miss):
                logger.debug("Bundle unavailable: %s", miss)
                return None

    async def get_bundle_products(self, bundle_id: str) -> tuple[BundleEntry, ...]:
        """Nominal product list of a bundle; empty when the bundle is unavailable."""
        bundle = await self.get_bundle_details(bundle_id)
        return bundle.products if bundle is not None else ()

    async def get_bundle_products_enriched(
        self,
        bundle_id: str,
        sizes: Mapping[str, str],
    ) -> tuple[BundleProduct, ...]:
        """Nominal products with `sizes` applied. No product lookups."""
        return reconcile_sizes(
            await self.get_bundle_products(bundle_id),
            sizes,
            unknown_title=self._settings.unknown_product_title,
            default_price=self._settings.default_price,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════════════


class ProductResolver:
    def __init__(self, store: DocumentStore, memo: Tier[Product] | None = None) -> None:
        self._store = store
        builder = memoized(_product_key, self._fetch)
        if memo is not None:
            builder = builder.tier(memo)
        self._lookup: MemoExecutor[str, Product, Miss] = builder.build()

    def _fetch(self, product_id: str) -> Lazy[Product, Miss]:
        return fetch_document(self._store, PRODUCTS, product_id, decode_product)

    async def fetch_product_details(self, product_id: str) -> Product | None:
        match await self._lookup.get(product_id):
            case Ok(found):
                return found.value
            case Error(miss):
                logger.debug("Product unavailable: %s", miss)
                return None


__all__ = ("BundleResolver", "ProductResolver")
