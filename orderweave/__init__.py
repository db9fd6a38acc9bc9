"""
orderweave — display-ready orders from a document store.

    from orderweave import models as M    # Orders, line items, catalog
    from orderweave import store as S     # Document store gateway
    from orderweave import resolve as R   # Bundle / product resolution
    from orderweave import summary as Sm  # Aggregation and receipts

    enricher = Enricher(store)
    order = await enricher.enrich(order)
"""

from orderweave import models
from orderweave import codec
from orderweave import store
from orderweave import resolve
from orderweave import summary
from orderweave._types import (
    Lazy,
    Miss,
    EnrichmentError,
    ORDERS,
    BUNDLES,
    PRODUCTS,
    USERS,
)
from orderweave.config import EnrichmentSettings, Settings, configure_logging
from orderweave.enrich import Enricher
from orderweave.service import OrderService, OrderError, OrderErrorKind

__version__ = "0.1.0"

__all__ = (
    "models",
    "codec",
    "store",
    "resolve",
    "summary",
    "Lazy",
    "Miss",
    "EnrichmentError",
    "ORDERS",
    "BUNDLES",
    "PRODUCTS",
    "USERS",
    "EnrichmentSettings",
    "Settings",
    "configure_logging",
    "Enricher",
    "OrderService",
    "OrderError",
    "OrderErrorKind",
)
