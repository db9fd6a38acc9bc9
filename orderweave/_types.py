"""
Core types for orderweave.

Re-exports from kungfu + custom type aliases.
"""

from __future__ import annotations

from dataclasses import dataclass

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail."""

# ═══════════════════════════════════════════════════════════════════════════════
# Collections
# ═══════════════════════════════════════════════════════════════════════════════

ORDERS = "orders"
BUNDLES = "bundles"
PRODUCTS = "products"
USERS = "users"

# ═══════════════════════════════════════════════════════════════════════════════
# Read-path errors
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Miss:
    """
    A referenced document could not be resolved.

    Never surfaced to callers: resolvers turn it into "absent".
    """

    collection: str
    id: str
    reason: str

    def __str__(self) -> str:
        return f"{self.collection}/{self.id}: {self.reason}"


@dataclass(frozen=True, slots=True)
class EnrichmentError:
    """Unexpected failure inside one enrichment pass."""

    message: str


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Type aliases
    "Lazy",
    # Collections
    "ORDERS",
    "BUNDLES",
    "PRODUCTS",
    "USERS",
    # Errors
    "Miss",
    "EnrichmentError",
)
