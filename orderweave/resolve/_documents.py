"""
Document fetch lifted into LazyCoroResult — the single read seam of the resolvers.
"""

from __future__ import annotations

from collections.abc import Callable

from combinators import lift as L
from kungfu import Ok, Error

from orderweave._types import Lazy, Miss
from orderweave.store import Document, DocumentStore


class _Absent(LookupError):
    pass


def fetch_document[T](
    store: DocumentStore,
    collection: str,
    doc_id: str,
    decode: Callable[[Document], T],
) -> Lazy[T, Miss]:
    """
    Read and decode `collection/doc_id`.

    Not-found, store errors, raised exceptions and malformed documents all
    come back as `Error(Miss(...))`.
    """

    async def _fetch() -> T:
        match await store.get(collection, doc_id):
            case Ok(None):
                raise _Absent("not found")
            case Ok(doc):
                return decode(doc)
            case Error(e):
                raise _Absent(str(e))

    return L.catching_async(
        _fetch,
        on_error=lambda e: Miss(collection, doc_id, str(e) or type(e).__name__),
    )


__all__ = ("fetch_document",)
