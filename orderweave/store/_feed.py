"""
Snapshot feed — fan-out of "collection changed" signals to live watchers.
"""

from __future__ import annotations

import asyncio
import uuid
from collections import defaultdict
from collections.abc import AsyncIterator, Awaitable, Callable


def new_document_id() -> str:
    """Store-assigned document id (20 hex chars, Firestore-like length)."""
    return uuid.uuid4().hex[:20]


class SnapshotFeed:
    """
    Per-collection change signals.

    Writers call `notify(collection)` after committing; each watcher re-reads
    a full snapshot. Signals that arrive while a snapshot is being consumed
    are coalesced: a watcher only ever sees the latest state.
    """

    __slots__ = ("_watchers",)

    def __init__(self) -> None:
        self._watchers: defaultdict[str, set[asyncio.Queue[None]]] = defaultdict(set)

    def notify(self, collection: str) -> None:
        for queue in self._watchers.get(collection, ()):
            queue.put_nowait(None)

    def watcher_count(self, collection: str) -> int:
        return len(self._watchers.get(collection, ()))

    async def follow[T](
        self,
        collection: str,
        snapshot: Callable[[], Awaitable[T]],
    ) -> AsyncIterator[T]:
        queue: asyncio.Queue[None] = asyncio.Queue()
        self._watchers[collection].add(queue)
        try:
            yield await snapshot()
            while True:
                await queue.get()
                while not queue.empty():
                    queue.get_nowait()
                yield await snapshot()
        finally:
            watchers = self._watchers.get(collection)
            if watchers is not None:
                watchers.discard(queue)
                if not watchers:
                    del self._watchers[collection]


__all__ = ("SnapshotFeed", "new_document_id")
