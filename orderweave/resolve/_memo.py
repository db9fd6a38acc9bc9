"""
Memo — lookup memoization scoped to one resolution pass.

    lookup = memoized(key_fn, fetch).tier(PassMemo[Bundle](max_size=256)).build()
    result = await lookup.get(bundle_id)

A pass memo is created per enrichment pass and dropped with it; nothing is
shared across passes, so live snapshots can never see stale catalog data.
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from kungfu import LazyCoroResult, Result, Ok, Error

# ═══════════════════════════════════════════════════════════════════════════════
# Tier Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class Tier[T](Protocol):
    """Memo storage. Only successful lookups are stored."""

    @property
    def name(self) -> str: ...

    async def get(self, key: str) -> T | None:
        """Get value. Returns None on miss."""
        ...

    async def set(self, key: str, value: T) -> None: ...


class PassMemo[T]:
    """
    Bounded in-memory LRU tier.

    Example:
        memo = PassMemo[Product](max_size=256)
    """

    def __init__(self, max_size: int = 256) -> None:
        self._max_size = max_size
        self._entries: OrderedDict[str, T] = OrderedDict()

    @property
    def name(self) -> str:
        return "pass"

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> T | None:
        if key in self._entries:
            self._entries.move_to_end(key)
            return self._entries[key]
        return None

    async def set(self, key: str, value: T) -> None:
        if self._max_size <= 0:
            return
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self._max_size:
            self._entries.popitem(last=False)
        self._entries[key] = value


# ═══════════════════════════════════════════════════════════════════════════════
# Lookup result
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Lookup[T]:
    value: T
    hit: bool
    tier: str | None


# ═══════════════════════════════════════════════════════════════════════════════
# Builder / executor
# ═══════════════════════════════════════════════════════════════════════════════

type KeyFn[K] = Callable[[K], str]


@dataclass(slots=True, frozen=True)
class Memoized[K, T, E]:
    _key_fn: KeyFn[K]
    _fetch: Callable[[K], LazyCoroResult[T, E]]
    _tiers: tuple[Tier[T], ...]

    def tier(self, t: Tier[T]) -> Memoized[K, T, E]:
        return Memoized(
            _key_fn=self._key_fn,
            _fetch=self._fetch,
            _tiers=(*self._tiers, t),
        )

    def build(self) -> MemoExecutor[K, T, E]:
        return MemoExecutor(
            key_fn=self._key_fn,
            tiers=self._tiers,
            fetch=self._fetch,
        )


@dataclass(slots=True, frozen=True)
class MemoExecutor[K, T, E]:
    key_fn: KeyFn[K]
    tiers: tuple[Tier[T], ...]
    fetch: Callable[[K], LazyCoroResult[T, E]]
    inflight: dict[str, asyncio.Task[Result[T, E]]] = field(default_factory=dict)

    def get(self, key: K) -> LazyCoroResult[Lookup[T], E]:
        """
        Tries tiers in order, then falls back to fetch.
        Concurrent misses on one key share a single fetch.
        On fetch success, populates all tiers; failures are not memoized.
        """
        memo_key = self.key_fn(key)
        tiers = self.tiers
        fetch_fn = self.fetch
        inflight = self.inflight

        async def fetch_and_fill() -> Result[T, E]:
            result = await fetch_fn(key)
            match result:
                case Ok(value):
                    for t in tiers:
                        await t.set(memo_key, value)
            return result

        async def execute() -> Result[Lookup[T], E]:
            for t in tiers:
                value = await t.get(memo_key)
                if value is not None:
                    return Ok(Lookup(value=value, hit=True, tier=t.name))

            task = inflight.get(memo_key)
            if task is None:
                task = asyncio.create_task(fetch_and_fill())
                inflight[memo_key] = task
                task.add_done_callback(lambda _: inflight.pop(memo_key, None))

            match await asyncio.shield(task):
                case Ok(value):
                    return Ok(Lookup(value=value, hit=False, tier=None))
                case Error(e):
                    return Error(e)

        return LazyCoroResult(execute)


def memoized[K, T, E](
    key: KeyFn[K],
    fetch: Callable[[K], LazyCoroResult[T, E]],
) -> Memoized[K, T, E]:
    """
    Create memo builder with key function and fetch.

    Example:
        def fetch_bundle(bundle_id: str) -> LazyCoroResult[Bundle, Miss]:
            ...

        lookup = (
            memoized(lambda bid: f"bundle:{bid}", fetch_bundle)
            .tier(PassMemo[Bundle]())
            .build()
        )
    """
    return Memoized(_key_fn=key, _fetch=fetch, _tiers=())


__all__ = (
    "Tier",
    "PassMemo",
    "Lookup",
    "Memoized",
    "MemoExecutor",
    "memoized",
)
