"""
Graph runner — thin typed layer over nodnod.

    @node
    class ReceiptNode:
        def __init__(self, data: str) -> None:
            self.data = data

        @classmethod
        def __compose__(cls, order: EnrichedOrderNode) -> "ReceiptNode":
            return cls(format_order(order.data))

    receipt = await run(ReceiptNode).inject(ref).inject_as(OrderService, service)

Dependencies are discovered from the target's `__compose__` signature;
independent branches run concurrently.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any, cast

from nodnod import EventLoopAgent, Node, Scope, Value
from nodnod import scalar_node as node


class TypedScope:
    """nodnod.Scope with typed push/get."""

    __slots__ = ("_scope",)

    def __init__(self, detail: str = "view") -> None:
        self._scope = Scope(detail=detail)

    @property
    def inner(self) -> Scope:
        return self._scope

    def inject[T](self, typ: type[T], value: T) -> TypedScope:
        self._scope.push(Value(typ, value))
        return self

    def get[T](self, typ: type[T]) -> T:
        found = self._scope.get(typ)
        if found is None:
            raise KeyError(f"{typ.__name__} not produced by the graph")
        return cast(T, found.value)

    async def __aenter__(self) -> TypedScope:
        await self._scope.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._scope.__aexit__(*args)


@dataclass(slots=True)
class Run[T]:
    """Awaitable run of `target` with injected inputs."""

    _target: type[T]
    _inputs: tuple[tuple[type[Any], Any], ...] = ()

    def inject(self, value: object) -> Run[T]:
        """Inject under the value's runtime type."""
        return self.inject_as(cast(type[Any], type(value)), value)

    def inject_as[V](self, typ: type[V], value: V) -> Run[T]:
        """Inject under an explicit type (e.g. a base class of `value`)."""
        entry: tuple[type[Any], Any] = (typ, value)
        return Run(self._target, (*self._inputs, entry))

    def __await__(self) -> Any:
        return self._execute().__await__()

    async def _execute(self) -> T:
        agent = EventLoopAgent.build({cast(type[Node[Any, Any]], self._target)})

        async with TypedScope(detail=f"run:{self._target.__name__}") as scope:
            for typ, value in self._inputs:
                scope.inject(typ, value)

            run_method = cast(
                Callable[[Scope, dict[type[Any], Scope]], Coroutine[Any, Any, None]],
                getattr(agent, "run"),
            )
            await run_method(scope.inner, {})
            return scope.get(self._target)


def run[T](target: type[T]) -> Run[T]:
    return Run(target)


__all__ = ("node", "TypedScope", "Run", "run")
