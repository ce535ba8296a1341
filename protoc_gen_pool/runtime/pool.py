"""Thread-safe object pools backing the generated `Get<Name>`/`Put<Name>` accessors.

Each message type gets one process-wide MessagePool, created on first use
through a PoolRegistry. Pools are independent of each other: each has its own
lock and no operation ever takes two locks.

Example:
    pool = pool_for(Order)
    order = pool.acquire()
    ...
    order.Clear()
    pool.release(order)
"""

import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class MessagePool(Generic[T]):
    """An unbounded free list of reusable instances.

    `acquire` never waits: when no released instance is available it calls
    the factory and returns a fresh one. Both operations are atomic with
    respect to each other on the same pool.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._free: list[T] = []
        self._lock = threading.Lock()

    @property
    def factory(self) -> Callable[[], T]:
        return self._factory

    def acquire(self) -> T:
        """Take an instance from the pool, allocating one if the pool is empty.

        The caller owns the returned instance until it hands it to `release`.
        """
        with self._lock:
            if self._free:
                return self._free.pop()
        return self._factory()

    def release(self, instance: T) -> None:
        """Return an instance to the pool.

        The caller must reset the instance first and must not touch it
        afterwards.
        """
        with self._lock:
            self._free.append(instance)

    def __len__(self) -> int:
        with self._lock:
            return len(self._free)

    def __repr__(self) -> str:
        return f"MessagePool({self._factory!r}, free={len(self)})"


class PoolRegistry:
    """Per-type pool singletons, looked up by message type."""

    def __init__(self) -> None:
        self._pools: dict[type, MessagePool[Any]] = {}
        self._lock = threading.Lock()

    def pool_for(self, message_type: type[T]) -> MessagePool[T]:
        """Return the pool for a message type, creating it exactly once."""
        with self._lock:
            pool = self._pools.get(message_type)
            if pool is None:
                pool = MessagePool(message_type)
                self._pools[message_type] = pool
            return pool

    def pools(self) -> list[tuple[type, MessagePool[Any]]]:
        """Return (type, pool) pairs in creation order."""
        with self._lock:
            return list(self._pools.items())

    def __contains__(self, message_type: type) -> bool:
        with self._lock:
            return message_type in self._pools

    def __len__(self) -> int:
        with self._lock:
            return len(self._pools)


_default_registry = PoolRegistry()


def default_registry() -> PoolRegistry:
    """Return the registry used by generated code."""
    return _default_registry


def pool_for(message_type: type[T]) -> MessagePool[T]:
    """Return the process-wide pool for a message type."""
    return _default_registry.pool_for(message_type)
