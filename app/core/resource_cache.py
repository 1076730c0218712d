"""
Process-wide cache for remote resource ids (vector store, assistant).

Each id lives in a single-flight cell: the first caller provisions under a lock,
concurrent callers wait for and reuse that result.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncOnceCell(Generic[T]):
    """Lazily initialised value, computed at most once per process unless reset."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._value: T | None = None
        self._generation = 0
        self._lock = asyncio.Lock()

    def peek(self) -> T | None:
        """Return the cached value without triggering provisioning."""
        return self._value

    async def get_or_create(self, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Return the cached value, or await factory() under the lock and cache it.
        A failing factory leaves the cell empty so the next caller retries.
        """
        if self._value is not None:
            logger.info("[resource_cache:%s] hit value=%s", self.name, self._value)
            return self._value
        async with self._lock:
            # another caller may have filled it while we waited
            if self._value is not None:
                logger.info("[resource_cache:%s] hit after wait value=%s", self.name, self._value)
                return self._value
            logger.info("[resource_cache:%s] miss, provisioning", self.name)
            generation = self._generation
            value = await factory()
            # a reset during provisioning makes this result stale
            if generation != self._generation:
                logger.info("[resource_cache:%s] discarding stale value=%s", self.name, value)
                return value
            self._value = value
            logger.info("[resource_cache:%s] stored value=%s", self.name, value)
            return value

    def reset(self) -> None:
        """Forget the cached value. A provisioning still in flight will not store its result."""
        self._value = None
        self._generation += 1
        self._lock = asyncio.Lock()
        logger.info("[resource_cache:%s] reset", self.name)


vector_store_cell: AsyncOnceCell[str] = AsyncOnceCell("vector_store")
assistant_cell: AsyncOnceCell[str] = AsyncOnceCell("assistant")


def reset_all() -> None:
    """Forget every cached resource id. Used on reconfiguration."""
    vector_store_cell.reset()
    assistant_cell.reset()
