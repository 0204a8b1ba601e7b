"""Cache entry model and the provider contract shared by all backends.

Any object exposing ``get``, ``set``, ``delete``, ``clear`` and ``has``
can serve as a cache backend. Methods may be plain functions or
coroutines; :func:`maybe_await` lets callers drive both uniformly.
"""

import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Optional, Protocol, TypeVar, Union, runtime_checkable

T = TypeVar("T")

MaybeAwaitable = Union[T, Awaitable[T]]


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


async def maybe_await(value: MaybeAwaitable[T]) -> T:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached value with its creation time and time to live.

    Attributes:
        value: The cached JSON body
        created_at: Creation timestamp in milliseconds since the epoch
        ttl: Time to live in milliseconds
    """

    value: Any
    created_at: int
    ttl: int

    @property
    def expires_at(self) -> int:
        return self.created_at + self.ttl

    def is_expired(self, now: int) -> bool:
        """An entry is live while ``now <= created_at + ttl``."""
        return now > self.expires_at


@runtime_checkable
class CacheProvider(Protocol):
    """
    Capability contract for response cache backends.

    Every method may return its result directly or as an awaitable.
    Implementations must treat expired entries as absent and must not
    partially apply a ``set``.
    """

    def get(self, key: str) -> MaybeAwaitable[Optional[Any]]:
        """Return the live value for ``key`` or ``None``."""
        ...

    def set(self, key: str, value: Any, ttl: int) -> MaybeAwaitable[None]:
        """Store ``value`` under ``key`` for ``ttl`` milliseconds."""
        ...

    def delete(self, key: str) -> MaybeAwaitable[bool]:
        """Remove ``key``; return whether an entry was removed."""
        ...

    def clear(self) -> MaybeAwaitable[None]:
        """Remove every entry owned by this provider."""
        ...

    def has(self, key: str) -> MaybeAwaitable[bool]:
        """Return whether ``key`` holds a live entry."""
        ...
