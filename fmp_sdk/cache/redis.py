"""Redis-backed cache provider with fail-open error handling.

RedisCacheProvider adapts any client shaped like redis-py (either the
blocking ``redis.Redis`` or ``redis.asyncio.Redis``, or compatible
stores such as KeyDB, Dragonfly or an in-memory fake) to the
CacheProvider contract.
"""

import json
import re
from typing import Any, Callable, List, Optional, Protocol, Union

import structlog

from fmp_sdk.cache.base import MaybeAwaitable, maybe_await, now_ms
from fmp_sdk.cache.connection import RedisConnection

logger = structlog.get_logger(__name__)

DEFAULT_KEY_PREFIX = "fmp:"

_MISSING = object()

# Characters with special meaning in SCAN/KEYS match patterns
_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


class RedisClientLike(Protocol):
    """
    Minimal key-value client shape consumed by RedisCacheProvider.

    ``scan_iter`` and ``keys`` are optional; without either clear()
    cannot enumerate entries and becomes a no-op. ``exists`` is declared
    to match the redis-py client surface, but liveness is never answered
    by it: has() reads the entry and checks the embedded expiry.
    """

    def get(self, key: str) -> MaybeAwaitable[Optional[Union[str, bytes]]]: ...

    def set(self, key: str, value: str, px: Optional[int] = None) -> MaybeAwaitable[Any]: ...

    def delete(self, *keys: str) -> MaybeAwaitable[int]: ...

    def exists(self, *keys: str) -> MaybeAwaitable[int]: ...


class RedisCacheProvider:
    """
    Cache provider over an external Redis-compatible store.

    Entries are written as compact JSON ``{"v": value, "c": created_at,
    "t": ttl}`` under ``key_prefix + key``. The embedded timestamp is
    the source of truth for expiry; the store's native expiry (PX) is
    set as well but only to reclaim space.

    Every store error is logged and absorbed: reads become misses and
    writes become no-ops.

    Attributes:
        client: Wrapped key-value client
        key_prefix: Namespace prepended to every key

    Example:
        >>> import redis.asyncio as redis
        >>> provider = RedisCacheProvider(redis.from_url("redis://localhost:6379/0"))
        >>> await provider.set("profile?symbol=AAPL", [{"symbol": "AAPL"}], 60_000)
        >>> await provider.get("profile?symbol=AAPL")
        [{'symbol': 'AAPL'}]
    """

    def __init__(
        self,
        client: RedisClientLike,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.client = client
        self.key_prefix = key_prefix
        self._clock = clock or now_ms

    @classmethod
    def from_url(
        cls,
        url: Optional[str] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> "RedisCacheProvider":
        """
        Build a provider over a pooled redis.asyncio client.

        Args:
            url: Redis URL; defaults to REDIS_URL or localhost

        Raises:
            ConnectionError: If the Redis client could not be created
        """
        connection = RedisConnection(url)
        if not connection.is_available():
            raise ConnectionError("Redis client could not be initialized")

        return cls(connection.client, key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def _read(self, key: str) -> Any:
        """Return the live value for key, or _MISSING."""
        raw = await maybe_await(self.client.get(self._key(key)))
        if raw is None:
            return _MISSING

        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")

        try:
            entry = json.loads(raw)
            value = entry["v"]
            expired = self._clock() > entry["c"] + entry["t"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning("redis_cache_invalid_entry", key=key, error=str(e))
            await self.delete(key)
            return _MISSING

        if expired:
            logger.debug("redis_cache_expired", key=key)
            await self.delete(key)
            return _MISSING

        return value

    async def get(self, key: str) -> Optional[Any]:
        """
        Retrieve a cached value.

        Returns:
            Cached value, or None on a miss, an expired entry or a
            store error
        """
        try:
            value = await self._read(key)
        except Exception as e:
            logger.warning(
                "redis_cache_get_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        return None if value is _MISSING else value

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value for ttl milliseconds. Failures are swallowed."""
        try:
            payload = json.dumps(
                {"v": value, "c": self._clock(), "t": ttl},
                separators=(",", ":"),
            )
            if ttl > 0:
                await maybe_await(self.client.set(self._key(key), payload, px=ttl))
            else:
                await maybe_await(self.client.set(self._key(key), payload))

        except Exception as e:
            logger.warning(
                "redis_cache_set_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def delete(self, key: str) -> bool:
        try:
            removed = await maybe_await(self.client.delete(self._key(key)))
            return bool(removed)

        except Exception as e:
            logger.warning(
                "redis_cache_delete_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def _matching_keys(self, pattern: str) -> Optional[List[Any]]:
        """Keys matching pattern via SCAN, else KEYS; None if the client has neither."""
        scan_iter = getattr(self.client, "scan_iter", None)
        if scan_iter is not None:
            found = scan_iter(match=pattern)
            if hasattr(found, "__aiter__"):
                return [key async for key in found]
            return list(found)

        keys_method = getattr(self.client, "keys", None)
        if keys_method is None:
            return None
        return await maybe_await(keys_method(pattern))

    async def clear(self) -> None:
        """
        Delete every entry under this provider's prefix.

        Keys are enumerated with ``scan_iter`` when the client has it and
        with ``keys`` otherwise. A client with neither cannot enumerate
        entries safely, so this is a no-op for it. Glob metacharacters
        in the prefix are escaped so only this namespace is matched.
        """
        pattern = _GLOB_SPECIAL.sub(r"\\\1", self.key_prefix) + "*"

        try:
            keys = await self._matching_keys(pattern)
            if keys is None:
                logger.warning("redis_cache_clear_unsupported", key_prefix=self.key_prefix)
                return

            if keys:
                await maybe_await(self.client.delete(*keys))
            logger.debug("redis_cache_cleared", key_prefix=self.key_prefix, removed=len(keys))

        except Exception as e:
            logger.warning(
                "redis_cache_clear_error",
                key_prefix=self.key_prefix,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def has(self, key: str) -> bool:
        """Return whether key holds a live entry, checking the embedded expiry."""
        try:
            return await self._read(key) is not _MISSING
        except Exception as e:
            logger.warning(
                "redis_cache_has_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
