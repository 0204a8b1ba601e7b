"""Pooled redis.asyncio clients for the Redis cache provider."""

import os
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


def _safe_url(url: str) -> str:
    """Host/port/db part of a Redis URL, without credentials."""
    parts = urlsplit(url)
    host = parts.netloc.rsplit("@", 1)[-1]
    return f"{parts.scheme}://{host}{parts.path}" if parts.scheme else host


class RedisConnection:
    """
    Owner of one ConnectionPool and the redis.asyncio client bound to it.

    A pool that cannot be built is logged and leaves ``client`` as None;
    callers check is_available() and decide whether to go without a
    cache.

    Attributes:
        url: Redis URL the pool was built from
        pool: Connection pool, or None
        client: Redis client, or None
    """

    def __init__(
        self,
        url: Optional[str] = None,
        max_connections: int = 20,
        socket_timeout: float = 5.0,
    ) -> None:
        """
        Args:
            url: Redis URL; defaults to REDIS_URL or localhost
            max_connections: Upper bound on pooled connections
            socket_timeout: Seconds allowed for connect and for each command
        """
        self.url = url or os.getenv("REDIS_URL", DEFAULT_REDIS_URL)
        self.max_connections = max_connections
        self.socket_timeout = socket_timeout
        self.pool: Optional[ConnectionPool] = None
        self.client: Optional[redis.Redis] = None
        self._connect()

    def _pool_options(self) -> Dict[str, Any]:
        return {
            "max_connections": self.max_connections,
            "decode_responses": True,
            "socket_timeout": self.socket_timeout,
            "socket_connect_timeout": self.socket_timeout,
            "retry_on_timeout": True,
        }

    def _connect(self) -> None:
        try:
            pool = ConnectionPool.from_url(self.url, **self._pool_options())
            client = redis.Redis(connection_pool=pool)
        except Exception as e:
            logger.error(
                "redis_connection_failed",
                redis_url=_safe_url(self.url),
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        self.pool, self.client = pool, client
        logger.info(
            "redis_connection_ready",
            redis_url=_safe_url(self.url),
            max_connections=self.max_connections,
        )

    def is_available(self) -> bool:
        """Whether a client exists. Use ping() to check the server is reachable."""
        return self.client is not None

    async def ping(self) -> bool:
        if self.client is None:
            logger.warning("redis_ping_skipped", reason="client_not_initialized")
            return False

        try:
            healthy = bool(await self.client.ping())
        except Exception as e:
            logger.error("redis_ping_failed", error=str(e), error_type=type(e).__name__)
            return False

        logger.debug("redis_ping", healthy=healthy)
        return healthy

    async def close(self) -> None:
        """Close the client, then disconnect every pooled connection."""
        client, pool = self.client, self.pool
        self.client = self.pool = None

        try:
            if client is not None:
                await client.aclose()
            if pool is not None:
                await pool.disconnect()
        except Exception as e:
            logger.error("redis_close_failed", error=str(e), error_type=type(e).__name__)
            return

        logger.info("redis_connection_closed", redis_url=_safe_url(self.url))
