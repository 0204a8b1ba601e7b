"""Response caching layer for FMP API requests.

This package provides:
- The provider contract and entry model (CacheProvider, CacheEntry)
- In-process LRU + TTL cache (MemoryCache)
- Redis-backed cache with fail-open behavior (RedisCacheProvider)
- Redis connection pooling (RedisConnection)
- Cache key generation (CacheKeyGenerator)
- Per-endpoint TTL policies (CacheTTL, EndpointTTLPolicy)
"""

from fmp_sdk.cache.base import CacheEntry, CacheProvider, maybe_await
from fmp_sdk.cache.connection import RedisConnection
from fmp_sdk.cache.keys import CacheKeyGenerator, key_generator, normalize_params
from fmp_sdk.cache.memory import MemoryCache
from fmp_sdk.cache.redis import RedisCacheProvider, RedisClientLike
from fmp_sdk.cache.ttl import DEFAULT_ENDPOINT_TTLS, CacheTTL, EndpointTTLPolicy

__all__ = [
    # Contract
    "CacheEntry",
    "CacheProvider",
    "maybe_await",
    # Providers
    "MemoryCache",
    "RedisCacheProvider",
    "RedisClientLike",
    "RedisConnection",
    # Key generation
    "CacheKeyGenerator",
    "key_generator",
    "normalize_params",
    # TTL policies
    "CacheTTL",
    "DEFAULT_ENDPOINT_TTLS",
    "EndpointTTLPolicy",
]
