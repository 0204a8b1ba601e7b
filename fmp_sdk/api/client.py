"""
Request executor for the FMP REST API.

FMPClient is the single path every SDK call takes: it resolves the
endpoint's TTL, consults the cache, performs the authenticated GET with
retries on a miss, normalises failures into FMPAPIError and populates
the cache on success.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import ValidationError

from fmp_sdk.api.exceptions import FMPAPIError, FMPConfigError, is_retryable_status
from fmp_sdk.cache.base import CacheProvider, maybe_await
from fmp_sdk.cache.keys import CacheKeyGenerator, normalize_params
from fmp_sdk.cache.memory import MemoryCache
from fmp_sdk.cache.ttl import EndpointTTLPolicy
from fmp_sdk.models.config import FMPConfig
from fmp_sdk.utils.logger import get_logger, log_request_execution, redact_api_key

logger = get_logger(__name__)

API_KEY_PARAM = "apikey"


def resolve_config(config: Optional[FMPConfig], options: Mapping[str, Any]) -> FMPConfig:
    """
    Turn a config object or keyword options into a validated FMPConfig.

    Raises:
        FMPConfigError: If options are invalid or the API key is blank
    """
    if config is not None and options:
        raise FMPConfigError("Pass either a config object or keyword options, not both")

    if config is None:
        try:
            config = FMPConfig(**options)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise FMPConfigError(f"Invalid configuration: {details}") from e

    if not config.api_key or not config.api_key.strip():
        raise FMPConfigError("API key is required")

    return config


class FMPClient:
    """
    Core HTTP client for FMP API requests with response caching.

    Caching is opt-in (``cache.enabled``). When enabled, each endpoint's
    TTL comes from the EndpointTTLPolicy; a TTL of 0 bypasses the cache
    completely for that endpoint. Cache provider failures are logged and
    treated as misses, never raised.

    Must be closed with aclose() or used as an async context manager.

    Example:
        >>> async with FMPClient(api_key="demo", cache={"enabled": True}) as client:
        ...     profile = await client.get("profile", {"symbol": "AAPL"})
    """

    def __init__(
        self,
        config: Optional[FMPConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **options: Any,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Complete configuration; alternatively pass FMPConfig
                fields as keyword options
            transport: Optional httpx transport (tests use MockTransport)

        Raises:
            FMPConfigError: If the configuration is invalid
        """
        self.config = resolve_config(config, options)
        self._interceptors = self.config.interceptors

        cache_config = self.config.cache
        self._ttl_policy = EndpointTTLPolicy(
            default_ttl=cache_config.default_ttl,
            endpoint_ttl=cache_config.endpoint_ttl,
            use_default_ttls=cache_config.use_default_ttls,
        )
        self._key_generator = cache_config.key_generator or CacheKeyGenerator.generate

        self._cache: Optional[CacheProvider] = None
        if cache_config.enabled:
            self._cache = cache_config.provider
            if self._cache is None:
                self._cache = MemoryCache(max_size=cache_config.max_size)

        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            transport=transport,
            follow_redirects=True,
        )

        logger.debug(
            "fmp_client_initialized",
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            retries=self.config.retries,
            cache_enabled=self._cache is not None,
            cache_provider=type(self._cache).__name__ if self._cache is not None else None,
        )

    async def __aenter__(self) -> FMPClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Fetch an endpoint, serving from cache when allowed.

        Args:
            endpoint: Logical endpoint path relative to base_url (e.g. "profile")
            params: Query parameters; None values are dropped

        Returns:
            Decoded JSON body

        Raises:
            FMPAPIError: On a non-2xx final response or any request failure
        """
        start = time.perf_counter()
        ttl = self._ttl_policy.resolve(endpoint)
        use_cache = self._cache is not None and ttl > 0

        try:
            cache_key: Optional[str] = None
            if use_cache:
                cache_key = self._make_key(endpoint, params)
                cached = await self._cache_get(cache_key)
                if cached is not None:
                    logger.debug("cache_hit", endpoint=endpoint, key=cache_key)
                    log_request_execution(
                        endpoint, (time.perf_counter() - start) * 1000, cached=True
                    )
                    return cached

                logger.debug("cache_miss", endpoint=endpoint, key=cache_key)

            data = await self._fetch(endpoint, normalize_params(params))

            if cache_key is not None and data is not None:
                await self._cache_set(cache_key, data, ttl)

        except FMPAPIError as e:
            log_request_execution(
                endpoint, (time.perf_counter() - start) * 1000, cached=False, error=str(e)
            )
            raise

        except Exception as e:
            wrapped = FMPAPIError(str(e) or type(e).__name__)
            self._notify_error(self.url_for(endpoint), wrapped)
            log_request_execution(
                endpoint, (time.perf_counter() - start) * 1000, cached=False, error=str(wrapped)
            )
            raise wrapped from e

        log_request_execution(endpoint, (time.perf_counter() - start) * 1000, cached=False)
        return data

    def url_for(self, endpoint: str) -> str:
        """Absolute URL for an endpoint, without query string."""
        return f"{self.config.base_url}/{endpoint.lstrip('/')}"

    async def _fetch(self, endpoint: str, query: Dict[str, str]) -> Any:
        response = await self._send_with_retry(endpoint, query)

        if not response.is_success:
            error = self._error_from_response(response)
            self._notify_error(self.url_for(endpoint), error)
            raise error

        if self._interceptors.on_response is not None:
            self._interceptors.on_response(str(response.request.url), response)

        return response.json()

    def _build_request(self, endpoint: str, query: Dict[str, str]) -> httpx.Request:
        params = {**query, API_KEY_PARAM: self.config.api_key}
        return self._http.build_request("GET", self.url_for(endpoint), params=params)

    async def _send_with_retry(self, endpoint: str, query: Dict[str, str]) -> httpx.Response:
        """
        Send the GET, retrying transient failures.

        Retries on 408, 413, 429 and 5xx responses and on transport
        errors (including timeouts) up to ``retries`` times, sleeping
        between attempts. Anything else is returned to the caller.
        """
        max_retries = self.config.retries

        for attempt in range(max_retries + 1):
            request = self._build_request(endpoint, query)
            if self._interceptors.on_request is not None:
                self._interceptors.on_request(str(request.url), request)

            try:
                response = await self._http.send(request)

            except httpx.TransportError as e:
                if attempt >= max_retries:
                    raise

                delay = self._retry_delay(attempt)
                logger.warning(
                    "request_retry",
                    endpoint=endpoint,
                    attempt=attempt + 1,
                    retries=max_retries,
                    delay_seconds=delay,
                    error=redact_api_key(e),
                    error_type=type(e).__name__,
                )
                await asyncio.sleep(delay)
                continue

            if is_retryable_status(response.status_code) and attempt < max_retries:
                delay = self._retry_delay(attempt, response)
                logger.warning(
                    "request_retry",
                    endpoint=endpoint,
                    attempt=attempt + 1,
                    retries=max_retries,
                    delay_seconds=delay,
                    status=response.status_code,
                )
                await response.aclose()
                await asyncio.sleep(delay)
                continue

            return response

        raise FMPAPIError("Request failed after all retries")  # pragma: no cover

    def _retry_delay(self, attempt: int, response: Optional[httpx.Response] = None) -> float:
        """Exponential backoff, or the server's Retry-After when it sends one."""
        delay = self.config.retry_backoff * (2 ** attempt)

        if response is not None:
            retry_after = response.headers.get("Retry-After")
            if retry_after is not None:
                try:
                    delay = max(0.0, float(retry_after))
                except ValueError:
                    pass

        return min(delay, self.config.max_retry_delay)

    @staticmethod
    def _error_from_response(response: httpx.Response) -> FMPAPIError:
        try:
            body = response.text
        except Exception:
            body = ""

        status_text = response.reason_phrase
        message = body or f"HTTP {response.status_code}: {status_text}"
        return FMPAPIError(message, status=response.status_code, status_text=status_text)

    def _notify_error(self, url: str, error: FMPAPIError) -> None:
        if self._interceptors.on_error is None:
            return

        try:
            self._interceptors.on_error(url, error)
        except Exception as e:
            logger.warning(
                "error_interceptor_failed",
                url=redact_api_key(url),
                error=str(e),
                error_type=type(e).__name__,
            )

    def _make_key(self, endpoint: str, params: Optional[Mapping[str, Any]]) -> str:
        return self._key_generator(endpoint, dict(params) if params else {})

    def _log_cache_error(self, operation: str, error: Exception, **context: Any) -> None:
        logger.warning(
            "cache_provider_error",
            operation=operation,
            provider=type(self._cache).__name__,
            error=str(error),
            error_type=type(error).__name__,
            **context,
        )

    async def _cache_get(self, key: str) -> Optional[Any]:
        try:
            return await maybe_await(self._cache.get(key))
        except Exception as e:
            self._log_cache_error("get", e, key=key)
            return None

    async def _cache_set(self, key: str, value: Any, ttl: int) -> None:
        try:
            await maybe_await(self._cache.set(key, value, ttl))
        except Exception as e:
            self._log_cache_error("set", e, key=key)

    async def _cache_delete(self, key: str) -> bool:
        try:
            return bool(await maybe_await(self._cache.delete(key)))
        except Exception as e:
            self._log_cache_error("delete", e, key=key)
            return False

    async def _cache_clear(self) -> None:
        try:
            await maybe_await(self._cache.clear())
        except Exception as e:
            self._log_cache_error("clear", e)

    async def clear_cache(self) -> None:
        """Remove every cached response. No-op when caching is disabled."""
        if self._cache is None:
            return
        await self._cache_clear()
        logger.info("cache_cleared", provider=type(self._cache).__name__)

    async def invalidate_cache(
        self, endpoint: str, params: Optional[Mapping[str, Any]] = None
    ) -> bool:
        """
        Drop the cached response for one request.

        Returns:
            True if an entry was removed
        """
        if self._cache is None:
            return False

        key = self._make_key(endpoint, params)
        removed = await self._cache_delete(key)
        logger.debug("cache_invalidated", endpoint=endpoint, key=key, removed=removed)
        return removed

    def get_cache_provider(self) -> Optional[CacheProvider]:
        """Return the active provider, or None when caching is disabled."""
        return self._cache

    def ttl_for(self, endpoint: str) -> int:
        """Resolved TTL in milliseconds for an endpoint."""
        return self._ttl_policy.resolve(endpoint)

    def cache_key(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Cache key the client would use for a request."""
        return self._make_key(endpoint, params)
