"""Cache key generation for consistent, deterministic cache keys.

This module provides the CacheKeyGenerator class for building cache
keys from an endpoint and its query parameters, plus the value
rendering shared with the outgoing request.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote

import structlog

logger = structlog.get_logger(__name__)


def stringify(value: Any) -> str:
    """
    Render a query parameter value the way it is sent on the wire.

    Booleans become ``true``/``false``, sequences are comma-joined and
    everything else goes through ``str``.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def normalize_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Drop unset parameters and render the rest as strings.

    Args:
        params: Raw query parameters (values may be None)

    Returns:
        New dict of parameter name to rendered value
    """
    if not params:
        return {}
    return {name: stringify(value) for name, value in params.items() if value is not None}


class CacheKeyGenerator:
    """
    Generate consistent cache keys for FMP requests.

    Cache keys follow the pattern: {endpoint}?{name1}={value1}&{name2}={value2}

    Parameters are sorted by name so that the same request built with
    parameters in a different order maps to the same key. A request
    without parameters uses the bare endpoint as its key. Names and
    values are percent-encoded, so a value containing ``&`` or ``=``
    cannot collide with a request carrying extra parameters.
    """

    @staticmethod
    def generate(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        Generate cache key for an FMP request.

        Args:
            endpoint: Logical endpoint (e.g., "profile")
            params: Query parameters as dictionary

        Returns:
            Cache key string

        Example:
            >>> CacheKeyGenerator.generate("profile", {"symbol": "AAPL"})
            'profile?symbol=AAPL'
            >>> CacheKeyGenerator.generate("ratios", {"symbol": "MSFT", "period": "quarter"})
            'ratios?period=quarter&symbol=MSFT'
        """
        rendered = normalize_params(params)
        if not rendered:
            return endpoint

        query = "&".join(
            f"{quote(name, safe=',')}={quote(rendered[name], safe=',')}"
            for name in sorted(rendered)
        )
        cache_key = f"{endpoint}?{query}"

        logger.debug("cache_key_generated", endpoint=endpoint, cache_key=cache_key)

        return cache_key

    @staticmethod
    def parse(cache_key: str) -> Tuple[str, Dict[str, str]]:
        """
        Split a default-format cache key back into endpoint and params.

        Args:
            cache_key: Key produced by generate()

        Returns:
            Tuple of (endpoint, params)

        Raises:
            ValueError: If the key has an empty endpoint
        """
        endpoint, _, query = cache_key.partition("?")
        if not endpoint:
            raise ValueError(f"Invalid cache key format: {cache_key!r}")

        return endpoint, dict(parse_qsl(query, keep_blank_values=True))

    def __call__(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        return self.generate(endpoint, params)


# Convenience singleton instance
key_generator = CacheKeyGenerator()
