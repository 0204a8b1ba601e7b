"""Unit tests for configuration models."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from fmp_sdk.cache.memory import MemoryCache
from fmp_sdk.models.config import DEFAULT_BASE_URL, CacheConfig, FMPConfig, Interceptors


class TestFMPConfig:
    """Test suite for FMPConfig."""

    def test_defaults(self):
        """Test defaults for every optional field."""
        config = FMPConfig(api_key="demo")

        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 30.0
        assert config.retries == 3
        assert config.retry_backoff == 0.3
        assert config.max_retry_delay == 30.0
        assert config.interceptors == Interceptors()
        assert config.cache.enabled is False

    def test_api_key_required(self):
        """Test the API key cannot be omitted."""
        with pytest.raises(ValidationError):
            FMPConfig()

    def test_blank_api_key_rejected(self):
        """Test whitespace-only keys are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            FMPConfig(api_key="  ")

        assert "API key is required" in str(exc_info.value)

    def test_base_url_trailing_slash_stripped(self):
        config = FMPConfig(api_key="demo", base_url="https://example.test/v3/")

        assert config.base_url == "https://example.test/v3"

    @pytest.mark.parametrize(
        "field,value",
        [("timeout", 0), ("retries", -1), ("retry_backoff", -0.1), ("max_retry_delay", -1)],
    )
    def test_invalid_numbers(self, field, value):
        """Test out-of-range numeric options are rejected."""
        with pytest.raises(ValidationError):
            FMPConfig(api_key="demo", **{field: value})

    def test_frozen(self):
        """Test configuration cannot change after creation."""
        config = FMPConfig(api_key="demo")

        with pytest.raises(ValidationError):
            config.timeout = 5

    def test_cache_from_dict(self):
        """Test nested cache options can be passed as a dict."""
        config = FMPConfig(api_key="demo", cache={"enabled": True, "default_ttl": 1_000})

        assert isinstance(config.cache, CacheConfig)
        assert config.cache.default_ttl == 1_000

    @patch.dict(
        os.environ,
        {
            "FMP_API_KEY": "env-key",
            "FMP_BASE_URL": "https://proxy.test/stable",
            "FMP_TIMEOUT": "12.5",
            "FMP_RETRIES": "1",
        },
    )
    def test_from_env(self):
        """Test configuration is read from FMP_* variables."""
        config = FMPConfig.from_env()

        assert config.api_key == "env-key"
        assert config.base_url == "https://proxy.test/stable"
        assert config.timeout == 12.5
        assert config.retries == 1

    @patch.dict(os.environ, {"FMP_API_KEY": "env-key"})
    def test_from_env_overrides_win(self):
        """Test keyword overrides take precedence over the environment."""
        config = FMPConfig.from_env(api_key="explicit", retries=0)

        assert config.api_key == "explicit"
        assert config.retries == 0

    @patch.dict(os.environ, {}, clear=True)
    def test_from_env_without_key(self):
        """Test a missing FMP_API_KEY fails validation."""
        with pytest.raises(ValidationError):
            FMPConfig.from_env()

    @patch.dict(os.environ, {}, clear=True)
    def test_env_options_defaults_blank_key(self):
        assert FMPConfig.env_options(timeout=5) == {"api_key": "", "timeout": 5}


class TestCacheConfig:
    """Test suite for CacheConfig."""

    def test_defaults(self):
        """Test caching is opt-in with a 5 minute fallback TTL."""
        config = CacheConfig()

        assert config.enabled is False
        assert config.default_ttl == 300_000
        assert config.endpoint_ttl == {}
        assert config.use_default_ttls is True
        assert config.provider is None
        assert config.max_size == 1000
        assert config.key_generator is None

    def test_negative_default_ttl_rejected(self):
        with pytest.raises(ValidationError):
            CacheConfig(default_ttl=-1)

    def test_negative_endpoint_ttl_rejected(self):
        """Test negative per-endpoint overrides are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            CacheConfig(endpoint_ttl={"profile": -5})

        assert "profile" in str(exc_info.value)

    def test_zero_max_size_rejected(self):
        with pytest.raises(ValidationError):
            CacheConfig(max_size=0)

    def test_provider_instance_kept(self):
        """Test the provider object is stored as given."""
        provider = MemoryCache(max_size=10)

        assert CacheConfig(provider=provider).provider is provider

    def test_provider_must_satisfy_protocol(self):
        """Test objects lacking the provider methods are rejected."""
        with pytest.raises(ValidationError):
            CacheConfig(provider=object())

    def test_key_generator_must_be_callable(self):
        with pytest.raises(ValidationError):
            CacheConfig(key_generator="not callable")
