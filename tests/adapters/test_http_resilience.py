from __future__ import annotations

import pytest

from conjoint.adapters.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    _build_cache_components,  # type: ignore[reportPrivateUsage]
    _build_limiter,  # type: ignore[reportPrivateUsage]
    build_retry,
)


def test_cache_disabled_builds_nothing() -> None:
    assert _build_cache_components(None) == (None, None)
    assert _build_cache_components(CacheConfig(enabled=False)) == (None, None)


def test_unknown_cache_backend_rejected() -> None:
    with pytest.raises(ValueError):
        _build_cache_components(CacheConfig(backend="redis"))  # type: ignore[arg-type]


def test_limiter_only_when_configured() -> None:
    assert _build_limiter(None) is None
    limiter = _build_limiter(RateLimit(max_calls=5, per_seconds=1.0))
    assert limiter is not None
    assert limiter.max_rate == 5


def test_retry_policy_only_retries_reads() -> None:
    retry = build_retry(RetryPolicy(total=2))

    assert retry.total == 2
    assert retry.is_retryable_method("GET")
    assert not retry.is_retryable_method("POST")


def test_default_headers_reach_the_client() -> None:
    config = ResilienceConfig(
        name="headers",
        cache=None,
        default_headers={"Accept": "application/json"},
    )

    client = ResilientClient(config)
    headers = client._client.headers  # noqa: SLF001  # type: ignore[reportPrivateUsage]

    assert headers["Accept"] == "application/json"
