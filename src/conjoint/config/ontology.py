"""Remote ontology service configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

ONTOLOGY_TIMEOUT_SECONDS = 10.0


def is_cacheable_answer(payload: object) -> bool:
    """Only cache well-formed answers; error documents must be asked again."""

    return isinstance(payload, dict) and "error" not in payload


@dataclass(frozen=True)
class RemoteOntologyConfig:
    """Holds the remote ontology endpoint and its HTTP policy."""

    base_url: str
    resilience: ResilienceConfig


def get_remote_ontology_config(
    *,
    resilience: ResilienceConfig | None = None,
) -> RemoteOntologyConfig:
    values = require_env_vars(("CONJOINT_ONTOLOGY_URL",))
    base_url = values["CONJOINT_ONTOLOGY_URL"].rstrip("/")
    timeout = env_float("CONJOINT_ONTOLOGY_TIMEOUT", ONTOLOGY_TIMEOUT_SECONDS)
    return RemoteOntologyConfig(
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="ontology",
            base_url=base_url,
            timeout_seconds=timeout,
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            cache=CacheConfig(backend="sqlite", should_cache=is_cacheable_answer),
            default_headers={"Accept": "application/json"},
        ),
    )
