"""Application configuration helpers."""

from __future__ import annotations

from conjoint.common.logging import configure_logging

from .env import env_float, env_int, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ontology import RemoteOntologyConfig, get_remote_ontology_config
from .search import SearchConfig, get_search_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RemoteOntologyConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SearchConfig",
    "configure_logging",
    "env_float",
    "env_int",
    "get_remote_ontology_config",
    "get_search_config",
    "require_env_var",
    "require_env_vars",
]
