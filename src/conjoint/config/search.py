"""Search defaults for disambiguation runs."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int
from .errors import ConfigurationError

DEFAULT_TOP_N = 1
DEFAULT_MAX_EXPANSION_DEPTH = 4
DEFAULT_COLLECTION_BIAS = 1e-4


@dataclass(frozen=True, slots=True)
class SearchConfig:
    top_n: int = DEFAULT_TOP_N
    max_expansion_depth: int = DEFAULT_MAX_EXPANSION_DEPTH
    collection_bias: float = DEFAULT_COLLECTION_BIAS

    def __post_init__(self) -> None:
        if self.top_n < 1:
            raise ConfigurationError("top_n must be at least 1")
        if self.max_expansion_depth < 0:
            raise ConfigurationError("max_expansion_depth must be non-negative")
        if not 0 <= self.collection_bias < 1:
            raise ConfigurationError("collection_bias must lie in [0, 1)")


def get_search_config() -> SearchConfig:
    return SearchConfig(
        top_n=env_int("CONJOINT_TOP_N", DEFAULT_TOP_N),
        max_expansion_depth=env_int("CONJOINT_MAX_EXPANSION_DEPTH", DEFAULT_MAX_EXPANSION_DEPTH),
        collection_bias=env_float("CONJOINT_COLLECTION_BIAS", DEFAULT_COLLECTION_BIAS),
    )
