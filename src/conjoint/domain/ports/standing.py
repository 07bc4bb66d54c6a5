"""Port supplying the standing prior of a concept."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from conjoint.domain.model import Concept, WeightedStanding


class StandingPrior(Protocol):
    """Callable estimating whether a concept is a collection or an individual."""

    def __call__(self, concept: Concept) -> WeightedStanding: ...
