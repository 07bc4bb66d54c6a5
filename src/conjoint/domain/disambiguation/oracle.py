"""Memoizing disjointness checks against accumulated truths."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection

    from conjoint.domain.model import Concept
    from conjoint.domain.ports import OntologyPort

log = getLogger(__name__)

type PairKey = tuple[str, str]


def pair_key(first: Concept, second: Concept) -> PairKey:
    """Unordered cache key for a concept pair."""

    a, b = first.identifier, second.identifier
    return (a, b) if a <= b else (b, a)


@dataclass(slots=True)
class DisjointnessOracle:
    """Answer "is this concept disjoint with any known truth?".

    Pairwise answers are cached for the oracle's lifetime. Ontology failures
    propagate untouched so the caller can drop the case that asked.
    """

    ontology: OntologyPort
    _answers: dict[PairKey, bool] = field(default_factory=dict["PairKey", "bool"], repr=False)
    query_count: int = 0

    @property
    def cache_size(self) -> int:
        return len(self._answers)

    def is_disjoint(self, candidate: Concept, truths: Collection[Concept]) -> bool:
        if candidate in truths:
            return False
        for truth in sorted(truths):
            if self.pair_disjoint(candidate, truth):
                return True
        return False

    def pair_disjoint(self, first: Concept, second: Concept) -> bool:
        key = pair_key(first, second)
        cached = self._answers.get(key)
        if cached is not None:
            return cached
        self.query_count += 1
        result = bool(self.ontology.is_disjoint(first, second))
        self._answers[key] = result
        if result:
            log.debug("Disjoint: %s / %s", first, second)
        return result
