"""Orchestrator for one disambiguation request.

The engine composes the stages but holds no adapters of its own: callers
pass in the ontology, the term mapper and the standing prior.

Flow:
1) expand candidate assertions into alternative queues
2) lay the queues out as an assertion grid
3) search the grid for the best disjoint cases
4) optionally commit the chosen case back to the ontology
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import DEBUG, getLogger
from typing import TYPE_CHECKING

from .expand import DEFAULT_MAX_DEPTH, CandidateExpander
from .grid import build_grid
from .search import DEFAULT_COLLECTION_BIAS, CaseSearchEngine

if TYPE_CHECKING:
    from conjoint.domain.model import CandidateAssertion, Concept, ConcreteAssertion
    from conjoint.domain.ports import ConceptMapper, OntologyPort, StandingPrior

    from .grid import AssertionGrid
    from .results import DisambiguatedCase
    from .search import SearchStats

log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class DisambiguationRequest:
    focus: Concept
    assertions: tuple[CandidateAssertion, ...]
    existing: tuple[ConcreteAssertion, ...] = ()
    assertion_removal: bool = False
    top_n: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DisambiguationResult:
    focus: Concept
    grid: AssertionGrid
    cases: tuple[DisambiguatedCase, ...] = ()
    stats: SearchStats | None = None

    @property
    def best(self) -> DisambiguatedCase | None:
        return self.cases[0] if self.cases else None

    def is_empty(self) -> bool:
        return not self.cases


@dataclass(slots=True)
class DisambiguationEngine:
    ontology: OntologyPort
    standing_prior: StandingPrior
    mapper: ConceptMapper | None = None
    top_n: int = 1
    max_expansion_depth: int = DEFAULT_MAX_DEPTH
    collection_bias: float = DEFAULT_COLLECTION_BIAS

    def build(self, request: DisambiguationRequest) -> AssertionGrid:
        expander = (
            CandidateExpander(self.mapper, max_depth=self.max_expansion_depth)
            if self.mapper is not None
            else None
        )
        return build_grid(
            request.assertions,
            request.focus,
            expander=expander,
            existing=request.existing,
            assertion_removal=request.assertion_removal,
        )

    def disambiguate(self, request: DisambiguationRequest) -> DisambiguationResult:
        """Run expansion, grid construction and search for ``request``."""

        grid = self.build(request)
        if grid.is_empty():
            log.info("Nothing to disambiguate for %s", request.focus)
            return DisambiguationResult(focus=request.focus, grid=grid)

        if log.isEnabledFor(DEBUG):
            log.debug("Grid for %s:\n%s", request.focus, grid.render())
        standing = self.standing_prior(request.focus)
        search = CaseSearchEngine(
            grid,
            self.ontology,
            standing,
            collection_bias=self.collection_bias,
        )
        top_n = request.top_n if request.top_n is not None else self.top_n
        cases = search.find_top_n(top_n)
        log.info(
            "Disambiguated %s: %d case(s), best weight=%s",
            request.focus,
            len(cases),
            f"{cases[0].weight:.4f}" if cases else None,
        )
        return DisambiguationResult(
            focus=request.focus,
            grid=grid,
            cases=cases,
            stats=search.last_stats,
        )

    def commit(self, case: DisambiguatedCase) -> int:
        """Write the accepted assertions of ``case`` to the ontology."""

        written = 0
        for assertion in case.assertions:
            self.ontology.assert_fact(assertion)
            written += 1
        log.info("Committed %d assertion(s) from %s case", written, case.standing)
        return written
