"""Best-first search for the highest weighted disjoint cases of a grid.

The engine works a heap of cases with two moves:
- seed: open new cases (one per standing) on the next unused seed cell
  while the best case any remaining seed could grow into outweighs the
  top of the heap
- advance: process the next row of the top case

Cases in progress are ordered by potential weight, completed ones by their
final weight; ties go to the case with more closed columns, then to the one
higher up the grid. Both the potential weight and the seed bound never
underestimate what a case can reach, so a completed case is emitted only
once it is on top of the heap, which puts the results in ranked order.

Every call to ``find_top_n`` starts from fresh search state, so repeated
calls against a side-effect-free ontology return identical results.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from logging import DEBUG, getLogger
from typing import TYPE_CHECKING

from conjoint.domain.model import Standing
from conjoint.domain.ports import OntologyError

from .case import CasePhase, DisjointCase, SearchContext
from .oracle import DisjointnessOracle

if TYPE_CHECKING:
    from conjoint.domain.model import ConcreteAssertion, WeightedStanding
    from conjoint.domain.ports import OntologyPort

    from .grid import AssertionGrid, Seed
    from .results import DisambiguatedCase

log = getLogger(__name__)

DEFAULT_COLLECTION_BIAS = 1e-4

type HeapEntry = tuple[tuple[float, int, int], int, DisjointCase]


@dataclass(slots=True)
class SearchStats:
    seeds_used: int = 0
    cases_seeded: int = 0
    cases_discarded: int = 0
    ontology_failures: int = 0
    rows_advanced: int = 0
    cases_emitted: int = 0
    duplicates_skipped: int = 0


def seed_bounds(grid: AssertionGrid, standing_weight: float) -> tuple[float, ...]:
    """Upper bound, per seed index, on the weight of any case seeded from there on.

    A case seeded on a cell keeps that cell's weight for its column, closes
    the column's ancestors and descendants, and can at best take the heaviest
    cell of every other column. Bounds are suffix maxima over the seed order,
    so the bound at the first unused seed covers every seed after it.
    """

    if grid.weight_sum <= 0:
        return tuple(0.0 for _ in grid.seeds)
    column_best = [column.best_from(0) for column in grid.columns]
    reachable: list[float] = []
    for seed in grid.seeds:
        closed = {seed.column, *grid.ancestors(seed.column), *grid.descendants(seed.column)}
        others = sum(best for index, best in enumerate(column_best) if index not in closed)
        reachable.append((seed.weight + others) / grid.weight_sum * standing_weight)

    bounds: list[float] = []
    running = 0.0
    for bound in reversed(reachable):
        running = max(running, bound)
        bounds.append(running)
    return tuple(reversed(bounds))


@dataclass(slots=True)
class _SearchRun:
    context: SearchContext
    standing_weights: tuple[tuple[Standing, float], ...]
    stats: SearchStats = field(default_factory=SearchStats)
    _heap: list[HeapEntry] = field(default_factory=list["HeapEntry"])
    _sequence: itertools.count[int] = field(default_factory=itertools.count)
    _seed_cursor: int = 0
    _seed_bounds: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        best_standing = max((weight for _, weight in self.standing_weights), default=0.0)
        self._seed_bounds = seed_bounds(self.context.grid, best_standing)

    def execute(self, limit: int) -> tuple[DisambiguatedCase, ...]:
        results: list[DisambiguatedCase] = []
        emitted: set[object] = set()
        while len(results) < limit:
            self._plant_promising()
            if not self._heap:
                break
            case = heapq.heappop(self._heap)[2]
            if case.phase is CasePhase.COMPLETED:
                self._emit(case, results, emitted)
                continue
            try:
                case.advance()
            except OntologyError:
                self._discard(case, reason="ontology failure while advancing")
                continue
            self.stats.rows_advanced += 1
            self._push(case)
        return tuple(results)

    def _emit(
        self,
        case: DisjointCase,
        results: list[DisambiguatedCase],
        emitted: set[object],
    ) -> None:
        result = case.to_result(rank=len(results))
        identity = result.identity()
        if identity in emitted:
            self.stats.duplicates_skipped += 1
            log.debug("Skipping duplicate case %s", case)
            return
        emitted.add(identity)
        results.append(result)
        self.stats.cases_emitted += 1
        log.debug("Emitted case #%d %s weight=%.4f", result.rank, case, result.weight)

    def _plant_promising(self) -> None:
        """Plant seeds until none left could outgrow the top of the heap."""

        while True:
            index = self._next_seed_index()
            if index is None:
                return
            if self._heap and self._seed_bounds[index] <= self._top_weight():
                return
            self._plant(self.context.grid.seeds[index])

    def _next_seed_index(self) -> int | None:
        seeds = self.context.grid.seeds
        used = self.context.used
        while self._seed_cursor < len(seeds) and seeds[self._seed_cursor].cell in used:
            self._seed_cursor += 1
        if self._seed_cursor >= len(seeds):
            return None
        return self._seed_cursor

    def _top_weight(self) -> float:
        return -self._heap[0][0][0]

    def _plant(self, seed: Seed) -> None:
        self.context.used.add(seed.cell)
        self.stats.seeds_used += 1
        for standing, weight in self.standing_weights:
            try:
                case = DisjointCase.seed(self.context, seed, standing, weight)
            except OntologyError:
                self.stats.ontology_failures += 1
                self.stats.cases_discarded += 1
                log.warning(
                    "Discarding %s case seeded at %s: ontology failure",
                    standing,
                    seed.cell,
                    exc_info=True,
                )
                continue
            if case is None or case.potential_weight() <= 0:
                self.stats.cases_discarded += 1
                continue
            self.stats.cases_seeded += 1
            self._push(case)

    def _push(self, case: DisjointCase) -> None:
        heapq.heappush(self._heap, (case.sort_key(), next(self._sequence), case))

    def _discard(self, case: DisjointCase, *, reason: str) -> None:
        self.stats.ontology_failures += 1
        self.stats.cases_discarded += 1
        log.warning("Discarding case %s: %s", case, reason, exc_info=True)


class CaseSearchEngine:
    """Find the N best consistent interpretations of one grid."""

    def __init__(
        self,
        grid: AssertionGrid,
        ontology: OntologyPort,
        standing: WeightedStanding,
        *,
        oracle: DisjointnessOracle | None = None,
        collection_bias: float = DEFAULT_COLLECTION_BIAS,
    ) -> None:
        self.grid = grid
        self.ontology = ontology
        self.standing = standing
        self.collection_bias = collection_bias
        self._shared_oracle = oracle
        self.last_stats: SearchStats | None = None
        self.last_oracle: DisjointnessOracle | None = None

    def standing_weights(self) -> tuple[tuple[Standing, float], ...]:
        # Collection always loses a tie against individual.
        collection = self.standing.relative(Standing.COLLECTION) - self.collection_bias
        individual = self.standing.relative(Standing.INDIVIDUAL)
        return ((Standing.COLLECTION, collection), (Standing.INDIVIDUAL, individual))

    def find_top_n(self, n: int) -> tuple[DisambiguatedCase, ...]:
        """Return up to ``n`` distinct cases, best first."""

        if n <= 0 or self.grid.is_empty():
            return ()
        oracle = self._shared_oracle
        if oracle is None:
            oracle = DisjointnessOracle(self.ontology)
        context = SearchContext(grid=self.grid, ontology=self.ontology, oracle=oracle)
        # A standing without weight never yields a case.
        weights = tuple((standing, w) for standing, w in self.standing_weights() if w > 0)
        run = _SearchRun(context=context, standing_weights=weights)
        results = run.execute(n)

        self.last_stats = run.stats
        self.last_oracle = oracle
        log.debug(
            "Search for %s: %d/%d cases, %s, %d disjointness queries",
            self.grid.focus,
            len(results),
            n,
            run.stats,
            oracle.query_count,
        )
        if log.isEnabledFor(DEBUG):
            log.debug("Grid after search:\n%s", self.grid.render(context.used))
        return results

    def find_maximal_conjoint(self) -> tuple[ConcreteAssertion, ...]:
        """Accepted assertions of the single best case, or nothing."""

        results = self.find_top_n(1)
        if not results:
            return ()
        best = results[0]
        log.debug("Disambiguated %s with weight %.4f", self.grid.focus, best.weight)
        return best.assertions
