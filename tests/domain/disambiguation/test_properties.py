"""Invariants that hold for every search, checked over a handful of grids."""

from __future__ import annotations

from itertools import combinations

import pytest

from conjoint.adapters.memory import InMemoryOntology
from conjoint.domain.disambiguation import AssertionGrid, CaseSearchEngine
from conjoint.domain.model import WeightedStanding
from tests.helpers.grids import flat_grid, isa

GRIDS = {
    "single": flat_grid([(isa("Dog"), 1.0)]),
    "two-disjoint": flat_grid([(isa("Dog"), 0.9)], [(isa("Cat"), 0.8)]),
    "mixed": flat_grid(
        [(isa("Dog"), 0.9), (isa("Rock"), 0.2)],
        [(isa("Cat"), 0.7), (isa("Mammal"), 0.7)],
        [(isa("Animal"), 0.5)],
    ),
    "ties": flat_grid([(isa("Dog"), 0.5)], [(isa("Cat"), 0.5)], [(isa("Rock"), 0.5)]),
    # The heaviest seed leads to the lighter case.
    "late-heavy": flat_grid(
        [(isa("Rock"), 0.5)],
        [(isa("Dog"), 0.3)],
        [(isa("Mammal"), 0.3)],
        [(isa("Animal"), 0.3)],
    ),
}

PRIORS = [WeightedStanding(), WeightedStanding(collection=0.0, individual=1.0)]


@pytest.mark.parametrize("name", sorted(GRIDS))
@pytest.mark.parametrize("prior", PRIORS)
def test_weights_lie_in_unit_interval_and_decrease(
    name: str, prior: WeightedStanding, animals: InMemoryOntology
) -> None:
    cases = CaseSearchEngine(GRIDS[name], animals, prior).find_top_n(10)

    weights = [case.weight for case in cases]
    assert all(0 <= weight <= 1 for weight in weights)
    assert weights == sorted(weights, reverse=True)


@pytest.mark.parametrize("name", sorted(GRIDS))
def test_accepted_assertions_are_mutually_consistent(
    name: str, animals: InMemoryOntology
) -> None:
    cases = CaseSearchEngine(GRIDS[name], animals, PRIORS[1]).find_top_n(10)

    for case in cases:
        targets = [assertion.target for assertion in case.assertions]
        for first, second in combinations(targets, 2):
            assert not animals.is_disjoint(first, second), (case, first, second)


@pytest.mark.parametrize("name", sorted(GRIDS))
def test_repeated_searches_are_identical(name: str, animals: InMemoryOntology) -> None:
    engine = CaseSearchEngine(GRIDS[name], animals, WeightedStanding())

    assert engine.find_top_n(4) == engine.find_top_n(4)
    assert engine.find_top_n(1) == engine.find_top_n(4)[:1]


@pytest.mark.parametrize("name", sorted(GRIDS))
def test_no_two_cases_share_standing_and_assertions(
    name: str, animals: InMemoryOntology
) -> None:
    cases = CaseSearchEngine(GRIDS[name], animals, WeightedStanding()).find_top_n(10)

    identities = [case.identity() for case in cases]
    assert len(identities) == len(set(identities))


def test_accepted_cells_are_never_reseeded(animals: InMemoryOntology) -> None:
    grid: AssertionGrid = GRIDS["mixed"]
    engine = CaseSearchEngine(grid, animals, PRIORS[1])

    engine.find_top_n(10)

    assert engine.last_stats is not None
    assert engine.last_stats.seeds_used < len(grid.seeds)
