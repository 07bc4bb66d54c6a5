from __future__ import annotations

import pytest

from conjoint.adapters.memory import InMemoryOntology
from conjoint.domain.disambiguation import DisjointnessOracle
from conjoint.domain.disambiguation.oracle import pair_key
from conjoint.domain.model import Concept
from conjoint.domain.ports import OntologyError

DOG = Concept("Dog")
CAT = Concept("Cat")
MAMMAL = Concept("Mammal")


def test_pair_key_is_unordered() -> None:
    assert pair_key(DOG, CAT) == pair_key(CAT, DOG) == ("Cat", "Dog")


def test_candidate_already_true_is_never_disjoint(animals: InMemoryOntology) -> None:
    oracle = DisjointnessOracle(animals)

    assert oracle.is_disjoint(DOG, {DOG, CAT}) is False
    assert oracle.query_count == 0


def test_disjoint_when_any_truth_conflicts(animals: InMemoryOntology) -> None:
    oracle = DisjointnessOracle(animals)

    assert oracle.is_disjoint(DOG, {MAMMAL, CAT}) is True
    assert oracle.is_disjoint(DOG, {MAMMAL}) is False
    assert oracle.is_disjoint(DOG, set()) is False


def test_answers_are_cached_per_unordered_pair(animals: InMemoryOntology) -> None:
    oracle = DisjointnessOracle(animals)

    oracle.is_disjoint(DOG, {CAT})
    oracle.is_disjoint(CAT, {DOG})

    assert oracle.query_count == 1
    assert oracle.cache_size == 1


class _FailingOntology(InMemoryOntology):
    def is_disjoint(self, first: Concept, second: Concept) -> bool:
        raise OntologyError(f"cannot compare {first} and {second}")


def test_ontology_failures_propagate() -> None:
    oracle = DisjointnessOracle(_FailingOntology())

    with pytest.raises(OntologyError):
        oracle.is_disjoint(DOG, {CAT})
    assert oracle.cache_size == 0
