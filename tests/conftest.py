from __future__ import annotations

from pathlib import Path

import pytest

from conjoint.adapters.memory import InMemoryOntology
from conjoint.domain.model import Concept, WeightedStanding
from tests.helpers.grids import FIDO


@pytest.fixture
def fido() -> Concept:
    return FIDO


@pytest.fixture
def individual_only() -> WeightedStanding:
    return WeightedStanding(collection=0.0, individual=1.0)


@pytest.fixture
def animals() -> InMemoryOntology:
    """Small taxonomy: two disjoint pets under Animal, and a Rock that is no animal."""

    ontology = InMemoryOntology()
    ontology.add_genls(Concept("Dog"), Concept("Mammal"))
    ontology.add_genls(Concept("Cat"), Concept("Mammal"))
    ontology.add_genls(Concept("Mammal"), Concept("Animal"))
    ontology.add_genls(Concept("Rock"), Concept("Mineral"))
    ontology.add_disjoint(Concept("Dog"), Concept("Cat"))
    ontology.add_disjoint(Concept("Animal"), Concept("Mineral"))
    ontology.add_disjoint(Concept("Collection"), Concept("Individual"))
    return ontology


@pytest.fixture(scope="session")
def data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"
