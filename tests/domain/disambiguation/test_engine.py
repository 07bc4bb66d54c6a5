from __future__ import annotations

import pytest

from conjoint.adapters.memory import InMemoryOntology, LexiconMapper, StaticStandingPrior
from conjoint.domain.disambiguation import DisambiguationEngine, DisambiguationRequest
from conjoint.domain.model import ISA, Concept, Term, UnresolvedAssertion, WeightedStanding
from tests.helpers.grids import FIDO, isa


@pytest.fixture
def engine(animals: InMemoryOntology) -> DisambiguationEngine:
    mapper = LexiconMapper()
    mapper.extend("pet", [(Concept("Dog"), 0.7), (Concept("Cat"), 0.3)])
    prior = StaticStandingPrior(default=WeightedStanding(collection=0.0, individual=1.0))
    return DisambiguationEngine(ontology=animals, standing_prior=prior, mapper=mapper, top_n=2)


def test_disambiguate_expands_and_ranks(engine: DisambiguationEngine) -> None:
    request = DisambiguationRequest(
        focus=FIDO,
        assertions=(UnresolvedAssertion(ISA, (FIDO, Term("pet"))), isa("Animal", weight=0.5)),
    )

    result = engine.disambiguate(request)

    assert not result.is_empty()
    assert [case.assertions for case in result.cases] == [
        (isa("Dog"), isa("Animal")),
        (isa("Cat"), isa("Animal")),
    ]
    assert result.best is result.cases[0]
    assert result.grid.width == 2
    assert result.stats is not None
    assert result.stats.cases_emitted == 2


def test_request_top_n_overrides_engine_default(engine: DisambiguationEngine) -> None:
    request = DisambiguationRequest(
        focus=FIDO,
        assertions=(UnresolvedAssertion(ISA, (FIDO, Term("pet"))),),
        top_n=1,
    )

    result = engine.disambiguate(request)

    assert len(result.cases) == 1


def test_nothing_to_disambiguate(engine: DisambiguationEngine) -> None:
    request = DisambiguationRequest(
        focus=FIDO,
        assertions=(UnresolvedAssertion(ISA, (FIDO, Term("unknown"))),),
    )

    result = engine.disambiguate(request)

    assert result.is_empty()
    assert result.best is None
    assert result.grid.is_empty()


def test_commit_writes_accepted_assertions(
    engine: DisambiguationEngine, animals: InMemoryOntology
) -> None:
    request = DisambiguationRequest(focus=FIDO, assertions=(isa("Dog"),))
    best = engine.disambiguate(request).best
    assert best is not None

    written = engine.commit(best)

    assert written == 1
    assert animals.asserted == [isa("Dog")]
    assert animals.is_member(FIDO, Concept("Mammal"))
