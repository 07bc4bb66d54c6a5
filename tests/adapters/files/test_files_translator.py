from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from conjoint.adapters.files import (
    load_ontology_file,
    load_request_file,
    to_mapper,
    to_ontology,
    to_report,
    to_request,
    to_standing_prior,
)
from conjoint.domain.disambiguation import DisambiguationEngine
from conjoint.domain.model import (
    ISA,
    Concept,
    ConcreteAssertion,
    Standing,
    Term,
    UnresolvedAssertion,
)

if TYPE_CHECKING:
    from pathlib import Path

FIDO = Concept("Fido")


def test_ontology_translation(data_dir: Path) -> None:
    ontology = to_ontology(load_ontology_file(data_dir / "ontology.json"))

    assert ontology.is_disjoint(Concept("Dog"), Concept("Rock"))
    assert ontology.is_member(Concept("Rex"), Concept("Animal"))
    assert ontology.specializes(Concept("owns"), Concept("relatedTo"))
    assert ontology.is_informationless(Concept("relatedTo"))
    assert ontology.argument_constraints(Concept("eats"), 1).isa == frozenset({Concept("Animal")})


def test_request_translation(data_dir: Path) -> None:
    request = to_request(load_request_file(data_dir / "request.json"))

    pet, eats = request.assertions
    assert request.focus == FIDO
    assert request.top_n == 2
    assert isinstance(pet, UnresolvedAssertion)
    assert pet.args == (FIDO, Term("pet"))
    assert pet.origin == "infobox"
    assert eats == ConcreteAssertion.of(Concept("eats"), FIDO, Concept("Bone"))
    assert eats.weight == 0.5


def test_mapper_and_prior_translation(data_dir: Path) -> None:
    payload = load_request_file(data_dir / "request.json")

    mapper = to_mapper(payload)
    prior = to_standing_prior(payload)

    assert mapper is not None
    assert [c.target for c in mapper.map_term(Term("pet"), excluded=())] == [
        Concept("Dog"),
        Concept("Cat"),
    ]
    assert prior(FIDO).normalized(Standing.INDIVIDUAL) == 1.0


def test_report_lists_every_case(data_dir: Path) -> None:
    payload = load_request_file(data_dir / "request.json")
    engine = DisambiguationEngine(
        ontology=to_ontology(load_ontology_file(data_dir / "ontology.json")),
        standing_prior=to_standing_prior(payload),
        mapper=to_mapper(payload),
    )

    report = to_report(engine.disambiguate(to_request(payload)), committed=0)

    assert report.focus == "Fido"
    assert [case.rank for case in report.cases] == [0, 1]
    best = report.cases[0]
    assert best.standing == "individual"
    assert best.weight == pytest.approx(1.0)
    assert [entry.assertion for entry in best.assertions] == [
        str(ConcreteAssertion.of(ISA, FIDO, Concept("Dog"))),
        "(isa Fido Animal)",
        "(eats Fido Bone)",
    ]
    assert [entry.synthesized for entry in best.assertions] == [False, True, False]
