from __future__ import annotations

import pytest

from conjoint.adapters.memory import LexiconMapper
from conjoint.domain.model import Concept, Term


def test_lookup_is_case_and_space_insensitive() -> None:
    mapper = LexiconMapper()
    mapper.add("Hunting  Dog", Concept("Beagle"), 0.4)

    found = mapper.map_term(Term("hunting dog"), excluded=())

    assert [candidate.target for candidate in found] == [Concept("Beagle")]
    assert len(mapper) == 1


def test_candidates_come_best_first_without_excluded() -> None:
    mapper = LexiconMapper()
    mapper.extend(
        "dog",
        [(Concept("HotDog"), 0.2), (Concept("Fido"), 0.9), (Term("canine"), 0.5)],
    )

    found = mapper.map_term(Term("dog"), excluded={Concept("Fido")})

    assert [candidate.target for candidate in found] == [Term("canine"), Concept("HotDog")]


def test_unknown_term_maps_to_nothing() -> None:
    assert LexiconMapper().map_term(Term("dog"), excluded=()) == []


def test_weights_are_validated() -> None:
    with pytest.raises(ValueError):
        LexiconMapper().add("dog", Concept("Dog"), 0.0)
