"""Ontology identifiers and the ambiguous terms that still need mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class Concept:
    """A node of the external ontology, identified by its name."""

    identifier: str

    def __post_init__(self) -> None:
        if not self.identifier or not self.identifier.strip():
            raise ValueError("Concept identifier must be a non-blank string")

    def __str__(self) -> str:
        return self.identifier


@dataclass(frozen=True, slots=True)
class Term:
    """Surface text that has not been mapped onto a concept yet.

    ``hint`` carries optional mapper context (for example the heuristic that
    mined the text); it takes part in equality so two heuristics producing
    the same text can still be mapped differently.
    """

    text: str
    hint: str | None = None

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValueError("Term text must not be blank")

    def __str__(self) -> str:
        return f'"{self.text}"'


ISA: Final = Concept("isa")
GENLS: Final = Concept("genls")
ISA_GENLS: Final = Concept("isaGenls")

COLLECTION: Final = Concept("Collection")
INDIVIDUAL: Final = Concept("Individual")
FIRST_ORDER_COLLECTION: Final = Concept("FirstOrderCollection")
THING: Final = Concept("Thing")

HIERARCHICAL_RELATIONS: Final = frozenset({ISA, GENLS, ISA_GENLS})
