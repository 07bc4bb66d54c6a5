"""Port definitions for the external ontology."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from conjoint.domain.model import Concept, ConcreteAssertion


class OntologyError(RuntimeError):
    """Raised when an ontology query or write cannot be answered."""


@dataclass(frozen=True, slots=True)
class ArgumentConstraints:
    """Minimal isa/genls constraints declared for one argument of a relation."""

    isa: frozenset[Concept] = field(default_factory=frozenset["Concept"])
    genls: frozenset[Concept] = field(default_factory=frozenset["Concept"])


@runtime_checkable
class OntologyPort(Protocol):
    """Read queries plus the single write used once a case is chosen.

    Implementations raise ``OntologyError`` for any failure; callers decide
    whether that invalidates the current case or the whole request.
    """

    def is_disjoint(self, first: Concept, second: Concept) -> bool: ...

    def is_subsumed(self, specific: Concept, general: Concept) -> bool: ...

    def is_member(self, instance: Concept, collection: Concept) -> bool: ...

    def specializes(self, relation: Concept, base_relation: Concept) -> bool: ...

    def argument_constraints(self, relation: Concept, position: int) -> ArgumentConstraints: ...

    def is_informationless(self, relation: Concept) -> bool: ...

    def assert_fact(self, assertion: ConcreteAssertion) -> None: ...
