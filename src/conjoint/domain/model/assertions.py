"""Candidate assertions about a focus concept.

Assertions come in two shapes:
- ``ConcreteAssertion``: relation and every argument are ontology concepts
- ``UnresolvedAssertion``: at least one slot still holds an ambiguous ``Term``

Slot 0 is the relation, slots 1..n are the arguments. Equality of concrete
assertions ignores weight and origin so accepted lists de-duplicate by content.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .concepts import GENLS, HIERARCHICAL_RELATIONS, ISA, ISA_GENLS, Concept, Term
from .enums import Standing

type Argument = Concept | Term


def _validate_weight(weight: float) -> None:
    if not 0 < weight <= 1:
        raise ValueError(f"Assertion weight must lie in (0, 1], got {weight}")


@dataclass(frozen=True, slots=True)
class ConcreteAssertion:
    """A fully mapped relation over two or more concepts."""

    relation: Concept
    args: tuple[Concept, ...]
    weight: float = field(default=1.0, compare=False)
    origin: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if len(self.args) < 2:
            raise ValueError("An assertion needs at least two arguments")
        _validate_weight(self.weight)

    @classmethod
    def of(
        cls,
        relation: Concept,
        *args: Concept,
        weight: float = 1.0,
        origin: str | None = None,
    ) -> ConcreteAssertion:
        return cls(relation, tuple(args), weight=weight, origin=origin)

    @property
    def is_hierarchical(self) -> bool:
        return self.relation in HIERARCHICAL_RELATIONS

    @property
    def target(self) -> Concept:
        """The parent concept of a hierarchical assertion."""

        return self.args[1]

    def argument_position(self, concept: Concept) -> int | None:
        for index, arg in enumerate(self.args, start=1):
            if arg == concept:
                return index
        return None

    def as_parentage(self, standing: Standing) -> ConcreteAssertion:
        """Narrow the fused isa/genls relation to the one matching ``standing``."""

        if self.relation != ISA_GENLS:
            return self
        relation = GENLS if standing is Standing.COLLECTION else ISA
        return replace(self, relation=relation)

    def split(self) -> tuple[ConcreteAssertion, ...]:
        if self.relation != ISA_GENLS:
            return (self,)
        return (replace(self, relation=ISA), replace(self, relation=GENLS))

    def __str__(self) -> str:
        inner = " ".join(str(part) for part in (self.relation, *self.args))
        return f"({inner})"


@dataclass(frozen=True, slots=True)
class UnresolvedAssertion:
    """An assertion that still contains at least one ambiguous term."""

    relation: Argument
    args: tuple[Argument, ...]
    weight: float = field(default=1.0, compare=False)
    origin: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if len(self.args) < 2:
            raise ValueError("An assertion needs at least two arguments")
        _validate_weight(self.weight)
        if not self.unresolved_slots():
            raise ValueError("Unresolved assertion has no terms; use ConcreteAssertion")

    @property
    def slots(self) -> tuple[Argument, ...]:
        return (self.relation, *self.args)

    def unresolved_slots(self) -> tuple[int, ...]:
        return tuple(index for index, slot in enumerate(self.slots) if isinstance(slot, Term))

    def first_term(self) -> tuple[int, Term]:
        """Slot index and value of the leftmost ambiguous term."""

        for index, slot in enumerate(self.slots):
            if isinstance(slot, Term):
                return index, slot
        raise ValueError(f"{self} has no unresolved term")

    def concepts(self) -> frozenset[Concept]:
        return frozenset(slot for slot in self.slots if isinstance(slot, Concept))

    def substitute(
        self,
        slot: int,
        value: Argument,
        *,
        weight: float | None = None,
    ) -> CandidateAssertion:
        """Replace one slot, returning a concrete assertion once no terms remain."""

        slots = list(self.slots)
        if not 0 <= slot < len(slots):
            raise IndexError(f"Slot {slot} out of range for {self}")
        slots[slot] = value
        new_weight = self.weight if weight is None else weight
        relation, *args = slots
        if any(isinstance(part, Term) for part in slots):
            return UnresolvedAssertion(relation, tuple(args), weight=new_weight, origin=self.origin)
        return ConcreteAssertion(
            relation,  # type: ignore[arg-type]
            tuple(args),  # type: ignore[arg-type]
            weight=new_weight,
            origin=self.origin,
        )

    def __str__(self) -> str:
        inner = " ".join(str(part) for part in self.slots)
        return f"({inner})?"


type CandidateAssertion = ConcreteAssertion | UnresolvedAssertion
