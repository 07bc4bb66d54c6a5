"""Result types returned to callers of the search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from conjoint.domain.model import Standing

if TYPE_CHECKING:
    from conjoint.domain.model import ConcreteAssertion


@dataclass(frozen=True, slots=True, kw_only=True)
class AcceptedAssertion:
    """An assertion accepted into a case.

    ``cell`` is ``None`` for facts synthesized from argument constraints.
    """

    assertion: ConcreteAssertion
    weight: float = 0.0
    cell: tuple[int, int] | None = None

    @property
    def synthesized(self) -> bool:
        return self.cell is None


@dataclass(frozen=True, slots=True, kw_only=True)
class DisambiguatedCase:
    """One consistent interpretation of the focus concept."""

    accepted: tuple[AcceptedAssertion, ...]
    weight: float
    standing: Standing
    seed_assertion: ConcreteAssertion
    rank: int = field(default=0, compare=False)

    @property
    def assertions(self) -> tuple[ConcreteAssertion, ...]:
        return tuple(entry.assertion for entry in self.accepted)

    @property
    def is_collection(self) -> bool:
        return self.standing is Standing.COLLECTION

    def identity(self) -> tuple[Standing, frozenset[ConcreteAssertion]]:
        return (self.standing, frozenset(self.assertions))
