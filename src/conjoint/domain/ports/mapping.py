"""Port for mapping ambiguous terms onto ontology concepts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from conjoint.domain.model import Argument, Concept, Term


@dataclass(frozen=True, slots=True)
class MappedCandidate:
    """One mapping of a term, with the mapper's confidence.

    ``target`` may itself be a ``Term`` when the mapper narrowed the text but
    could not settle on a concept.
    """

    target: Argument
    weight: float

    def __post_init__(self) -> None:
        if not 0 < self.weight <= 1:
            raise ValueError(f"Mapping weight must lie in (0, 1], got {self.weight}")


class ConceptMapper(Protocol):
    def map_term(
        self,
        term: Term,
        *,
        excluded: Collection[Concept],
    ) -> Sequence[MappedCandidate]: ...
