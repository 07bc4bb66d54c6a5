"""Lexicon-backed term mapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from conjoint.domain.model import Concept
from conjoint.domain.ports import MappedCandidate

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence

    from conjoint.domain.model import Argument, Term

log = getLogger(__name__)


def _normalize(text: str) -> str:
    return " ".join(text.lower().split())


@dataclass(slots=True)
class LexiconMapper:
    """Map terms by case-insensitive lookup of their text.

    Entries are kept in insertion order; the mapper returns them best first
    without the excluded concepts.
    """

    _entries: dict[str, list[MappedCandidate]] = field(
        default_factory=dict[str, list[MappedCandidate]]
    )

    def add(self, text: str, target: Argument, weight: float = 1.0) -> None:
        candidates = self._entries.setdefault(_normalize(text), [])
        candidates.append(MappedCandidate(target=target, weight=weight))

    def extend(self, text: str, targets: Iterable[tuple[Argument, float]]) -> None:
        for target, weight in targets:
            self.add(text, target, weight)

    def map_term(
        self,
        term: Term,
        *,
        excluded: Collection[Concept],
    ) -> Sequence[MappedCandidate]:
        candidates = self._entries.get(_normalize(term.text), [])
        found = [
            candidate
            for candidate in candidates
            if not (isinstance(candidate.target, Concept) and candidate.target in excluded)
        ]
        if not found:
            log.debug("No lexicon entry for %s", term)
        return sorted(found, key=lambda candidate: -candidate.weight)

    def __len__(self) -> int:
        return len(self._entries)
