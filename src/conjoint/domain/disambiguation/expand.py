"""Expansion of candidate assertions into alternative queues.

Concrete assertions expand to a single alternative of weight 1. Unresolved
assertions are mapped one term at a time: each concrete mapping becomes a
sibling alternative, each mapping that leaves the assertion ambiguous opens a
nested sub-queue which is expanded in turn.

Recursion is bounded two ways:
- concepts in ``excluded`` (always including the focus concept) are never
  substituted, and a term is never re-mapped on the path that produced it
- branches deeper than ``max_depth`` are dropped
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from conjoint.domain.model import Concept, ConcreteAssertion

from .queue import AlternativeQueue

if TYPE_CHECKING:
    from collections.abc import Collection

    from conjoint.domain.model import CandidateAssertion, Term, UnresolvedAssertion
    from conjoint.domain.ports import ConceptMapper

log = getLogger(__name__)

DEFAULT_MAX_DEPTH = 4


@dataclass(slots=True)
class _Pending:
    assertion: UnresolvedAssertion
    queue: AlternativeQueue
    depth: int
    confidence: float
    seen_terms: frozenset[Term]


@dataclass(slots=True)
class CandidateExpander:
    mapper: ConceptMapper
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")

    def expand(
        self,
        assertion: CandidateAssertion,
        *,
        excluded: Collection[Concept] = (),
    ) -> AlternativeQueue:
        if isinstance(assertion, ConcreteAssertion):
            return AlternativeQueue.single(assertion)

        excluded_concepts = frozenset(excluded)
        root = AlternativeQueue()
        stack = [_Pending(assertion, root, 0, 1.0, frozenset())]
        while stack:
            pending = stack.pop()
            self._expand_step(pending, excluded_concepts, stack)

        queue = root.pruned()
        if queue.is_empty():
            log.debug("No mapping survived for %s", assertion)
        return queue

    def _expand_step(
        self,
        pending: _Pending,
        excluded: frozenset[Concept],
        stack: list[_Pending],
    ) -> None:
        slot, term = pending.assertion.first_term()
        if term in pending.seen_terms:
            log.debug("Skipping cyclic mapping of %s in %s", term, pending.assertion)
            return

        nested: list[_Pending] = []
        for candidate in self.mapper.map_term(term, excluded=excluded):
            target = candidate.target
            if target == term:
                continue
            if isinstance(target, Concept) and target in excluded:
                continue
            confidence = pending.confidence * candidate.weight
            substituted = pending.assertion.substitute(slot, target)
            if isinstance(substituted, ConcreteAssertion):
                pending.queue.add(substituted, confidence)
                continue

            depth = pending.depth + 1
            if depth > self.max_depth:
                log.debug("Dropping %s: expansion depth %d exceeded", substituted, depth)
                continue
            subqueue = AlternativeQueue()
            pending.queue.add_subqueue(subqueue)
            nested.append(
                _Pending(substituted, subqueue, depth, confidence, pending.seen_terms | {term})
            )

        # Reversed so the first mapping is expanded first.
        stack.extend(reversed(nested))
