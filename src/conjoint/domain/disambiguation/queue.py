"""Ranked alternatives for one candidate assertion.

A queue holds the concrete alternatives an assertion can resolve to, ordered
by descending weight (ties keep insertion order). Alternatives that remain
ambiguous after one mapping step live in nested sub-queues, which makes the
whole structure a tree. Flattening the tree into grid columns happens in
``grid``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from conjoint.domain.model import ConcreteAssertion


@dataclass(slots=True)
class AlternativeQueue:
    _entries: list[tuple[ConcreteAssertion, float]] = field(
        default_factory=list["tuple[ConcreteAssertion, float]"]
    )
    _subqueues: list[AlternativeQueue] = field(default_factory=list["AlternativeQueue"])

    @classmethod
    def single(cls, assertion: ConcreteAssertion, weight: float = 1.0) -> AlternativeQueue:
        queue = cls()
        queue.add(assertion, weight)
        return queue

    @property
    def entries(self) -> tuple[tuple[ConcreteAssertion, float], ...]:
        return tuple(self._entries)

    @property
    def subqueues(self) -> tuple[AlternativeQueue, ...]:
        return tuple(self._subqueues)

    def add(self, assertion: ConcreteAssertion, weight: float) -> None:
        """Insert ``assertion``; a repeated alternative keeps its best weight."""

        if weight <= 0:
            raise ValueError(f"Alternative weight must be positive, got {weight}")
        for index, (existing, existing_weight) in enumerate(self._entries):
            if existing == assertion:
                if weight <= existing_weight:
                    return
                del self._entries[index]
                break
        position = len(self._entries)
        for index, (_, existing_weight) in enumerate(self._entries):
            if weight > existing_weight:
                position = index
                break
        self._entries.insert(position, (assertion, weight))

    def add_subqueue(self, queue: AlternativeQueue) -> None:
        self._subqueues.append(queue)

    def weight_of(self, assertion: ConcreteAssertion) -> float:
        for existing, weight in self._entries:
            if existing == assertion:
                return weight
        raise KeyError(str(assertion))

    def is_empty(self) -> bool:
        return not self._entries and all(queue.is_empty() for queue in self._subqueues)

    def pruned(self) -> AlternativeQueue:
        """Copy without empty sub-queues."""

        copy = AlternativeQueue(list(self._entries))
        for queue in self._subqueues:
            if not queue.is_empty():
                copy.add_subqueue(queue.pruned())
        return copy

    def __iter__(self) -> Iterator[ConcreteAssertion]:
        return (assertion for assertion, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, assertion: object) -> bool:
        return any(existing == assertion for existing, _ in self._entries)
