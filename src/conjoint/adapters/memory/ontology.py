"""A small taxonomy held in memory.

The ontology knows four kinds of edges:
- ``genls``: collection -> more general collections
- ``isa``: instance -> collections it belongs to
- ``genl_preds``: relation -> more general relations
- ``disjoint``: unordered pairs of collections that share no instances

Disjointness is inherited down ``genls``: two concepts are disjoint when any
of their generalisations (themselves included) are declared disjoint.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from conjoint.domain.model import GENLS, ISA, Concept
from conjoint.domain.ports import ArgumentConstraints

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from conjoint.domain.model import ConcreteAssertion

log = getLogger(__name__)

type Edges = defaultdict[Concept, set[Concept]]


def _edges() -> Edges:
    return defaultdict(set)


def _closure(start: Concept, edges: Mapping[Concept, set[Concept]]) -> frozenset[Concept]:
    """``start`` plus everything reachable from it."""

    seen = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for parent in edges.get(current, ()):
            if parent not in seen:
                seen.add(parent)
                stack.append(parent)
    return frozenset(seen)


@dataclass(slots=True)
class InMemoryOntology:
    genls: Edges = field(default_factory=_edges)
    isa: Edges = field(default_factory=_edges)
    genl_preds: Edges = field(default_factory=_edges)
    disjoint: set[frozenset[Concept]] = field(default_factory=set[frozenset[Concept]])
    constraints: dict[tuple[Concept, int], ArgumentConstraints] = field(
        default_factory=dict[tuple[Concept, int], ArgumentConstraints]
    )
    informationless: set[Concept] = field(default_factory=set[Concept])
    asserted: list[ConcreteAssertion] = field(default_factory=list["ConcreteAssertion"])

    # Building

    def add_genls(self, specific: Concept, *general: Concept) -> None:
        self.genls[specific].update(general)

    def add_isa(self, instance: Concept, *collections: Concept) -> None:
        self.isa[instance].update(collections)

    def add_genl_preds(self, relation: Concept, *general: Concept) -> None:
        self.genl_preds[relation].update(general)

    def add_disjoint(self, first: Concept, second: Concept) -> None:
        if first == second:
            raise ValueError(f"A concept cannot be disjoint with itself: {first}")
        self.disjoint.add(frozenset((first, second)))

    def add_constraints(
        self,
        relation: Concept,
        position: int,
        *,
        isa: Iterable[Concept] = (),
        genls: Iterable[Concept] = (),
    ) -> None:
        if position < 1:
            raise ValueError("Argument positions start at 1")
        self.constraints[(relation, position)] = ArgumentConstraints(
            isa=frozenset(isa), genls=frozenset(genls)
        )

    def add_informationless(self, *relations: Concept) -> None:
        self.informationless.update(relations)

    # OntologyPort

    def is_disjoint(self, first: Concept, second: Concept) -> bool:
        if first == second:
            return False
        first_up = _closure(first, self.genls)
        second_up = _closure(second, self.genls)
        return any(
            frozenset((a, b)) in self.disjoint for a in first_up for b in second_up if a != b
        )

    def is_subsumed(self, specific: Concept, general: Concept) -> bool:
        return general in _closure(specific, self.genls)

    def is_member(self, instance: Concept, collection: Concept) -> bool:
        return any(
            self.is_subsumed(direct, collection) for direct in self.isa.get(instance, ())
        )

    def specializes(self, relation: Concept, base_relation: Concept) -> bool:
        return base_relation in _closure(relation, self.genl_preds)

    def argument_constraints(self, relation: Concept, position: int) -> ArgumentConstraints:
        """Constraints declared on ``relation`` or any relation it specializes."""

        isa: set[Concept] = set()
        genls: set[Concept] = set()
        for general in _closure(relation, self.genl_preds):
            found = self.constraints.get((general, position))
            if found is None:
                continue
            isa.update(found.isa)
            genls.update(found.genls)
        return ArgumentConstraints(isa=frozenset(isa), genls=frozenset(genls))

    def is_informationless(self, relation: Concept) -> bool:
        return relation in self.informationless

    def assert_fact(self, assertion: ConcreteAssertion) -> None:
        self.asserted.append(assertion)
        subject, target = assertion.args[0], assertion.target
        if assertion.relation == ISA:
            self.add_isa(subject, target)
        elif assertion.relation == GENLS:
            self.add_genls(subject, target)
        log.debug("Asserted %s", assertion)
