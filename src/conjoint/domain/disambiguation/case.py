"""Disjoint cases: incremental, consistent interpretations of the grid.

A case starts from one seed cell under one standing assumption and scans
the grid row by row. Each open column offers its cell at the current row;
the cell is accepted when it does not contradict the truths the case has
gathered so far, which closes the column. Accepting a cell also closes the
column's nested children (they refine an alternative that lost) and its
ancestors (the case has committed to a deeper alternative).

Phases:
- ``SEEDED``: seed accepted, no row processed yet
- ``ADVANCING``: at least one row processed, columns still open
- ``COMPLETED``: nothing left to decide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from conjoint.domain.model import (
    COLLECTION,
    FIRST_ORDER_COLLECTION,
    GENLS,
    INDIVIDUAL,
    ISA,
    ISA_GENLS,
    THING,
    ConcreteAssertion,
    Standing,
)

from .results import AcceptedAssertion, DisambiguatedCase

if TYPE_CHECKING:
    from conjoint.domain.model import Concept
    from conjoint.domain.ports import ArgumentConstraints, OntologyPort

    from .grid import AssertionGrid, Cell, Seed
    from .oracle import DisjointnessOracle

log = getLogger(__name__)

CONSTRAINT_ORIGIN = "argument-constraint"


class CasePhase(StrEnum):
    SEEDED = "seeded"
    ADVANCING = "advancing"
    COMPLETED = "completed"


class ColumnStatus(StrEnum):
    OPEN = "open"
    ACCEPTED = "accepted"
    PROPAGATED = "propagated"


@dataclass(slots=True)
class SearchContext:
    """Mutable state shared by every case of one search."""

    grid: AssertionGrid
    ontology: OntologyPort
    oracle: DisjointnessOracle
    used: set[Cell] = field(default_factory=set["Cell"])
    _specializes: dict[tuple[Concept, Concept], bool] = field(
        default_factory=dict["tuple[Concept, Concept]", "bool"], repr=False
    )
    _constraints: dict[tuple[Concept, int], ArgumentConstraints] = field(
        default_factory=dict["tuple[Concept, int]", "ArgumentConstraints"], repr=False
    )

    def specializes(self, relation: Concept, base: Concept) -> bool:
        key = (relation, base)
        if key not in self._specializes:
            self._specializes[key] = bool(self.ontology.specializes(relation, base))
        return self._specializes[key]

    def constraints(self, relation: Concept, position: int) -> ArgumentConstraints:
        key = (relation, position)
        if key not in self._constraints:
            self._constraints[key] = self.ontology.argument_constraints(relation, position)
        return self._constraints[key]


@dataclass(slots=True, eq=False)
class DisjointCase:
    context: SearchContext
    standing: Standing
    standing_weight: float
    statuses: list[ColumnStatus]
    isa_truths: set[Concept]
    genls_truths: set[Concept]
    accepted: list[AcceptedAssertion] = field(default_factory=list[AcceptedAssertion])
    seed_assertion: ConcreteAssertion | None = None
    row: int = 0
    completed_weight: float = 0.0
    phase: CasePhase = CasePhase.SEEDED

    @classmethod
    def seed(
        cls,
        context: SearchContext,
        seed: Seed,
        standing: Standing,
        standing_weight: float,
    ) -> DisjointCase | None:
        """Open a case on ``seed``; ``None`` when the seed cannot hold."""

        if standing_weight <= 0:
            return None
        grid = context.grid
        case = cls(
            context=context,
            standing=standing,
            standing_weight=standing_weight,
            statuses=[ColumnStatus.OPEN] * grid.width,
            isa_truths=set(grid.base_isa),
            genls_truths=set(grid.base_genls),
        )
        standing_concept = COLLECTION if standing is Standing.COLLECTION else INDIVIDUAL
        if context.oracle.is_disjoint(standing_concept, case.isa_truths):
            log.debug("Standing %s conflicts with known truths of %s", standing, grid.focus)
            return None
        # The focus is an instance of its standing; memberships disjoint with it fail.
        case.isa_truths.add(standing_concept)

        recorded = case._evaluate(seed.column, seed.row)
        if recorded is None:
            return None
        case.seed_assertion = recorded
        return case

    @property
    def completed_columns(self) -> int:
        return sum(1 for status in self.statuses if status is not ColumnStatus.OPEN)

    @property
    def assertions(self) -> tuple[ConcreteAssertion, ...]:
        return tuple(entry.assertion for entry in self.accepted)

    def potential_weight(self) -> float:
        """Upper bound on the normalized weight this case can still reach."""

        grid = self.context.grid
        if grid.weight_sum <= 0:
            return 0.0
        remaining = sum(
            column.best_from(self.row)
            for column in grid.columns
            if self.statuses[column.index] is ColumnStatus.OPEN
        )
        return (self.completed_weight + remaining) / grid.weight_sum * self.standing_weight

    def weight(self) -> float:
        grid = self.context.grid
        if grid.weight_sum <= 0:
            return 0.0
        return min(self.completed_weight / grid.weight_sum * self.standing_weight, 1.0)

    def sort_key(self) -> tuple[float, int, int]:
        """Heap order: completed cases by their final weight, others by potential."""

        if self.phase is CasePhase.COMPLETED:
            return (-self.weight(), -self.completed_columns, self.row)
        return (-self.potential_weight(), -self.completed_columns, self.row)

    def advance(self) -> None:
        """Evaluate every open column at the cursor row, then move down."""

        if self.phase is CasePhase.COMPLETED:
            raise RuntimeError("Cannot advance a completed case")
        grid = self.context.grid
        row = self.row
        for column in grid.columns:
            if self.statuses[column.index] is not ColumnStatus.OPEN:
                continue
            if column.cell_at(row) is None:
                continue
            self._evaluate(column.index, row)
        self.row += 1
        self.phase = CasePhase.COMPLETED if self._is_complete() else CasePhase.ADVANCING

    def to_result(self, rank: int = 0) -> DisambiguatedCase:
        if self.seed_assertion is None:
            raise RuntimeError("Case has no seed assertion")
        return DisambiguatedCase(
            accepted=tuple(self.accepted),
            weight=self.weight(),
            standing=self.standing,
            seed_assertion=self.seed_assertion,
            rank=rank,
        )

    def _is_complete(self) -> bool:
        if self.row == 0:
            return False
        last_row = self.row - 1
        return all(
            self.statuses[column.index] is not ColumnStatus.OPEN
            or column.cell_at(last_row) is None
            for column in self.context.grid.columns
        )

    def _evaluate(self, column: int, row: int) -> ConcreteAssertion | None:
        assertion = self.context.grid.cell(column, row)
        if assertion is None:
            raise RuntimeError(f"No assertion at column {column}, row {row}")

        recorded: ConcreteAssertion | None
        if assertion.is_hierarchical:
            recorded = self._accept_hierarchical(assertion)
        elif self._accept_constraints(assertion):
            recorded = assertion
        else:
            recorded = None

        if recorded is None:
            return None
        self._record(recorded, column, row)
        return recorded

    def _accept_hierarchical(self, assertion: ConcreteAssertion) -> ConcreteAssertion | None:
        relation = assertion.relation
        target = assertion.target
        oracle = self.context.oracle

        if (
            self.standing is Standing.COLLECTION
            and (relation == ISA_GENLS or self.context.specializes(relation, GENLS))
            and not oracle.is_disjoint(target, self.genls_truths)
        ):
            self.isa_truths.add(FIRST_ORDER_COLLECTION)
            self.genls_truths.add(target)
            return assertion.as_parentage(Standing.COLLECTION)

        if (
            (self.standing is Standing.INDIVIDUAL and relation == ISA_GENLS)
            or self.context.specializes(relation, ISA)
        ) and not oracle.is_disjoint(target, self.isa_truths):
            self.isa_truths.add(target)
            return assertion.as_parentage(Standing.INDIVIDUAL)
        return None

    def _accept_constraints(self, assertion: ConcreteAssertion) -> bool:
        focus = self.context.grid.focus
        position = assertion.argument_position(focus)
        if position is None:
            return False

        constraints = self.context.constraints(assertion.relation, position)
        oracle = self.context.oracle
        for constraint in sorted(constraints.isa):
            if oracle.is_disjoint(constraint, self.isa_truths):
                return False
        for constraint in sorted(constraints.genls):
            if oracle.is_disjoint(constraint, self.genls_truths):
                return False

        self.isa_truths.update(constraints.isa)
        self.genls_truths.update(constraints.genls)
        for relation, found in ((ISA, constraints.isa), (GENLS, constraints.genls)):
            for constraint in sorted(found):
                if constraint == THING:
                    continue
                self._add_accepted(
                    ConcreteAssertion.of(relation, focus, constraint, origin=CONSTRAINT_ORIGIN)
                )
        return True

    def _record(self, assertion: ConcreteAssertion, column: int, row: int) -> None:
        grid = self.context.grid
        weight = grid.weight(column, row)
        self._note_completed(column, row)
        self._add_accepted(assertion, weight=weight, cell=(column, row))

        # Equal weights further down the same column are taken as jointly true.
        next_row = row + 1
        if next_row < grid.height and grid.weight(column, next_row) == weight:
            self._evaluate(column, next_row)

    def _add_accepted(
        self,
        assertion: ConcreteAssertion,
        *,
        weight: float = 0.0,
        cell: Cell | None = None,
    ) -> None:
        if any(entry.assertion == assertion for entry in self.accepted):
            return
        self.accepted.append(AcceptedAssertion(assertion=assertion, weight=weight, cell=cell))

    def _note_completed(self, column: int, row: int) -> None:
        grid = self.context.grid
        used = self.context.used
        used.add((column, row))
        if self.statuses[column] is not ColumnStatus.OPEN:
            return
        self.statuses[column] = ColumnStatus.ACCEPTED
        self.completed_weight += grid.weight(column, row)

        for child in grid.descendants(column):
            if self.statuses[child] is ColumnStatus.OPEN:
                self.statuses[child] = ColumnStatus.PROPAGATED
            used.update((child, child_row) for child_row in grid.columns[child].rows())
        for ancestor in grid.ancestors(column):
            if self.statuses[ancestor] is ColumnStatus.OPEN:
                self.statuses[ancestor] = ColumnStatus.PROPAGATED

    def __str__(self) -> str:
        prefix = "C" if self.standing is Standing.COLLECTION else "I"
        return f"{prefix}:[{', '.join(str(a) for a in self.assertions)}]"
