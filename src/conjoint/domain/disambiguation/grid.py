"""The assertion grid: every candidate alternative laid out for search.

Each top-level candidate assertion contributes one or more columns. A column
lists the alternatives of one queue from best to worst; nested sub-queues get
their own columns, placed right after their parent and starting at the row
below the parent's last alternative. Parent/child links between columns are
kept explicitly so completion can be propagated along the expansion tree.

Grid data is immutable once built. Search state (used seeds, completed
columns) lives in ``search`` and ``case``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from conjoint.domain.model import GENLS, ISA, ISA_GENLS, ConcreteAssertion
from conjoint.domain.ports import OntologyError

from .queue import AlternativeQueue

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from conjoint.domain.model import CandidateAssertion, Concept
    from conjoint.domain.ports import OntologyPort

    from .expand import CandidateExpander

log = getLogger(__name__)

type Cell = tuple[int, int]


class GridIndexError(IndexError):
    """Raised for coordinates outside the grid's declared bounds."""


@dataclass(frozen=True, slots=True)
class Column:
    """One flattened queue: rows ``offset`` .. ``offset + len(cells) - 1``."""

    index: int
    offset: int
    cells: tuple[ConcreteAssertion, ...]
    weights: tuple[float, ...]
    parent: int | None = None
    children: tuple[int, ...] = ()

    @property
    def end(self) -> int:
        return self.offset + len(self.cells)

    def rows(self) -> range:
        return range(self.offset, self.end)

    def cell_at(self, row: int) -> ConcreteAssertion | None:
        if self.offset <= row < self.end:
            return self.cells[row - self.offset]
        return None

    def weight_at(self, row: int) -> float:
        if self.offset <= row < self.end:
            return self.weights[row - self.offset]
        return 0.0

    def best_from(self, row: int) -> float:
        """Best weight among the cells at or below ``row``."""

        start = max(row, self.offset) - self.offset
        return max(self.weights[start:], default=0.0)


@dataclass(frozen=True, slots=True, order=True)
class Seed:
    """Seed stack entry, ordered best first."""

    sort_key: tuple[float, int, int] = field(repr=False)
    column: int = field(compare=False)
    row: int = field(compare=False)
    weight: float = field(compare=False)

    @classmethod
    def at(cls, column: int, row: int, weight: float) -> Seed:
        return cls((-weight, row, column), column, row, weight)

    @property
    def cell(self) -> Cell:
        return (self.column, self.row)


@dataclass(frozen=True, slots=True)
class AssertionGrid:
    focus: Concept
    columns: tuple[Column, ...] = ()
    seeds: tuple[Seed, ...] = ()
    weight_sum: float = 0.0
    base_isa: frozenset[Concept] = field(default_factory=frozenset["Concept"])
    base_genls: frozenset[Concept] = field(default_factory=frozenset["Concept"])

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def height(self) -> int:
        return max((column.end for column in self.columns), default=0)

    def is_empty(self) -> bool:
        return not self.columns

    def column(self, index: int) -> Column:
        if not 0 <= index < self.width:
            raise GridIndexError(f"Column {index} outside grid of width {self.width}")
        return self.columns[index]

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.height:
            raise GridIndexError(f"Row {row} outside grid of height {self.height}")

    def cell(self, column: int, row: int) -> ConcreteAssertion | None:
        selected = self.column(column)
        self._check_row(row)
        return selected.cell_at(row)

    def weight(self, column: int, row: int) -> float:
        selected = self.column(column)
        self._check_row(row)
        return selected.weight_at(row)

    def cells(self) -> Iterable[tuple[Cell, ConcreteAssertion, float]]:
        for column in self.columns:
            for row in column.rows():
                yield (column.index, row), column.cells[row - column.offset], column.weight_at(row)

    def descendants(self, index: int) -> tuple[int, ...]:
        found: list[int] = []
        stack = list(reversed(self.column(index).children))
        while stack:
            child = stack.pop()
            found.append(child)
            stack.extend(reversed(self.columns[child].children))
        return tuple(found)

    def ancestors(self, index: int) -> tuple[int, ...]:
        found: list[int] = []
        parent = self.column(index).parent
        while parent is not None:
            found.append(parent)
            parent = self.columns[parent].parent
        return tuple(found)

    def all_assertions(self) -> set[ConcreteAssertion]:
        """Every concrete assertion in the grid, fused isa/genls split in two."""

        assertions: set[ConcreteAssertion] = set()
        for _, assertion, _ in self.cells():
            assertions.update(assertion.split())
        return assertions

    def informationless_assertions(self, ontology: OntologyPort) -> set[ConcreteAssertion]:
        """Top-ranked assertions whose relation carries no discriminating content.

        Scanning a column stops once weights drop below the best informationless
        alternative found so far. Columns that start below row 0 are children of
        another column and are skipped.
        """

        infoless: set[ConcreteAssertion] = set()
        for column in self.columns:
            if column.offset != 0:
                continue
            best_weight = -1.0
            try:
                for assertion, weight in zip(column.cells, column.weights, strict=True):
                    if weight < best_weight:
                        break
                    if assertion.relation != ISA_GENLS and ontology.is_informationless(
                        assertion.relation
                    ):
                        infoless.add(assertion)
                        best_weight = weight
            except OntologyError:
                log.warning("Informationless check failed for column %d", column.index)
        return infoless

    def render(self, used: Collection[Cell] = ()) -> str:
        """Text dump, one line per column; used cells are upper-cased."""

        lines: list[str] = []
        for column in self.columns:
            parts: list[str] = []
            for row in range(column.end):
                assertion = column.cell_at(row)
                if assertion is None:
                    parts.append("[   ]")
                    continue
                text = str(assertion)
                if (column.index, row) in used:
                    text = text.upper()
                parts.append(f"[{text}:{column.weight_at(row):.4g}]")
            lines.append("".join(parts))
        return "\n".join(lines)


@dataclass(slots=True)
class _ColumnDraft:
    offset: int
    cells: list[ConcreteAssertion]
    weights: list[float]
    parent: int | None
    children: list[int] = field(default_factory=list[int])


@dataclass(slots=True)
class _GridDraft:
    columns: list[_ColumnDraft] = field(default_factory=list[_ColumnDraft])
    weight_sum: float = 0.0

    def add_queue(self, queue: AlternativeQueue, base_weight: float) -> None:
        """Depth-first flatten ``queue`` into columns using an explicit stack."""

        stack: list[tuple[AlternativeQueue, int, float, int | None]] = [
            (queue, 0, base_weight, None)
        ]
        while stack:
            current, offset, fraction, parent = stack.pop()
            size = len(current)
            attach_to = parent
            if size > 0:
                draft = _ColumnDraft(
                    offset=offset,
                    cells=list(current),
                    weights=[weight * fraction for _, weight in current.entries],
                    parent=parent,
                )
                index = len(self.columns)
                self.columns.append(draft)
                if parent is not None:
                    self.columns[parent].children.append(index)
                if offset == 0:
                    self.weight_sum += draft.weights[0]
                attach_to = index

            subqueues = current.subqueues
            if not subqueues:
                continue
            child_fraction = fraction / len(subqueues)
            for subqueue in reversed(subqueues):
                stack.append((subqueue, offset + size, child_fraction, attach_to))

    def freeze(self) -> tuple[Column, ...]:
        return tuple(
            Column(
                index=index,
                offset=draft.offset,
                cells=tuple(draft.cells),
                weights=tuple(draft.weights),
                parent=draft.parent,
                children=tuple(draft.children),
            )
            for index, draft in enumerate(self.columns)
        )


def build_grid(
    assertions: Iterable[CandidateAssertion],
    focus: Concept,
    *,
    expander: CandidateExpander | None = None,
    existing: Iterable[ConcreteAssertion] = (),
    assertion_removal: bool = False,
) -> AssertionGrid:
    """Expand ``assertions`` about ``focus`` and lay them out as a grid.

    ``existing`` holds assertions already known for the concept. By default
    their isa/genls targets become truths every case starts from; with
    ``assertion_removal`` they are added as ordinary weight-1 columns instead,
    so better supported candidates can out-vote them.
    """

    draft = _GridDraft()
    for assertion in assertions:
        queue = _expand(assertion, focus, expander)
        if queue is None or queue.is_empty():
            continue
        draft.add_queue(queue.pruned(), assertion.weight)

    base_isa: set[Concept] = set()
    base_genls: set[Concept] = set()
    for known in existing:
        if assertion_removal:
            draft.add_queue(AlternativeQueue.single(known), 1.0)
        elif known.relation == ISA:
            base_isa.add(known.target)
        elif known.relation == GENLS:
            base_genls.add(known.target)

    columns = draft.freeze()
    seeds = sorted(
        Seed.at(column.index, row, column.weight_at(row))
        for column in columns
        for row in column.rows()
    )
    grid = AssertionGrid(
        focus=focus,
        columns=columns,
        seeds=tuple(seeds),
        weight_sum=draft.weight_sum,
        base_isa=frozenset(base_isa),
        base_genls=frozenset(base_genls),
    )
    log.debug(
        "Built grid for %s: %d columns, %d cells, weight_sum=%.4g",
        focus,
        grid.width,
        len(seeds),
        grid.weight_sum,
    )
    return grid


def _expand(
    assertion: CandidateAssertion,
    focus: Concept,
    expander: CandidateExpander | None,
) -> AlternativeQueue | None:
    if isinstance(assertion, ConcreteAssertion):
        return AlternativeQueue.single(assertion)
    if expander is None:
        raise ValueError(f"Unresolved assertion {assertion} needs an expander")
    try:
        return expander.expand(assertion, excluded={focus})
    except OntologyError:
        log.warning("Dropping %s: expansion failed", assertion, exc_info=True)
        return None
