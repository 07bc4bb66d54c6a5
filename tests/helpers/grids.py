"""Builders for hand-made assertion grids and assertions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from conjoint.domain.disambiguation import AssertionGrid, Column, Seed
from conjoint.domain.model import ISA, Concept, ConcreteAssertion

if TYPE_CHECKING:
    from collections.abc import Sequence

FIDO = Concept("Fido")

type Rows = Sequence[tuple[ConcreteAssertion, float]]


def isa(target: str, *, subject: Concept = FIDO, weight: float = 1.0) -> ConcreteAssertion:
    return ConcreteAssertion.of(ISA, subject, Concept(target), weight=weight)


def flat_grid(*columns: Rows, focus: Concept = FIDO) -> AssertionGrid:
    """Grid of top-level columns, one per ``columns`` entry."""

    built = tuple(
        Column(
            index=index,
            offset=0,
            cells=tuple(assertion for assertion, _ in rows),
            weights=tuple(weight for _, weight in rows),
        )
        for index, rows in enumerate(columns)
    )
    seeds = sorted(
        Seed.at(column.index, row, column.weight_at(row))
        for column in built
        for row in column.rows()
    )
    return AssertionGrid(
        focus=focus,
        columns=built,
        seeds=tuple(seeds),
        weight_sum=sum(column.weights[0] for column in built),
    )
