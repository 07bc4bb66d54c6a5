from __future__ import annotations

import pytest

from conjoint.domain.disambiguation import AlternativeQueue
from tests.helpers.grids import isa


def test_alternatives_are_ordered_by_weight_then_insertion() -> None:
    queue = AlternativeQueue()
    queue.add(isa("Dog"), 0.5)
    queue.add(isa("Cat"), 0.9)
    queue.add(isa("Cow"), 0.5)

    assert list(queue) == [isa("Cat"), isa("Dog"), isa("Cow")]
    assert len(queue) == 3


def test_repeated_alternative_keeps_best_weight() -> None:
    queue = AlternativeQueue()
    queue.add(isa("Dog"), 0.3)
    queue.add(isa("Cat"), 0.5)
    queue.add(isa("Dog"), 0.8)
    queue.add(isa("Dog"), 0.1)

    assert queue.weight_of(isa("Dog")) == 0.8
    assert queue.entries[0] == (isa("Dog"), 0.8)
    assert len(queue) == 2


def test_weight_of_unknown_alternative() -> None:
    with pytest.raises(KeyError):
        AlternativeQueue.single(isa("Dog")).weight_of(isa("Cat"))


def test_non_positive_weight_rejected() -> None:
    with pytest.raises(ValueError):
        AlternativeQueue().add(isa("Dog"), 0.0)


def test_queue_with_only_empty_subqueues_is_empty() -> None:
    queue = AlternativeQueue()
    nested = AlternativeQueue()
    nested.add_subqueue(AlternativeQueue())
    queue.add_subqueue(nested)

    assert queue.is_empty()
    assert queue.pruned().subqueues == ()


def test_pruned_keeps_non_empty_branches() -> None:
    queue = AlternativeQueue.single(isa("Dog"), 0.6)
    queue.add_subqueue(AlternativeQueue())
    queue.add_subqueue(AlternativeQueue.single(isa("Beagle"), 0.2))

    pruned = queue.pruned()

    assert len(pruned.subqueues) == 1
    assert isa("Beagle") in pruned.subqueues[0]
    assert len(queue.subqueues) == 2
