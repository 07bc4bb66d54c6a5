from __future__ import annotations

import pytest

from conjoint.domain.model import Standing, WeightedStanding


def test_normalized_weights_sum_to_one() -> None:
    standing = WeightedStanding(collection=1.0, individual=3.0)

    assert standing.normalized(Standing.COLLECTION) == pytest.approx(0.25)
    assert standing.normalized(Standing.INDIVIDUAL) == pytest.approx(0.75)
    assert standing.best() == pytest.approx(0.75)


def test_relative_weight_is_scaled_to_the_stronger_standing() -> None:
    standing = WeightedStanding(collection=1.0, individual=3.0)

    assert standing.relative(Standing.INDIVIDUAL) == pytest.approx(1.0)
    assert standing.relative(Standing.COLLECTION) == pytest.approx(1 / 3)


def test_zero_total_is_uniform() -> None:
    standing = WeightedStanding(collection=0.0, individual=0.0)

    assert standing.normalized(Standing.COLLECTION) == 0.5
    assert standing.relative(Standing.INDIVIDUAL) == 1.0


def test_negative_weights_rejected() -> None:
    with pytest.raises(ValueError):
        WeightedStanding(collection=-1.0)
