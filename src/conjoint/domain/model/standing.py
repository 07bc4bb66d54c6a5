"""Standing priors for a focus concept."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import Standing


@dataclass(frozen=True, slots=True)
class WeightedStanding:
    """Relative belief that a concept is a collection or an individual."""

    collection: float = 1.0
    individual: float = 1.0

    def __post_init__(self) -> None:
        if self.collection < 0 or self.individual < 0:
            raise ValueError("Standing weights must be non-negative")

    def normalized(self, standing: Standing) -> float:
        total = self.collection + self.individual
        if total == 0:
            return 0.5
        value = self.collection if standing is Standing.COLLECTION else self.individual
        return value / total

    def best(self) -> float:
        return max(self.normalized(Standing.COLLECTION), self.normalized(Standing.INDIVIDUAL))

    def relative(self, standing: Standing) -> float:
        """Weight of ``standing`` relative to the stronger standing, capped at 1."""

        return min(self.normalized(standing) / self.best(), 1.0)
