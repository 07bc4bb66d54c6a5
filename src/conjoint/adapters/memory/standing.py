"""Standing prior backed by a fixed table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from conjoint.domain.model import WeightedStanding

if TYPE_CHECKING:
    from conjoint.domain.model import Concept


@dataclass(slots=True)
class StaticStandingPrior:
    default: WeightedStanding = field(default_factory=WeightedStanding)
    overrides: dict[Concept, WeightedStanding] = field(
        default_factory=dict["Concept", "WeightedStanding"]
    )

    def __call__(self, concept: Concept) -> WeightedStanding:
        return self.overrides.get(concept, self.default)
