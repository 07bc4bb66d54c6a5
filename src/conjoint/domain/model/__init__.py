"""Domain model for concept disambiguation."""

from __future__ import annotations

from .assertions import Argument, CandidateAssertion, ConcreteAssertion, UnresolvedAssertion
from .concepts import (
    COLLECTION,
    FIRST_ORDER_COLLECTION,
    GENLS,
    HIERARCHICAL_RELATIONS,
    INDIVIDUAL,
    ISA,
    ISA_GENLS,
    THING,
    Concept,
    Term,
)
from .enums import Standing
from .standing import WeightedStanding

__all__ = [
    "COLLECTION",
    "FIRST_ORDER_COLLECTION",
    "GENLS",
    "HIERARCHICAL_RELATIONS",
    "INDIVIDUAL",
    "ISA",
    "ISA_GENLS",
    "THING",
    "Argument",
    "CandidateAssertion",
    "Concept",
    "ConcreteAssertion",
    "Standing",
    "Term",
    "UnresolvedAssertion",
    "WeightedStanding",
]
