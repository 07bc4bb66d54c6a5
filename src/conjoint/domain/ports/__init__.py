"""Domain port definitions for adapters."""

from __future__ import annotations

from .mapping import ConceptMapper, MappedCandidate
from .ontology import ArgumentConstraints, OntologyError, OntologyPort
from .standing import StandingPrior

__all__ = [
    "ArgumentConstraints",
    "ConceptMapper",
    "MappedCandidate",
    "OntologyError",
    "OntologyPort",
    "StandingPrior",
]
