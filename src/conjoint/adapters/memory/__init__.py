"""In-memory collaborators for tests, fixtures and file-backed runs."""

from __future__ import annotations

from .mapper import LexiconMapper
from .ontology import InMemoryOntology
from .standing import StaticStandingPrior

__all__ = ["InMemoryOntology", "LexiconMapper", "StaticStandingPrior"]
