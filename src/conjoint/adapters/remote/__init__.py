"""HTTP adapter for an ontology service."""

from __future__ import annotations

from .client import RemoteOntology, RemoteOntologyError

__all__ = ["RemoteOntology", "RemoteOntologyError"]
