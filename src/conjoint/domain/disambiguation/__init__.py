"""Disambiguation of competing candidate assertions about one concept.

Layered flow:
1) expand candidate assertions into alternative queues (``expand``)
2) flatten the queues into an assertion grid (``grid``)
3) best-first search for consistent, maximal-weight cases (``search``)

``engine`` wires the stages together for one request.
"""

from __future__ import annotations

from .case import CasePhase, ColumnStatus, DisjointCase, SearchContext
from .engine import DisambiguationEngine, DisambiguationRequest, DisambiguationResult
from .expand import CandidateExpander
from .grid import AssertionGrid, Column, GridIndexError, Seed, build_grid
from .oracle import DisjointnessOracle
from .queue import AlternativeQueue
from .results import AcceptedAssertion, DisambiguatedCase
from .search import CaseSearchEngine, SearchStats

__all__ = [
    "AcceptedAssertion",
    "AlternativeQueue",
    "AssertionGrid",
    "CandidateExpander",
    "CaseSearchEngine",
    "CasePhase",
    "Column",
    "ColumnStatus",
    "DisambiguatedCase",
    "DisambiguationEngine",
    "DisambiguationRequest",
    "DisambiguationResult",
    "DisjointCase",
    "DisjointnessOracle",
    "GridIndexError",
    "SearchContext",
    "SearchStats",
    "Seed",
    "build_grid",
]
