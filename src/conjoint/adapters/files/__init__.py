"""JSON file adapter for ontologies and disambiguation requests."""

from __future__ import annotations

from .loader import RequestFileError, load_ontology_file, load_request_file
from .schema import OntologyFile, RequestFile, ResultReport
from .translator import to_mapper, to_ontology, to_report, to_request, to_standing_prior

__all__ = [
    "OntologyFile",
    "RequestFile",
    "RequestFileError",
    "ResultReport",
    "load_ontology_file",
    "load_request_file",
    "to_mapper",
    "to_ontology",
    "to_report",
    "to_request",
    "to_standing_prior",
]
