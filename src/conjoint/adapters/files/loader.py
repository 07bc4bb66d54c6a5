"""Read ontology and request files from disk."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from .schema import OntologyFile, RequestFile

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


class RequestFileError(ValueError):
    """Raised when an input file cannot be read or does not validate."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def _load[ModelT: BaseModel](path: Path, model: type[ModelT]) -> ModelT:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RequestFileError(path, f"cannot read file ({exc.strerror or exc})") from exc
    try:
        payload = model.model_validate_json(raw)
    except ValidationError as exc:
        raise RequestFileError(path, f"invalid {model.__name__}: {exc}") from exc
    log.debug("Loaded %s from %s", model.__name__, path)
    return payload


def load_ontology_file(path: Path) -> OntologyFile:
    return _load(path, OntologyFile)


def load_request_file(path: Path) -> RequestFile:
    return _load(path, RequestFile)
