from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from conjoint.adapters.files import (
    OntologyFile,
    RequestFile,
    RequestFileError,
    load_ontology_file,
    load_request_file,
)
from conjoint.adapters.files.schema import TermPayload

if TYPE_CHECKING:
    from pathlib import Path


def test_load_request_file(data_dir: Path) -> None:
    payload = load_request_file(data_dir / "request.json")

    assert payload.focus == "Fido"
    assert payload.top_n == 2
    assert isinstance(payload.assertions[0].args[1], TermPayload)
    assert payload.assertions[1].is_concrete
    assert [entry.target for entry in payload.lexicon["pet"]] == ["Dog", "Cat"]


def test_load_ontology_file(data_dir: Path) -> None:
    payload = load_ontology_file(data_dir / "ontology.json")

    assert payload.genls["Dog"] == ["Mammal"]
    assert ("Dog", "Cat") in payload.disjoint
    assert payload.genl_preds == {"owns": ["relatedTo"]}
    assert payload.constraints[0].position == 1


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(RequestFileError) as excinfo:
        load_request_file(tmp_path / "absent.json")

    assert excinfo.value.path == tmp_path / "absent.json"


def test_invalid_json_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "request.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RequestFileError):
        load_request_file(path)


def test_request_file_error_is_a_value_error(tmp_path: Path) -> None:
    path = tmp_path / "request.json"
    path.write_text('{"focus": "Fido", "assertions": [{"relation": "isa", "args": ["Fido"]}]}')

    with pytest.raises(ValueError, match="invalid RequestFile"):
        load_request_file(path)


@pytest.mark.parametrize("weight", [0, 1.5])
def test_assertion_weight_bounds(weight: float) -> None:
    with pytest.raises(ValidationError):
        RequestFile.model_validate(
            {
                "focus": "Fido",
                "assertions": [{"relation": "isa", "args": ["Fido", "Dog"], "weight": weight}],
            }
        )


def test_terms_need_a_lexicon() -> None:
    with pytest.raises(ValidationError):
        RequestFile.model_validate(
            {
                "focus": "Fido",
                "assertions": [{"relation": "isa", "args": ["Fido", {"term": "dog"}]}],
            }
        )


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValidationError):
        OntologyFile.model_validate({"genls": {}, "synonyms": {}})
