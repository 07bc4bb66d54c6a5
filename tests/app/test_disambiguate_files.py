from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from conjoint.adapters.files import RequestFileError
from conjoint.adapters.memory import InMemoryOntology
from conjoint.app import disambiguate_files
from conjoint.config import MissingConfigurationError, SearchConfig
from conjoint.domain.model import ISA, Concept, ConcreteAssertion

if TYPE_CHECKING:
    from pathlib import Path

DOG = ConcreteAssertion.of(ISA, Concept("Fido"), Concept("Dog"))


def test_file_backed_run(data_dir: Path) -> None:
    run = disambiguate_files(
        request_path=data_dir / "request.json",
        ontology_path=data_dir / "ontology.json",
        search_config=SearchConfig(),
    )

    assert len(run.result.cases) == 2
    assert run.committed == 0
    assert run.report.cases[0].assertions[0].assertion == str(DOG)


def test_top_n_argument_overrides_request_file(data_dir: Path) -> None:
    run = disambiguate_files(
        request_path=data_dir / "request.json",
        ontology_path=data_dir / "ontology.json",
        top_n=1,
        search_config=SearchConfig(),
    )

    assert len(run.result.cases) == 1


def test_commit_uses_given_ontology(data_dir: Path, animals: InMemoryOntology) -> None:
    run = disambiguate_files(
        request_path=data_dir / "request.json",
        ontology=animals,
        commit=True,
        search_config=SearchConfig(),
    )

    assert run.committed == 2
    assert run.report.committed == 2
    assert DOG in animals.asserted


def test_remote_ontology_needs_configuration(
    data_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("CONJOINT_ONTOLOGY_URL", raising=False)

    with pytest.raises(MissingConfigurationError):
        disambiguate_files(request_path=data_dir / "request.json", search_config=SearchConfig())


def test_missing_request_file(tmp_path: Path, data_dir: Path) -> None:
    with pytest.raises(RequestFileError):
        disambiguate_files(
            request_path=tmp_path / "absent.json",
            ontology_path=data_dir / "ontology.json",
            search_config=SearchConfig(),
        )
