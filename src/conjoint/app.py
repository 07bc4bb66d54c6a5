"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from conjoint.adapters.files import (
    load_ontology_file,
    load_request_file,
    to_mapper,
    to_ontology,
    to_report,
    to_request,
    to_standing_prior,
)
from conjoint.adapters.remote import RemoteOntology
from conjoint.config import get_remote_ontology_config, get_search_config
from conjoint.domain.disambiguation import DisambiguationEngine

if TYPE_CHECKING:
    from pathlib import Path

    from conjoint.adapters.files import RequestFile, ResultReport
    from conjoint.config import SearchConfig
    from conjoint.domain.disambiguation import DisambiguationResult
    from conjoint.domain.ports import OntologyPort

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DisambiguationRun:
    result: DisambiguationResult
    report: ResultReport
    committed: int = 0


def disambiguate_files(
    *,
    request_path: Path,
    ontology_path: Path | None = None,
    ontology: OntologyPort | None = None,
    top_n: int | None = None,
    commit: bool = False,
    search_config: SearchConfig | None = None,
) -> DisambiguationRun:
    """Disambiguate the request stored at ``request_path``.

    The ontology is taken from ``ontology`` when given, else loaded from
    ``ontology_path``, else reached over HTTP using the environment
    configuration. ``top_n`` overrides the request file, which overrides
    the search configuration.
    """

    config = search_config or get_search_config()
    payload = load_request_file(request_path)
    if ontology is not None:
        return _run(payload, ontology, config, top_n=top_n, commit=commit)
    if ontology_path is not None:
        loaded = to_ontology(load_ontology_file(ontology_path))
        return _run(payload, loaded, config, top_n=top_n, commit=commit)

    remote_config = get_remote_ontology_config()
    log.info("Using remote ontology at %s", remote_config.base_url)
    with RemoteOntology(config=remote_config) as remote:
        return _run(payload, remote, config, top_n=top_n, commit=commit)


def _run(
    payload: RequestFile,
    ontology: OntologyPort,
    config: SearchConfig,
    *,
    top_n: int | None,
    commit: bool,
) -> DisambiguationRun:
    engine = DisambiguationEngine(
        ontology=ontology,
        standing_prior=to_standing_prior(payload),
        mapper=to_mapper(payload),
        top_n=config.top_n,
        max_expansion_depth=config.max_expansion_depth,
        collection_bias=config.collection_bias,
    )
    request = to_request(payload)
    if top_n is not None:
        request = replace(request, top_n=top_n)

    log.info(
        "Disambiguating %s: %d candidate assertion(s), %d existing",
        request.focus,
        len(request.assertions),
        len(request.existing),
    )
    result = engine.disambiguate(request)

    committed = 0
    if commit:
        best = result.best
        if best is None:
            log.warning("Nothing to commit for %s", request.focus)
        else:
            committed = engine.commit(best)

    return DisambiguationRun(
        result=result,
        report=to_report(result, committed=committed),
        committed=committed,
    )

