"""Translate validated file payloads into domain objects and back."""

from __future__ import annotations

from typing import TYPE_CHECKING

from conjoint.adapters.memory import InMemoryOntology, LexiconMapper, StaticStandingPrior
from conjoint.domain.disambiguation import DisambiguationRequest
from conjoint.domain.model import (
    Concept,
    ConcreteAssertion,
    Term,
    UnresolvedAssertion,
    WeightedStanding,
)

from .schema import AcceptedReport, CaseReport, ResultReport, TermPayload

if TYPE_CHECKING:
    from conjoint.domain.disambiguation import DisambiguationResult
    from conjoint.domain.model import Argument, CandidateAssertion

    from .schema import (
        ArgumentPayload,
        AssertionPayload,
        ExistingPayload,
        OntologyFile,
        RequestFile,
    )


def to_argument(payload: ArgumentPayload) -> Argument:
    if isinstance(payload, TermPayload):
        return Term(payload.term, hint=payload.hint)
    return Concept(payload)


def to_candidate(payload: AssertionPayload) -> CandidateAssertion:
    relation = to_argument(payload.relation)
    args = tuple(to_argument(arg) for arg in payload.args)
    if isinstance(relation, Concept) and all(isinstance(arg, Concept) for arg in args):
        return ConcreteAssertion(
            relation,
            args,  # type: ignore[arg-type]
            weight=payload.weight,
            origin=payload.origin,
        )
    return UnresolvedAssertion(relation, args, weight=payload.weight, origin=payload.origin)


def to_existing(payload: ExistingPayload) -> ConcreteAssertion:
    return ConcreteAssertion(
        Concept(payload.relation),
        tuple(Concept(arg) for arg in payload.args),
        origin="existing",
    )


def to_ontology(payload: OntologyFile) -> InMemoryOntology:
    ontology = InMemoryOntology()
    for specific, general in payload.genls.items():
        ontology.add_genls(Concept(specific), *(Concept(name) for name in general))
    for instance, collections in payload.isa.items():
        ontology.add_isa(Concept(instance), *(Concept(name) for name in collections))
    for relation, general in payload.genl_preds.items():
        ontology.add_genl_preds(Concept(relation), *(Concept(name) for name in general))
    for first, second in payload.disjoint:
        ontology.add_disjoint(Concept(first), Concept(second))
    for constraint in payload.constraints:
        ontology.add_constraints(
            Concept(constraint.relation),
            constraint.position,
            isa=(Concept(name) for name in constraint.isa),
            genls=(Concept(name) for name in constraint.genls),
        )
    ontology.add_informationless(*(Concept(name) for name in payload.informationless))
    return ontology


def to_request(payload: RequestFile) -> DisambiguationRequest:
    return DisambiguationRequest(
        focus=Concept(payload.focus),
        assertions=tuple(to_candidate(entry) for entry in payload.assertions),
        existing=tuple(to_existing(entry) for entry in payload.existing),
        assertion_removal=payload.assertion_removal,
        top_n=payload.top_n,
    )


def to_mapper(payload: RequestFile) -> LexiconMapper | None:
    if not payload.lexicon:
        return None
    mapper = LexiconMapper()
    for text, mappings in payload.lexicon.items():
        mapper.extend(text, ((to_argument(entry.target), entry.weight) for entry in mappings))
    return mapper


def to_standing_prior(payload: RequestFile) -> StaticStandingPrior:
    standing = WeightedStanding(
        collection=payload.standing.collection,
        individual=payload.standing.individual,
    )
    return StaticStandingPrior(default=standing)


def to_report(result: DisambiguationResult, *, committed: int = 0) -> ResultReport:
    return ResultReport(
        focus=str(result.focus),
        committed=committed,
        cases=[
            CaseReport(
                rank=case.rank,
                standing=str(case.standing),
                weight=case.weight,
                assertions=[
                    AcceptedReport(
                        assertion=str(entry.assertion),
                        weight=entry.weight,
                        synthesized=entry.synthesized,
                    )
                    for entry in case.accepted
                ],
            )
            for case in result.cases
        ],
    )
