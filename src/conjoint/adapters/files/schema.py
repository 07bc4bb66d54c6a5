"""Pydantic models describing the ontology and request JSON files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

type ConceptName = str


def _strip(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


class FileBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class TermPayload(FileBaseModel):
    term: str = Field(min_length=1)
    hint: str | None = None


type ArgumentPayload = ConceptName | TermPayload


class ConstraintPayload(FileBaseModel):
    relation: ConceptName
    position: int = Field(ge=1)
    isa: list[ConceptName] = Field(default_factory=list[ConceptName])
    genls: list[ConceptName] = Field(default_factory=list[ConceptName])


class OntologyFile(FileBaseModel):
    genls: dict[ConceptName, list[ConceptName]] = Field(
        default_factory=dict[ConceptName, list[ConceptName]]
    )
    isa: dict[ConceptName, list[ConceptName]] = Field(
        default_factory=dict[ConceptName, list[ConceptName]]
    )
    genl_preds: dict[ConceptName, list[ConceptName]] = Field(
        default_factory=dict[ConceptName, list[ConceptName]], alias="genlPreds"
    )
    disjoint: list[tuple[ConceptName, ConceptName]] = Field(
        default_factory=list[tuple[ConceptName, ConceptName]]
    )
    constraints: list[ConstraintPayload] = Field(default_factory=list[ConstraintPayload])
    informationless: list[ConceptName] = Field(default_factory=list[ConceptName])


class AssertionPayload(FileBaseModel):
    relation: ArgumentPayload
    args: list[ArgumentPayload] = Field(min_length=2)
    weight: float = Field(default=1.0, gt=0, le=1)
    origin: str | None = None

    _strip_relation = field_validator("relation", mode="before")(_strip)

    @property
    def is_concrete(self) -> bool:
        return isinstance(self.relation, str) and all(isinstance(arg, str) for arg in self.args)


class ExistingPayload(FileBaseModel):
    relation: ConceptName
    args: list[ConceptName] = Field(min_length=2)


class MappingPayload(FileBaseModel):
    target: ArgumentPayload
    weight: float = Field(default=1.0, gt=0, le=1)


class StandingPayload(FileBaseModel):
    collection: float = Field(default=1.0, ge=0)
    individual: float = Field(default=1.0, ge=0)


class RequestFile(FileBaseModel):
    focus: ConceptName = Field(min_length=1)
    assertions: list[AssertionPayload] = Field(default_factory=list[AssertionPayload])
    existing: list[ExistingPayload] = Field(default_factory=list[ExistingPayload])
    assertion_removal: bool = Field(default=False, alias="assertionRemoval")
    top_n: int | None = Field(default=None, ge=1, alias="topN")
    standing: StandingPayload = Field(default_factory=StandingPayload)
    lexicon: dict[str, list[MappingPayload]] = Field(
        default_factory=dict[str, list[MappingPayload]]
    )

    _strip_focus = field_validator("focus", mode="before")(_strip)

    @model_validator(mode="after")
    def _terms_need_lexicon(self) -> RequestFile:
        if not self.lexicon and any(not entry.is_concrete for entry in self.assertions):
            raise ValueError("assertions contain terms but no lexicon was given")
        return self


class AcceptedReport(BaseModel):
    assertion: str
    weight: float
    synthesized: bool


class CaseReport(BaseModel):
    rank: int
    standing: str
    weight: float
    assertions: list[AcceptedReport]


class ResultReport(BaseModel):
    focus: str
    cases: list[CaseReport]
    committed: int = 0
