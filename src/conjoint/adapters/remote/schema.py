"""Pydantic models for the remote ontology service payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OntologyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BooleanAnswer(OntologyBaseModel):
    result: bool


class ConstraintsAnswer(OntologyBaseModel):
    isa: list[str] = Field(default_factory=list[str])
    genls: list[str] = Field(default_factory=list[str])


class AssertionBody(OntologyBaseModel):
    relation: str
    args: list[str]
    origin: str | None = None
