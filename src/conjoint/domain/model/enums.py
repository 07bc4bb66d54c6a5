"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Standing(StrEnum):
    """Whether the focus concept is read as a type or as an instance."""

    COLLECTION = "collection"
    INDIVIDUAL = "individual"
