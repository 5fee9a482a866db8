"""Validation schema for FreeCell table configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field, validator

from .cards import Suit

SUIT_NAMES = tuple(suit.value for suit in Suit)


def _validate_suit(value: str) -> str:
    normalized = value.lower()
    if normalized not in SUIT_NAMES:
        raise ValueError(f"Unknown suit: {value!r}")
    return normalized


class RuleSet(BaseModel):
    tableau_columns: int = Field(8, ge=1, description="Number of tableau columns cards are dealt into.")
    free_cells: int = Field(4, ge=0, description="Number of single-card free cells.")
    drag_capacity_base: int = Field(
        5,
        ge=1,
        description="Run length movable with every free cell empty; each occupied cell lowers it by one.",
    )
    foundation_order: List[str] = Field(
        default_factory=lambda: list(SUIT_NAMES),
        description="Suit of each foundation, left to right.",
    )
    dedicated_foundations: bool = Field(
        False,
        description="Restrict each foundation to its suit from foundation_order instead of any ace.",
    )

    @validator("foundation_order")
    def validate_foundation_order(cls, value: List[str]) -> List[str]:
        normalized = [_validate_suit(suit) for suit in value]
        if sorted(normalized) != sorted(SUIT_NAMES):
            raise ValueError("Foundation order must name each suit exactly once.")
        return normalized

    def foundation_suits(self) -> List[Suit]:
        return [Suit(name) for name in self.foundation_order]


DEFAULT_RULES = RuleSet()


def load_rules(path: Union[str, Path]) -> RuleSet:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Rules file {path} must contain a JSON object.")
    return RuleSet(**payload)
