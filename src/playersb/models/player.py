"""Canonical player model shared across ingestion, merge and scoring."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field, NonNegativeFloat, NonNegativeInt
from pydantic.config import ConfigDict

DEFAULT_POSITION = "N/A"
DEFAULT_TEAM = "Unknown"

COUNTER_FIELDS = ("minutes", "goals", "assists", "shots", "shots_on_target")

Counter = Union[NonNegativeInt, NonNegativeFloat]


class PlayerRecord(BaseModel):
    """Normalized player payload persisted in the players snapshot."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    position: str = DEFAULT_POSITION
    team: str = DEFAULT_TEAM
    minutes: Counter = 0
    goals: Counter = 0
    assists: Counter = 0
    shots: Counter = 0
    shots_on_target: Counter = Field(default=0, alias="shotsOnTarget")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def positions(self) -> list[str]:
        return [part.strip() for part in self.position.split("/") if part.strip()]

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)
