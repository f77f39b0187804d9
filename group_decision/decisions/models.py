from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RestaurantRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.id


class Ballot(BaseModel):
    """One voter's ranked choice, rank 1 first."""

    model_config = ConfigDict(frozen=True)

    voter_id: str = Field(..., min_length=1)
    rankings: list[str] = Field(..., description="Exactly 3 distinct restaurant ids")


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    restaurant_id: str = Field(..., min_length=1)
    selected_at: datetime

    @field_validator("selected_at")
    @classmethod
    def _normalise_selected_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class VoteBreakdown(BaseModel):
    first: int = 0
    second: int = 0
    third: int = 0
    total: int = 0


class RestaurantWeight(BaseModel):
    restaurant_id: str
    current_weight: float
    selection_count: int
    recent_selections: int
    last_selected: datetime | None = None
    days_until_full_weight: int = 0


class TieredInput(BaseModel):
    method: Literal["tiered"] = "tiered"
    restaurants: list[RestaurantRef]
    ballots: list[Ballot] = Field(default_factory=list)


class RandomInput(BaseModel):
    method: Literal["random"] = "random"
    restaurants: list[RestaurantRef]
    history: list[HistoryEntry] = Field(default_factory=list)
    now: datetime | None = None

    @field_validator("now")
    @classmethod
    def _normalise_now(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


DecisionInput = Annotated[TieredInput | RandomInput, Field(discriminator="method")]


class DecisionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    restaurant_id: str
    reasoning: str
    method: Literal["tiered", "random"]
    score_table: dict[str, float]
    tie_count: int = 0
    vote_count: int = 0
    vote_breakdown: dict[str, VoteBreakdown] = Field(default_factory=dict)
