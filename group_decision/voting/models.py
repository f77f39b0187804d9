from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..decisions.models import RestaurantRef, RestaurantWeight


class VoteRequest(BaseModel):
    voter_id: str = Field(..., min_length=1)
    rankings: list[str] = Field(
        ..., description="Restaurant ids in order of preference, first choice first",
    )


class VoteResponse(BaseModel):
    status: str
    total_votes: int


class VoteStatus(BaseModel):
    decision_id: str
    total_votes: int
    voters: list[str]


class CompleteDecisionRequest(BaseModel):
    collection_id: str = Field(..., min_length=1)
    restaurants: list[RestaurantRef]


class RandomDecisionRequest(BaseModel):
    collection_id: str = Field(..., min_length=1)
    restaurants: list[RestaurantRef]
    now: datetime | None = Field(
        default=None, description="Evaluation time for the rolling window; defaults to now",
    )


class WeightsRequest(BaseModel):
    restaurants: list[RestaurantRef]


class WeightsResponse(BaseModel):
    collection_id: str
    weights: list[RestaurantWeight]
    total_decisions: int


class ResetResponse(BaseModel):
    status: str
    message: str
    deleted_decisions: int
