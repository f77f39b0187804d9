from __future__ import annotations

import logging
from datetime import datetime, timezone

import numpy as np
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_decision
from .decisions import (
    Ballot,
    DecisionError,
    DecisionResult,
    HistoryEntry,
    RandomInput,
    TieredInput,
    decide,
)
from .decisions.ballots import check_ballot_shape
from .decisions.config import DEFAULT_DECISION_CONFIG
from .decisions.weights import selection_stats
from .voting.ballot_box import (
    discard_ballots,
    get_ballots,
    get_voters,
    is_completed,
    mark_completed,
    submit_ballot,
)
from .voting.history import get_history, record_outcome, reset_history
from .voting.models import (
    CompleteDecisionRequest,
    RandomDecisionRequest,
    ResetResponse,
    VoteRequest,
    VoteResponse,
    VoteStatus,
    WeightsRequest,
    WeightsResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Group Decision API", version="1.0.0")

_rng = np.random.default_rng(DEFAULT_DECISION_CONFIG.random_seed)


def get_rng() -> np.random.Generator:
    """Random source for tie-breaks and weighted draws (overridable in tests)."""
    return _rng


def _ensure_open(decision_id: str) -> None:
    if is_completed(decision_id):
        raise HTTPException(status_code=409, detail=f"Decision {decision_id} is already completed")


@app.exception_handler(DecisionError)
async def decision_error_handler(request: Request, exc: DecisionError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.code, "detail": exc.message})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Tiered voting ────────────────────────────────────────────────────────


@app.post("/decisions/{decision_id}/votes", response_model=VoteResponse)
def submit_vote(decision_id: str, body: VoteRequest) -> VoteResponse:
    _ensure_open(decision_id)
    ballot = Ballot(voter_id=body.voter_id, rankings=body.rankings)
    check_ballot_shape(ballot)
    total = submit_ballot(decision_id, ballot)
    return VoteResponse(status="recorded", total_votes=total)


@app.get("/decisions/{decision_id}/votes", response_model=VoteStatus)
def vote_status(decision_id: str) -> VoteStatus:
    voters = get_voters(decision_id)
    return VoteStatus(decision_id=decision_id, total_votes=len(voters), voters=voters)


@app.post("/decisions/{decision_id}/complete", response_model=DecisionResult)
def complete_decision(
    decision_id: str,
    body: CompleteDecisionRequest,
    rng: np.random.Generator = Depends(get_rng),
) -> DecisionResult:
    _ensure_open(decision_id)
    if len(body.restaurants) < 3:
        raise HTTPException(
            status_code=409,
            detail="A tiered decision needs a collection with at least 3 restaurants",
        )

    # Ballots are frozen from here on
    ballots = get_ballots(decision_id)
    result = decide(TieredInput(restaurants=body.restaurants, ballots=ballots), rng)

    record_outcome(
        body.collection_id,
        HistoryEntry(restaurant_id=result.restaurant_id, selected_at=datetime.now(timezone.utc)),
    )
    mark_completed(decision_id)
    discard_ballots(decision_id)
    record_decision(body.collection_id, result)
    logger.info("Decision %s completed for collection %s", decision_id, body.collection_id)
    return result


# ── Random selection ─────────────────────────────────────────────────────


@app.post("/decisions/random", response_model=DecisionResult)
def random_decision(
    body: RandomDecisionRequest,
    rng: np.random.Generator = Depends(get_rng),
) -> DecisionResult:
    now = body.now or datetime.now(timezone.utc)
    result = decide(
        RandomInput(
            restaurants=body.restaurants,
            history=get_history(body.collection_id),
            now=now,
        ),
        rng,
    )
    record_outcome(
        body.collection_id,
        HistoryEntry(restaurant_id=result.restaurant_id, selected_at=now),
    )
    record_decision(body.collection_id, result)
    return result


# ── Weights ──────────────────────────────────────────────────────────────


@app.post("/collections/{collection_id}/weights", response_model=WeightsResponse)
def collection_weights(collection_id: str, body: WeightsRequest) -> WeightsResponse:
    history = get_history(collection_id)
    cfg = DEFAULT_DECISION_CONFIG
    stats = selection_stats(
        [r.id for r in body.restaurants],
        history,
        datetime.now(timezone.utc),
        window_days=cfg.window_days,
        decay_per_recent_selection=cfg.decay_per_recent_selection,
        floor=cfg.floor,
    )
    return WeightsResponse(collection_id=collection_id, weights=stats, total_decisions=len(history))


@app.delete("/collections/{collection_id}/history", response_model=ResetResponse)
def reset_weights(collection_id: str, restaurant_id: str | None = None) -> ResetResponse:
    deleted = reset_history(collection_id, restaurant_id)
    message = (
        "Restaurant weight reset successfully" if restaurant_id
        else "All weights reset successfully"
    )
    return ResetResponse(status="ok", message=message, deleted_decisions=deleted)


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
