"""
Group decision engine.

Responsibilities:
- Aggregate ranked ballots into per-restaurant point totals (tiered voting).
- Compute history-weighted sampling weights over a rolling window (random selection).
- Resolve the winner, breaking ties with an injected random source.
- Return an immutable decision result with a human-readable justification.
"""
from .errors import DecisionError, EmptyUniverse, InvalidBallot, NoVotesSubmitted
from .models import (
    Ballot,
    DecisionInput,
    DecisionResult,
    HistoryEntry,
    RandomInput,
    RestaurantRef,
    TieredInput,
)
from .orchestrator import decide

__all__ = [
    "Ballot",
    "DecisionError",
    "DecisionInput",
    "DecisionResult",
    "EmptyUniverse",
    "HistoryEntry",
    "InvalidBallot",
    "NoVotesSubmitted",
    "RandomInput",
    "RestaurantRef",
    "TieredInput",
    "decide",
]
