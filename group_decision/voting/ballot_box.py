from __future__ import annotations

from ..decisions.models import Ballot

# decision_id -> voter_id -> Ballot
_ballots: dict[str, dict[str, Ballot]] = {}
_completed: set[str] = set()


def submit_ballot(decision_id: str, ballot: Ballot) -> int:
    """Store *ballot*, replacing any earlier one from the same voter.

    Returns the number of distinct voters for the decision.
    """
    votes = _ballots.setdefault(decision_id, {})
    # Re-insert so a replaced ballot moves to the end, keeping submission order
    votes.pop(ballot.voter_id, None)
    votes[ballot.voter_id] = ballot
    return len(votes)


def get_ballots(decision_id: str) -> list[Ballot]:
    return list(_ballots.get(decision_id, {}).values())


def get_voters(decision_id: str) -> list[str]:
    return list(_ballots.get(decision_id, {}))


def mark_completed(decision_id: str) -> None:
    """Close voting for *decision_id*; its ballots can no longer change."""
    _completed.add(decision_id)


def is_completed(decision_id: str) -> bool:
    return decision_id in _completed


def discard_ballots(decision_id: str) -> None:
    _ballots.pop(decision_id, None)


def clear_ballots() -> None:
    _ballots.clear()
    _completed.clear()
