from __future__ import annotations

from datetime import datetime, timezone

from group_decision.decisions.models import Ballot, HistoryEntry
from group_decision.voting.ballot_box import (
    clear_ballots,
    discard_ballots,
    get_ballots,
    get_voters,
    is_completed,
    mark_completed,
    submit_ballot,
)
from group_decision.voting.history import (
    clear_history,
    get_history,
    record_outcome,
    reset_history,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


# ── Ballot box ───────────────────────────────────────────────────────────


def test_revote_replaces_previous_ballot():
    clear_ballots()
    submit_ballot("d1", Ballot(voter_id="u1", rankings=["a", "b", "c"]))
    total = submit_ballot("d1", Ballot(voter_id="u1", rankings=["c", "b", "a"]))
    assert total == 1
    ballots = get_ballots("d1")
    assert len(ballots) == 1
    assert ballots[0].rankings == ["c", "b", "a"]


def test_ballots_are_scoped_per_decision():
    clear_ballots()
    submit_ballot("d1", Ballot(voter_id="u1", rankings=["a", "b", "c"]))
    submit_ballot("d2", Ballot(voter_id="u1", rankings=["a", "b", "c"]))
    submit_ballot("d2", Ballot(voter_id="u2", rankings=["b", "c", "a"]))
    assert get_voters("d1") == ["u1"]
    assert get_voters("d2") == ["u1", "u2"]


def test_discard_removes_only_that_decision():
    clear_ballots()
    submit_ballot("d1", Ballot(voter_id="u1", rankings=["a", "b", "c"]))
    submit_ballot("d2", Ballot(voter_id="u1", rankings=["a", "b", "c"]))
    discard_ballots("d1")
    assert get_ballots("d1") == []
    assert len(get_ballots("d2")) == 1


# ── History ──────────────────────────────────────────────────────────────


def test_history_is_append_only_per_collection():
    clear_history()
    record_outcome("c1", HistoryEntry(restaurant_id="a", selected_at=NOW))
    record_outcome("c1", HistoryEntry(restaurant_id="b", selected_at=NOW))
    record_outcome("c2", HistoryEntry(restaurant_id="a", selected_at=NOW))
    assert [e.restaurant_id for e in get_history("c1")] == ["a", "b"]
    assert len(get_history("c2")) == 1
    assert get_history("unknown") == []


def test_get_history_returns_a_copy():
    clear_history()
    record_outcome("c1", HistoryEntry(restaurant_id="a", selected_at=NOW))
    get_history("c1").clear()
    assert len(get_history("c1")) == 1


def test_reset_single_restaurant():
    clear_history()
    for rid in ("a", "b", "a"):
        record_outcome("c1", HistoryEntry(restaurant_id=rid, selected_at=NOW))
    assert reset_history("c1", "a") == 2
    assert [e.restaurant_id for e in get_history("c1")] == ["b"]


def test_reset_whole_collection():
    clear_history()
    for rid in ("a", "b"):
        record_outcome("c1", HistoryEntry(restaurant_id=rid, selected_at=NOW))
    record_outcome("c2", HistoryEntry(restaurant_id="a", selected_at=NOW))
    assert reset_history("c1") == 2
    assert get_history("c1") == []
    assert len(get_history("c2")) == 1


# ── Completion ───────────────────────────────────────────────────────────


def test_mark_completed_is_per_decision():
    clear_ballots()
    mark_completed("d1")
    assert is_completed("d1")
    assert not is_completed("d2")


def test_clear_ballots_reopens_decisions():
    clear_ballots()
    mark_completed("d1")
    clear_ballots()
    assert not is_completed("d1")
