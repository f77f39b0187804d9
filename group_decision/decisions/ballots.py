from __future__ import annotations

from collections.abc import Collection, Iterable

from .errors import InvalidBallot
from .models import Ballot, VoteBreakdown

BALLOT_SIZE = 3

# rank index -> points (1st choice = 3, 2nd = 2, 3rd = 1)
RANK_POINTS: tuple[int, ...] = (3, 2, 1)


def check_ballot_shape(ballot: Ballot) -> None:
    """Raise ``InvalidBallot`` unless *ballot* ranks exactly three distinct restaurants."""
    if len(ballot.rankings) != BALLOT_SIZE:
        raise InvalidBallot(
            f"Ballot from {ballot.voter_id} must rank exactly {BALLOT_SIZE} restaurants, "
            f"got {len(ballot.rankings)}"
        )
    if len(set(ballot.rankings)) != BALLOT_SIZE:
        raise InvalidBallot(f"Ballot from {ballot.voter_id} ranks the same restaurant twice")


def validate_ballots(ballots: Iterable[Ballot], universe: Collection[str]) -> list[Ballot]:
    """Check every ballot against *universe*; raise ``InvalidBallot`` on the first bad one."""
    allowed = set(universe)
    seen_voters: set[str] = set()
    checked: list[Ballot] = []

    for ballot in ballots:
        if ballot.voter_id in seen_voters:
            raise InvalidBallot(f"Voter {ballot.voter_id} submitted more than one ballot")
        seen_voters.add(ballot.voter_id)

        check_ballot_shape(ballot)
        for rid in ballot.rankings:
            if rid not in allowed:
                raise InvalidBallot(
                    f"Ballot from {ballot.voter_id} ranks {rid}, which is not in this collection"
                )
        checked.append(ballot)

    return checked


def aggregate(ballots: Iterable[Ballot], universe: Collection[str]) -> dict[str, float]:
    """Return total points per restaurant.

    Every member of *universe* appears in the result; restaurants nobody
    ranked score 0.  Zero ballots is valid and yields an all-zero table.
    """
    checked = validate_ballots(ballots, universe)
    scores: dict[str, float] = {rid: 0.0 for rid in universe}
    for ballot in checked:
        for rid, points in zip(ballot.rankings, RANK_POINTS):
            scores[rid] += points
    return scores


def vote_breakdown(ballots: Iterable[Ballot], universe: Collection[str]) -> dict[str, VoteBreakdown]:
    """Count first/second/third placements and points per restaurant."""
    checked = validate_ballots(ballots, universe)
    counts = {rid: [0, 0, 0] for rid in universe}
    for ballot in checked:
        for rank, rid in enumerate(ballot.rankings):
            counts[rid][rank] += 1

    return {
        rid: VoteBreakdown(
            first=c[0],
            second=c[1],
            third=c[2],
            total=sum(n * p for n, p in zip(c, RANK_POINTS)),
        )
        for rid, c in counts.items()
    }
