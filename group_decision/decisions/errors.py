from __future__ import annotations


class DecisionError(Exception):
    """Base class for caller-input errors raised by the decision engine."""

    code = "decision_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidBallot(DecisionError):
    code = "invalid_ballot"


class NoVotesSubmitted(DecisionError):
    code = "no_votes_submitted"

    def __init__(self, message: str = "At least one vote is required to complete this decision") -> None:
        super().__init__(message)


class EmptyUniverse(DecisionError):
    code = "empty_universe"

    def __init__(self, message: str = "There are no restaurants in this collection to choose from") -> None:
        super().__init__(message)
