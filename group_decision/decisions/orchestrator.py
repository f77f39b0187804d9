from __future__ import annotations

import logging
from datetime import datetime, timezone

import numpy as np

from .ballots import aggregate, vote_breakdown
from .config import DEFAULT_DECISION_CONFIG, DecisionConfig
from .errors import EmptyUniverse, NoVotesSubmitted
from .models import DecisionResult, RandomInput, RestaurantRef, TieredInput
from .tie_resolver import ResolveMode, resolve
from .weights import compute_weights, recent_selection_counts

logger = logging.getLogger(__name__)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _format_points(points: float) -> str:
    return str(int(points)) if float(points).is_integer() else f"{points:g}"


def _names(restaurants: list[RestaurantRef]) -> dict[str, str]:
    return {r.id: r.display_name for r in restaurants}


def decide_tiered(decision: TieredInput, rng: np.random.Generator) -> DecisionResult:
    if not decision.ballots:
        logger.warning("Tiered decision requested with no ballots")
        raise NoVotesSubmitted()

    names = _names(decision.restaurants)
    universe = list(names)
    scores = aggregate(decision.ballots, universe)
    breakdown = vote_breakdown(decision.ballots, universe)
    resolution = resolve(scores, ResolveMode.MAX_SCORE, rng)

    winner_name = names[resolution.winner]
    points = _format_points(scores[resolution.winner])
    votes = _plural(len(decision.ballots), "vote")
    if resolution.tie_count:
        reasoning = (
            f"{winner_name} was selected randomly after a tie between "
            f"{resolution.tie_count} restaurants with {points} points each ({votes} total)"
        )
    else:
        reasoning = f"{winner_name} is the clear winner with {points} points ({votes} total)"

    logger.info(
        "Tiered decision resolved: winner=%s points=%s ballots=%d tie=%d",
        resolution.winner, points, len(decision.ballots), resolution.tie_count,
    )
    return DecisionResult(
        restaurant_id=resolution.winner,
        reasoning=reasoning,
        method="tiered",
        score_table=scores,
        tie_count=resolution.tie_count,
        vote_count=len(decision.ballots),
        vote_breakdown=breakdown,
    )


def decide_random(
    decision: RandomInput,
    rng: np.random.Generator,
    config: DecisionConfig = DEFAULT_DECISION_CONFIG,
) -> DecisionResult:
    if not decision.restaurants:
        logger.warning("Random decision requested for an empty collection")
        raise EmptyUniverse()

    now = decision.now or datetime.now(timezone.utc)
    names = _names(decision.restaurants)
    weights = compute_weights(
        list(names),
        decision.history,
        now,
        window_days=config.window_days,
        decay_per_recent_selection=config.decay_per_recent_selection,
        floor=config.floor,
    )
    logger.debug("Computed weights: %s", weights)
    resolution = resolve(weights, ResolveMode.WEIGHTED_SAMPLE, rng)

    recent = recent_selection_counts(decision.history, now, config.window_days)
    winner = resolution.winner
    reasoning = (
        f"{names[winner]} was chosen by weighted random selection "
        f"(weight {weights[winner]:.2f}, "
        f"{_plural(recent.get(winner, 0), 'recent selection')} "
        f"in the last {config.window_days} days)"
    )

    logger.info("Random decision resolved: winner=%s weight=%.2f", winner, weights[winner])
    return DecisionResult(
        restaurant_id=winner,
        reasoning=reasoning,
        method="random",
        score_table=weights,
        tie_count=0,
    )


def decide(
    decision: TieredInput | RandomInput,
    rng: np.random.Generator | None = None,
    config: DecisionConfig = DEFAULT_DECISION_CONFIG,
) -> DecisionResult:
    """
    Compute the outcome of a group decision.

    Dispatches on the input type: tiered inputs are scored from ballots and
    resolved by highest points; random inputs are weighted from the
    collection's recent history and sampled.  Pass a seeded generator to
    make tie-breaks and draws reproducible; otherwise one is created from
    ``config.random_seed``.

    Raises ``NoVotesSubmitted``, ``InvalidBallot`` or ``EmptyUniverse`` for
    invalid caller input.
    """
    if rng is None:
        rng = np.random.default_rng(config.random_seed)

    if isinstance(decision, TieredInput):
        return decide_tiered(decision, rng)
    return decide_random(decision, rng, config)
