"""
Ranker

Orders scored trainers for presentation.
Applies tier bucketing and interleaving so a client never sees only
near-identical top trainers.
"""

import random
from functools import cmp_to_key
from typing import List, Optional

from .contracts import MatchScore
from .constants import (
    HIGH_TIER_MIN_SCORE,
    MEDIUM_TIER_MIN_SCORE,
    SCORE_TIE_WINDOW,
)


def _compare(a: MatchScore, b: MatchScore) -> float:
    # Near-ties are decided by rating
    if abs(a.score - b.score) < SCORE_TIE_WINDOW:
        return (b.trainer.rating or 0) - (a.trainer.rating or 0)
    return b.score - a.score


def rank_trainers(scored: List[MatchScore]) -> List[MatchScore]:
    """
    Rank by score (descending), using rating to break near-ties.

    Args:
        scored: Scored trainers

    Returns:
        New sorted list
    """
    return sorted(scored, key=cmp_to_key(_compare))


def partition_tiers(
    ranked: List[MatchScore],
    high_min: int = HIGH_TIER_MIN_SCORE,
    medium_min: int = MEDIUM_TIER_MIN_SCORE
) -> List[List[MatchScore]]:
    """Split into [high, medium, low] score tiers, keeping order within each."""
    high = [m for m in ranked if m.score >= high_min]
    medium = [m for m in ranked if medium_min <= m.score < high_min]
    low = [m for m in ranked if m.score < medium_min]
    return [high, medium, low]


def interleave(tiers: List[List[MatchScore]]) -> List[MatchScore]:
    """Round-robin across tiers; exhausted tiers drop out of the rotation."""
    result: List[MatchScore] = []
    longest = max((len(t) for t in tiers), default=0)
    for i in range(longest):
        for tier in tiers:
            if i < len(tier):
                result.append(tier[i])
    return result


def reorder_for_diversity(
    scored: List[MatchScore],
    rng: Optional[random.Random] = None
) -> List[MatchScore]:
    """
    Final presentation order: rank, bucket into tiers, shuffle each tier,
    then interleave. Scores are never modified.

    Args:
        scored: Scored trainers
        rng: Randomness source; seed it for reproducible ordering

    Returns:
        Reordered list containing every input trainer exactly once
    """
    rng = rng or random.Random()

    tiers = partition_tiers(rank_trainers(scored))
    for tier in tiers:
        rng.shuffle(tier)

    return interleave(tiers)
