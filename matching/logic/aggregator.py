"""
Score Aggregator

Combines category scores into the trainer's match score.
Applies weighting, the gender and discovery-call adjustments, and the baseline floor.
"""

import logging
import random
from typing import List, Optional

from .contracts import (
    Trainer,
    ClientPreferences,
    MatchingAlgorithmConfig,
    MatchScore,
    MatchDetail,
    DiscoveryCallPreference,
    DEFAULT_MATCHING_CONFIG,
)
from .dimension_scorers import CATEGORY_SCORERS
from .goal_mappings import GoalMappingLookup
from .constants import (
    MINIMUM_BASELINE_SCORE,
    CATEGORY_DISPLAY,
    NO_GENDER_PREFERENCE,
    GENDER_MISMATCH_MULTIPLIER,
    DISCOVERY_CALL_MISSING_MULTIPLIER,
    DISCOVERY_CALL_OFFERED_MULTIPLIER,
    MAX_SCORE,
    FALLBACK_SCORE_RANGE,
    FALLBACK_CATEGORY_RANGES,
)

logger = logging.getLogger(__name__)


def generic_reasons(trainer: Trainer) -> List[str]:
    """Reasons that need no client input: experience plus the first two specialties."""
    reasons = []
    if trainer.experience_years:
        reasons.append(f"{trainer.experience_years} years of coaching experience")
    else:
        reasons.append("Experienced personal trainer")
    for specialty in trainer.specialties[:2]:
        reasons.append(f"Specialises in {specialty}")
    return reasons


def score_without_preferences(
    trainer: Trainer,
    rng: random.Random,
    baseline_score: int = MINIMUM_BASELINE_SCORE
) -> MatchScore:
    """
    Randomized baseline for browsing before the quiz, so cards still show
    plausible variation rather than identical scores. A configured floor above
    the random range still wins.
    """
    low, high = FALLBACK_SCORE_RANGE
    score = low + int(rng.random() * (high - low))
    score = min(max(score, baseline_score), MAX_SCORE)

    details = [
        MatchDetail(
            category=label,
            score=cat_low + int(rng.random() * (cat_high - cat_low)),
            icon=icon,
            color=color,
        )
        for label, cat_low, cat_high, icon, color in FALLBACK_CATEGORY_RANGES
    ]

    return MatchScore(
        trainer=trainer,
        score=score,
        match_reasons=generic_reasons(trainer)[:3],
        match_details=details,
        compatibility_percentage=score,
    )


def _gender_mismatch(trainer: Trainer, preferences: ClientPreferences) -> bool:
    preference = preferences.survey.trainer_gender_preference if preferences.survey else None
    if not preference or preference == NO_GENDER_PREFERENCE or not trainer.gender:
        return False
    return trainer.gender.lower() != preference.lower()


def score_trainer(
    trainer: Trainer,
    preferences: Optional[ClientPreferences],
    config: MatchingAlgorithmConfig = DEFAULT_MATCHING_CONFIG,
    goal_lookup: Optional[GoalMappingLookup] = None,
    rng: Optional[random.Random] = None,
    baseline_score: int = MINIMUM_BASELINE_SCORE
) -> MatchScore:
    """
    Compute the weighted match score for one trainer.

    Args:
        trainer: Trainer to score
        preferences: Client preferences; None or empty uses the randomized baseline
        config: Live algorithm config (weights, budget tolerance, flags)
        goal_lookup: Goal -> specialty mappings
        rng: Randomness source for the no-preference path
        baseline_score: Floor applied to the final score

    Returns:
        MatchScore with reasons and per-category details
    """
    if preferences is None or not preferences.has_data:
        return score_without_preferences(trainer, rng or random.Random(), baseline_score)

    goal_lookup = goal_lookup or GoalMappingLookup()

    total = 0.0
    reasons: List[str] = []
    details: List[MatchDetail] = []

    for category, scorer in CATEGORY_SCORERS.items():
        result = scorer(trainer, preferences, config, goal_lookup)
        if result is None:
            continue

        total += result.score * config.weight_of(category) / 100
        reasons.extend(result.reasons)

        label, icon, color = CATEGORY_DISPLAY[category]
        details.append(MatchDetail(category=label, score=result.score, icon=icon, color=color))

    # Soft gender demotion applies regardless of the hard exclusion flag
    if _gender_mismatch(trainer, preferences):
        total *= GENDER_MISMATCH_MULTIPLIER

    discovery = preferences.survey.discovery_call_preference if preferences.survey else None
    if discovery == DiscoveryCallPreference.REQUIRED:
        if trainer.offers_discovery_call:
            total = min(total * DISCOVERY_CALL_OFFERED_MULTIPLIER, MAX_SCORE)
            reasons.append("Offers a free discovery call")
        elif config.feature_flags.enable_discovery_call_penalty:
            total *= DISCOVERY_CALL_MISSING_MULTIPLIER

    final_score = min(max(round(total), baseline_score), MAX_SCORE)

    if not reasons:
        reasons = generic_reasons(trainer)[:2]

    logger.debug(f"Trainer {trainer.id}: raw={total:.2f} final={final_score} categories={len(details)}")

    return MatchScore(
        trainer=trainer,
        score=final_score,
        match_reasons=reasons,
        match_details=details,
        compatibility_percentage=final_score,
    )


def batch_score(
    trainers: List[Trainer],
    preferences: Optional[ClientPreferences],
    config: MatchingAlgorithmConfig = DEFAULT_MATCHING_CONFIG,
    goal_lookup: Optional[GoalMappingLookup] = None,
    rng: Optional[random.Random] = None,
    baseline_score: int = MINIMUM_BASELINE_SCORE
) -> List[MatchScore]:
    """Score multiple trainers in batch, sharing one randomness source."""
    rng = rng or random.Random()
    goal_lookup = goal_lookup or GoalMappingLookup()
    return [
        score_trainer(t, preferences, config, goal_lookup, rng, baseline_score)
        for t in trainers
    ]
