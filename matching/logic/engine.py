"""
Matching Engine

Main orchestrator that combines all matching components into a single pipeline.
This is the primary entry point for matching clients to trainers.
"""

import logging
import random
import time
from typing import List, Optional

from .contracts import (
    Trainer,
    ClientPreferences,
    MatchingAlgorithmConfig,
    EnhancedMatchingResult,
)
from .config_provider import ConfigProvider
from .goal_mappings import GoalMappingLookup
from .exclusions import apply_hard_exclusions
from .aggregator import batch_score
from .ranker import reorder_for_diversity
from .output_assembler import assemble_result
from .constants import MINIMUM_BASELINE_SCORE

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Pure, synchronous matching pipeline. Holds no per-request state.

    Pipeline flow:
    1. Hard Exclusions - Remove trainers the client can never book
    2. Category Scoring - Score each weighted category independently
    3. Aggregation - Weighted sum, adjustments, baseline floor
    4. Diversity Reordering - Tier, shuffle, interleave
    5. Output Assembly - Build top/good/all buckets and the exclusion summary
    """

    def __init__(
        self,
        config_provider: Optional[ConfigProvider] = None,
        goal_lookup: Optional[GoalMappingLookup] = None,
        rng: Optional[random.Random] = None,
        baseline_score: int = MINIMUM_BASELINE_SCORE
    ):
        """
        Initialize the matching engine.

        Args:
            config_provider: Source of the live config. Defaults to built-in defaults.
            goal_lookup: Goal -> specialty mappings, already resolved by the caller
            rng: Randomness for fallback scores and shuffling; seed it in tests
            baseline_score: Score floor, never below MINIMUM_BASELINE_SCORE
        """
        self.config_provider = config_provider or ConfigProvider()
        self.goal_lookup = goal_lookup or GoalMappingLookup()
        self.rng = rng or random.Random()
        self.baseline_score = max(baseline_score, MINIMUM_BASELINE_SCORE)

    def effective_config(self) -> MatchingAlgorithmConfig:
        config = self.config_provider.get_active_config()
        return config.model_copy(update={"weights": self.config_provider.get_live_version_weights()})

    def compute_matches(
        self,
        trainers: List[Trainer],
        preferences: Optional[ClientPreferences] = None
    ) -> EnhancedMatchingResult:
        """
        Match a client to a trainer pool.

        Args:
            trainers: Candidate trainers
            preferences: Client quiz and/or survey answers

        Returns:
            EnhancedMatchingResult with diversified ordering
        """
        start_time = time.perf_counter()
        config = self.effective_config()

        survey = preferences.survey if preferences else None
        exclusions = apply_hard_exclusions(trainers, survey, config)

        baseline = max(self.baseline_score, int(config.thresholds.minimum_baseline_score))
        scored = batch_score(
            exclusions.included_trainers,
            preferences,
            config,
            self.goal_lookup,
            self.rng,
            baseline,
        )
        ordered = reorder_for_diversity(scored, self.rng)
        result = assemble_result(ordered, exclusions, config.thresholds)

        processing_time = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"✨ Matched {len(result.matched_trainers)} of {len(trainers)} trainers "
            f"({result.exclusion_summary.total} excluded, {len(result.top_matches)} top) "
            f"in {processing_time:.2f}ms"
        )
        return result


def compute_matches(
    trainers: List[Trainer],
    preferences: Optional[ClientPreferences] = None,
    config_provider: Optional[ConfigProvider] = None,
    goal_lookup: Optional[GoalMappingLookup] = None,
    rng: Optional[random.Random] = None
) -> EnhancedMatchingResult:
    """
    Convenience function to match without building an engine.

    Args:
        trainers: Candidate trainers
        preferences: Client preferences
        config_provider: Live config source
        goal_lookup: Goal mappings
        rng: Randomness source

    Returns:
        EnhancedMatchingResult
    """
    engine = MatchingEngine(config_provider, goal_lookup, rng)
    return engine.compute_matches(trainers, preferences)
