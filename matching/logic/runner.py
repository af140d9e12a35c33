"""
Engine Runner

Orchestrates one match request against the database:
1. Accepts trainers and client preferences
2. Reads the live config (cached) and active goal mappings via the adapter
3. Runs the matching engine
4. Returns the EnhancedMatchingResult

This is a pure orchestration layer - NO scoring, NO business logic.
"""

import logging
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from db import get_db
from settings import MATCHING_CONFIG_CACHE_TTL_SECONDS, MATCHING_RANDOM_SEED
from matching.repository import DatabaseVersionStore
from .adapter import load_goal_mappings
from .config_provider import ConfigProvider
from .contracts import Trainer, ClientPreferences, EnhancedMatchingResult
from .engine import MatchingEngine

logger = logging.getLogger(__name__)

_config_provider: Optional[ConfigProvider] = None


def get_config_provider() -> ConfigProvider:
    """Process-wide provider, so the live config cache outlives a request."""
    global _config_provider
    if _config_provider is None:
        _config_provider = ConfigProvider(
            store=DatabaseVersionStore(get_db),
            cache_ttl_seconds=MATCHING_CONFIG_CACHE_TTL_SECONDS,
        )
    return _config_provider


def run_matching(
    db: Session,
    trainers: List[Trainer],
    preferences: Optional[ClientPreferences],
    config_provider: ConfigProvider,
    seed: Optional[int] = None
) -> EnhancedMatchingResult:
    """
    Main entry point: run the full matching pipeline.

    Args:
        db: Database session used for goal mappings
        trainers: Candidate trainers supplied by the caller
        preferences: Client quiz/survey answers, may be None
        config_provider: Live config source
        seed: Optional seed; falls back to MATCHING_RANDOM_SEED

    Returns:
        EnhancedMatchingResult
    """
    logger.info(f"🚀 Starting matching pipeline for {len(trainers)} trainers")

    if preferences is None or not preferences.has_data:
        logger.info(f"🎲 No client preferences, using randomized baseline scores")

    if not trainers:
        logger.warning(f"⚠️ Empty trainer pool")

    goal_lookup = load_goal_mappings(db)

    effective_seed = seed if seed is not None else MATCHING_RANDOM_SEED
    rng = random.Random(effective_seed)

    engine = MatchingEngine(
        config_provider=config_provider,
        goal_lookup=goal_lookup,
        rng=rng,
    )
    result = engine.compute_matches(trainers, preferences)

    logger.info(
        f"🏆 Top matches: {len(result.top_matches)}, good matches: {len(result.good_matches)}, "
        f"excluded: {result.exclusion_summary.total}"
    )
    return result
