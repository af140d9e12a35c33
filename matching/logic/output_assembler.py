"""
Output Assembler

Transforms exclusion and scoring data into the final EnhancedMatchingResult contract.
Bucket cutoffs come from the config thresholds rather than fixed numbers.
"""

import logging
from typing import List, Optional

from .contracts import (
    MatchScore,
    HardExclusionResult,
    Thresholds,
    EnhancedMatchingResult,
)

logger = logging.getLogger(__name__)


def split_buckets(
    ordered: List[MatchScore],
    thresholds: Thresholds
) -> tuple:
    """(top, good) views over an ordered list; order is preserved."""
    top = [m for m in ordered if m.score >= thresholds.top_match_label]
    good = [
        m for m in ordered
        if thresholds.good_match_label <= m.score < thresholds.top_match_label
    ]
    return top, good


def assemble_result(
    ordered: List[MatchScore],
    exclusions: HardExclusionResult,
    thresholds: Optional[Thresholds] = None
) -> EnhancedMatchingResult:
    """
    Assemble the final EnhancedMatchingResult.

    Args:
        ordered: Scored trainers in presentation order
        exclusions: Hard exclusion outcome for the same request
        thresholds: Live display thresholds

    Returns:
        Complete EnhancedMatchingResult
    """
    thresholds = thresholds or Thresholds()

    matched = [m for m in ordered if m.score >= thresholds.min_match_to_show]
    hidden = len(ordered) - len(matched)
    if hidden:
        logger.info(f"🙈 {hidden} trainers below min_match_to_show ({thresholds.min_match_to_show})")

    top, good = split_buckets(matched, thresholds)

    return EnhancedMatchingResult(
        matched_trainers=matched,
        excluded_trainers=exclusions.excluded_trainers,
        exclusion_summary=exclusions.exclusion_summary,
        has_matches=len(matched) > 0,
        top_matches=top,
        good_matches=good,
        all_trainers=ordered,
    )
