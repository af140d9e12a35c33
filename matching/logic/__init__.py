"""
Matching Logic Module

Provides the deterministic trainer matching engine: hard exclusions,
weighted category scoring and diversity-aware ordering.
"""

from .contracts import (
    Trainer,
    PackageOption,
    QuizAnswers,
    ClientSurveyData,
    ClientPreferences,
    MatchingAlgorithmConfig,
    MatchingVersion,
    GoalSpecialtyMapping,
    MatchScore,
    MatchDetail,
    EnhancedMatchingResult,
    HardExclusionResult,
    ExclusionType,
    VersionStatus,
    DEFAULT_MATCHING_CONFIG,
)
from .engine import MatchingEngine, compute_matches
from .config_provider import ConfigProvider
from .goal_mappings import GoalMappingLookup
from .versioning import InMemoryVersionStore
from .exceptions import MatchingError, VersionNotFoundError, VersionStateError
from .constants import WeightCategory, MappingType

__all__ = [
    # Main engine
    "MatchingEngine",
    "compute_matches",
    "ConfigProvider",
    "GoalMappingLookup",
    "InMemoryVersionStore",

    # Contracts
    "Trainer",
    "PackageOption",
    "QuizAnswers",
    "ClientSurveyData",
    "ClientPreferences",
    "MatchingAlgorithmConfig",
    "MatchingVersion",
    "GoalSpecialtyMapping",
    "MatchScore",
    "MatchDetail",
    "EnhancedMatchingResult",
    "HardExclusionResult",
    "DEFAULT_MATCHING_CONFIG",

    # Enums
    "WeightCategory",
    "MappingType",
    "ExclusionType",
    "VersionStatus",

    # Errors
    "MatchingError",
    "VersionNotFoundError",
    "VersionStateError",
]
