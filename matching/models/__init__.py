# Export all matching models for easy imports
from .base import Base
from .matching_version import MatchingAlgorithmVersion
from .client_goal import ClientGoal, ClientGoalSpecialtyMapping

__all__ = [
    "Base",
    "MatchingAlgorithmVersion",
    "ClientGoal",
    "ClientGoalSpecialtyMapping",
]
