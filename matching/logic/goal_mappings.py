"""
Goal -> Specialty Mapping Lookup

Read-only table telling the scorer which trainer specialties serve a client goal,
and how strongly (primary/secondary/optional tiers).
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from .contracts import GoalSpecialtyMapping
from .constants import MAPPING_TYPE_DEFAULT_WEIGHTS, UNMAPPED_GOAL_MAX_WEIGHT


class GoalMappingLookup:
    """
    Mappings grouped per goal key, strongest first.

    Missing weights are filled from the mapping tier (100/60/30).
    """

    def __init__(self, mappings: Optional[Iterable[GoalSpecialtyMapping]] = None):
        grouped: Dict[str, List[GoalSpecialtyMapping]] = defaultdict(list)
        for mapping in mappings or []:
            if mapping.weight is None:
                mapping = mapping.model_copy(
                    update={"weight": MAPPING_TYPE_DEFAULT_WEIGHTS[mapping.mapping_type]}
                )
            grouped[mapping.goal_key].append(mapping)

        self._by_goal: Dict[str, List[GoalSpecialtyMapping]] = {
            goal: sorted(items, key=lambda m: m.weight, reverse=True)
            for goal, items in grouped.items()
        }

    def for_goal(self, goal_key: str) -> List[GoalSpecialtyMapping]:
        return list(self._by_goal.get(goal_key, []))

    def max_weight(self, goal_key: str) -> int:
        """Best achievable weight for a goal; unmapped goals count as full."""
        mappings = self._by_goal.get(goal_key)
        if not mappings:
            return UNMAPPED_GOAL_MAX_WEIGHT
        return mappings[0].weight

    def goals(self) -> List[str]:
        return sorted(self._by_goal)
