"""
Data Adapter for the Matching Engine

Reads config versions and goal mappings from the database and transforms
rows into the engine's contracts.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB writes
"""

import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from matching.models import MatchingAlgorithmVersion, ClientGoal, ClientGoalSpecialtyMapping
from .contracts import MatchingVersion, MatchingAlgorithmConfig, GoalSpecialtyMapping, VersionStatus
from .constants import MappingType
from .goal_mappings import GoalMappingLookup

logger = logging.getLogger(__name__)


def version_from_row(row: MatchingAlgorithmVersion) -> MatchingVersion:
    """Convert a stored version row to the MatchingVersion contract."""
    return MatchingVersion(
        id=row.id,
        name=row.name,
        version_number=row.version_number,
        config=MatchingAlgorithmConfig.model_validate(row.config or {}),
        status=VersionStatus(row.status),
        notes=row.notes,
        created_at=row.created_at,
        published_at=row.published_at,
    )


def config_to_json(config: MatchingAlgorithmConfig) -> dict:
    """JSON-column form of a config; enum keys become their string values."""
    return config.model_dump(mode="json")


def mapping_from_row(goal_key: str, row: ClientGoalSpecialtyMapping) -> GoalSpecialtyMapping:
    return GoalSpecialtyMapping(
        goal_key=goal_key,
        specialty=row.specialty,
        weight=row.weight,
        mapping_type=MappingType(row.mapping_type or MappingType.PRIMARY.value),
    )


def fetch_goal_mappings(db: Session) -> List[GoalSpecialtyMapping]:
    """All specialty mappings whose goal is active."""
    rows = (
        db.query(ClientGoal.goal_key, ClientGoalSpecialtyMapping)
        .join(ClientGoalSpecialtyMapping, ClientGoalSpecialtyMapping.goal_id == ClientGoal.id)
        .filter(ClientGoal.is_active.is_(True))
        .all()
    )
    mappings = [mapping_from_row(goal_key, row) for goal_key, row in rows]
    logger.info(f"🎯 Goal mappings loaded: {len(mappings)}")
    return mappings


def load_goal_mappings(db: Session) -> GoalMappingLookup:
    return GoalMappingLookup(fetch_goal_mappings(db))


def goal_mappings_by_key(db: Session) -> Dict[str, List[dict]]:
    """
    `{goal_key: [{specialty, weight, mapping_type}]}`, strongest first,
    with tier default weights filled in.
    """
    lookup = load_goal_mappings(db)
    return {
        goal: [
            {"specialty": m.specialty, "weight": m.weight, "mapping_type": m.mapping_type.value}
            for m in lookup.for_goal(goal)
        ]
        for goal in lookup.goals()
    }
