"""
Matching API Routes

Exposes the matching engine via REST API.
Main endpoint: POST /matches
"""

from typing import Any, List, Optional, Dict
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import get_session
from .logic.adapter import goal_mappings_by_key
from .logic.config_provider import ConfigProvider
from .logic.contracts import Trainer, ClientPreferences, EnhancedMatchingResult
from .logic.exclusions import HARD_EXCLUSION_RULES
from .logic.runner import run_matching, get_config_provider


router = APIRouter(prefix="/matches", tags=["matches"])


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class MatchRequest(BaseModel):
    """Request body for the matches endpoint."""
    trainers: List[Trainer] = Field(
        ...,
        description="Candidate trainers to match against",
    )
    client_preferences: Optional[ClientPreferences] = Field(
        default=None,
        description="Quiz and/or survey answers; omit for browse mode",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible ordering and fallback scores",
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("", response_model=EnhancedMatchingResult, summary="Match a client to trainers")
@router.post("/", response_model=EnhancedMatchingResult, include_in_schema=False)
def get_matches(
    request: MatchRequest,
    db: Session = Depends(get_session),
    config_provider: ConfigProvider = Depends(get_config_provider)
):
    """
    Score and order trainers for one client.

    **Request Body:**
    - `trainers`: Candidate trainer records
    - `client_preferences`: Quiz and/or survey answers (optional)
    - `seed`: Fixes randomness for reproducible output (optional)

    **Response:**
    - Diversified trainer list with top/good buckets
    - Excluded trainers with reasons and a per-type summary
    """
    return run_matching(
        db,
        request.trainers,
        request.client_preferences,
        config_provider,
        seed=request.seed,
    )


@router.get("/goal-mappings", summary="Active goal to specialty mappings")
def get_goal_mappings(db: Session = Depends(get_session)) -> Dict[str, List[dict]]:
    return goal_mappings_by_key(db)


@router.get("/exclusion-rules", summary="Hard exclusion rules in evaluation order")
def get_exclusion_rules() -> List[Dict[str, Any]]:
    return HARD_EXCLUSION_RULES


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Matching engine health check")
def health_check():
    """Check if matching engine is operational."""
    return {"status": "ok", "engine": "matching", "version": "1.0.0"}
