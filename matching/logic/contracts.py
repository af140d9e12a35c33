"""
Data Contracts for the Trainer Matching Engine

Defines Pydantic models for trainers and client preferences (input),
the versioned algorithm configuration, and the match results (output).
These contracts are the API boundary for the matching engine.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict

from pydantic import BaseModel, Field, computed_field

from .constants import (
    WeightCategory,
    MappingType,
    DEFAULT_CATEGORY_WEIGHTS,
    MINIMUM_BASELINE_SCORE,
    DEFAULT_TOP_MATCH_LABEL,
    DEFAULT_GOOD_MATCH_LABEL,
    DEFAULT_MIN_MATCH_TO_SHOW,
    DEFAULT_SOFT_TOLERANCE_PERCENT,
    DEFAULT_HARD_EXCLUSION_PERCENT,
)


# =============================================================================
# ENUMS
# =============================================================================

class LocationPreference(str, Enum):
    IN_PERSON = "in-person"
    ONLINE = "online"
    HYBRID = "hybrid"


class BudgetFlexibility(str, Enum):
    STRICT = "strict"
    FLEXIBLE = "flexible"
    NEGOTIABLE = "negotiable"


class DiscoveryCallPreference(str, Enum):
    REQUIRED = "required"
    PREFERRED = "preferred"
    NOT_NEEDED = "not_needed"


class PackageType(str, Enum):
    SINGLE_SESSION = "single_session"
    SHORT_TERM = "short_term"
    ONGOING = "ongoing"


class ExclusionType(str, Enum):
    GENDER = "gender"
    FORMAT = "format"
    BUDGET = "budget"
    AVAILABILITY = "availability"


class VersionStatus(str, Enum):
    """Lifecycle of a config version: draft -> live -> archived."""
    DRAFT = "draft"
    LIVE = "live"
    ARCHIVED = "archived"


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class PackageOption(BaseModel):
    """A priced package a trainer sells."""
    name: str = ""
    sessions: Optional[int] = None
    price: Optional[float] = None
    currency: str = "GBP"


class Trainer(BaseModel):
    """
    Candidate trainer record, read-only to the engine.
    Owned by the persistence layer.
    """
    id: str
    name: str = ""

    # Expertise
    specialties: List[str] = Field(default_factory=list)
    coaching_style: List[str] = Field(default_factory=list)
    training_vibe: Optional[str] = None
    communication_style: Optional[str] = None
    ideal_client_types: List[str] = Field(default_factory=list)

    # Delivery
    delivery_format: List[str] = Field(default_factory=list)
    training_types: List[str] = Field(default_factory=list)

    # Pricing
    hourly_rate: Optional[float] = None
    package_options: List[PackageOption] = Field(default_factory=list)

    # Track record
    experience_years: Optional[int] = None
    rating: Optional[float] = None

    gender: Optional[str] = None
    offers_discovery_call: bool = False
    accepting_new_clients: Optional[bool] = None

    @property
    def formats(self) -> List[str]:
        """Delivery formats, falling back to legacy training types."""
        return self.delivery_format or self.training_types


class QuizAnswers(BaseModel):
    """Legacy onboarding quiz answers (flat answer bag)."""
    fitness_goals: List[str] = Field(default_factory=list)
    budget_range: Optional[str] = None          # e.g. "50-75"
    coaching_style: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    training_type: List[str] = Field(default_factory=list)
    session_preference: Optional[str] = None    # in_person/online/hybrid
    workout_frequency: Optional[str] = None     # daily/4-6_times/2-3_times


class ClientSurveyData(BaseModel):
    """Rich client survey record."""
    # Goals
    primary_goals: List[str] = Field(default_factory=list)
    secondary_goals: List[str] = Field(default_factory=list)

    # Location and format
    training_location_preference: Optional[LocationPreference] = None
    open_to_virtual_coaching: bool = False

    # Scheduling
    preferred_training_frequency: Optional[int] = None
    preferred_time_slots: List[str] = Field(default_factory=list)
    start_timeline: Optional[str] = None        # asap/within_month/flexible
    flexible_scheduling: bool = False

    # Coaching style and self-description
    preferred_coaching_style: List[str] = Field(default_factory=list)
    motivation_factors: List[str] = Field(default_factory=list)
    client_personality_type: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None

    # Packages and budget
    preferred_package_type: Optional[PackageType] = None
    budget_range_min: Optional[float] = None
    budget_range_max: Optional[float] = None
    budget_flexibility: Optional[BudgetFlexibility] = None

    # Trainer preferences
    trainer_gender_preference: Optional[str] = None   # male/female/no_preference
    discovery_call_preference: Optional[DiscoveryCallPreference] = None


class ClientPreferences(BaseModel):
    """
    Immutable per-request snapshot of what the client told us.
    Either shape may be absent; survey data wins where both exist.
    """
    quiz: Optional[QuizAnswers] = None
    survey: Optional[ClientSurveyData] = None

    @property
    def has_data(self) -> bool:
        return self.quiz is not None or self.survey is not None


# =============================================================================
# ALGORITHM CONFIGURATION
# =============================================================================

class WeightConfig(BaseModel):
    """Weight of a single category, with its editable bounds."""
    value: float
    min: float = 0
    max: float = 100


def _default_weights() -> Dict[WeightCategory, WeightConfig]:
    return {
        category: WeightConfig(value=value, min=low, max=high)
        for category, (value, low, high) in DEFAULT_CATEGORY_WEIGHTS.items()
    }


class Thresholds(BaseModel):
    minimum_baseline_score: float = MINIMUM_BASELINE_SCORE
    min_match_to_show: float = DEFAULT_MIN_MATCH_TO_SHOW
    good_match_label: float = DEFAULT_GOOD_MATCH_LABEL
    top_match_label: float = DEFAULT_TOP_MATCH_LABEL


class BudgetConfig(BaseModel):
    soft_tolerance_percent: float = DEFAULT_SOFT_TOLERANCE_PERCENT
    hard_exclusion_percent: float = DEFAULT_HARD_EXCLUSION_PERCENT


class PackageBoundaries(BaseModel):
    """Session counts separating single-session, short-term and ongoing packages."""
    single_session_max_sessions: int = 1
    short_term_max_sessions: int = 12


class AvailabilityRules(BaseModel):
    """Start timelines treated as 'needs to start now'."""
    asap_timelines: List[str] = Field(default_factory=lambda: ["asap"])


class FeatureFlags(BaseModel):
    enable_ideal_client_bonus: bool = True
    enable_discovery_call_penalty: bool = True
    enable_hard_exclusions: bool = True


class MatchingAlgorithmConfig(BaseModel):
    """Content of one config version."""
    weights: Dict[WeightCategory, WeightConfig] = Field(default_factory=_default_weights)
    thresholds: Thresholds = Field(default_factory=Thresholds)
    budget: BudgetConfig = Field(default_factory=BudgetConfig)
    package_boundaries: PackageBoundaries = Field(default_factory=PackageBoundaries)
    availability_rules: AvailabilityRules = Field(default_factory=AvailabilityRules)
    feature_flags: FeatureFlags = Field(default_factory=FeatureFlags)

    def weight_of(self, category: WeightCategory) -> float:
        """Configured weight value, or the documented default when the key is missing."""
        weight = self.weights.get(category)
        if weight is None:
            return DEFAULT_CATEGORY_WEIGHTS[category][0]
        return weight.value

    @computed_field
    @property
    def total_weight(self) -> float:
        """Advisory sum of weights, shown to admins; never enforced by the engine."""
        return sum(w.value for w in self.weights.values())


DEFAULT_MATCHING_CONFIG = MatchingAlgorithmConfig()


class MatchingVersion(BaseModel):
    """A stored config version."""
    id: int
    name: str
    version_number: int
    config: MatchingAlgorithmConfig = Field(default_factory=MatchingAlgorithmConfig)
    status: VersionStatus = VersionStatus.DRAFT
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


class GoalSpecialtyMapping(BaseModel):
    """One weighted (goal, specialty) pair."""
    goal_key: str
    specialty: str
    weight: Optional[int] = Field(default=None, ge=0, le=100)
    mapping_type: MappingType = MappingType.PRIMARY


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class ExcludedTrainer(BaseModel):
    trainer: Trainer
    reason: str
    exclusion_type: ExclusionType


class ExclusionSummary(BaseModel):
    gender: int = 0
    format: int = 0
    budget: int = 0
    availability: int = 0
    total: int = 0


class HardExclusionResult(BaseModel):
    included_trainers: List[Trainer] = Field(default_factory=list)
    excluded_trainers: List[ExcludedTrainer] = Field(default_factory=list)
    exclusion_summary: ExclusionSummary = Field(default_factory=ExclusionSummary)


class MatchDetail(BaseModel):
    """Per-category score shown on the trainer card."""
    category: str
    score: int = Field(ge=0, le=100)
    icon: str = ""
    color: str = ""


class MatchScore(BaseModel):
    """Scored trainer for one match request."""
    trainer: Trainer
    score: int = Field(ge=0, le=100)
    match_reasons: List[str] = Field(default_factory=list)
    match_details: List[MatchDetail] = Field(default_factory=list)
    compatibility_percentage: int = Field(default=0, ge=0, le=100)


class EnhancedMatchingResult(BaseModel):
    """
    Output contract for compute_matches.
    Buckets are views over the same diversified ordering.
    """
    matched_trainers: List[MatchScore] = Field(default_factory=list)
    excluded_trainers: List[ExcludedTrainer] = Field(default_factory=list)
    exclusion_summary: ExclusionSummary = Field(default_factory=ExclusionSummary)
    has_matches: bool = False
    top_matches: List[MatchScore] = Field(default_factory=list)
    good_matches: List[MatchScore] = Field(default_factory=list)
    all_trainers: List[MatchScore] = Field(default_factory=list)


# =============================================================================
# INTERMEDIATE DATA STRUCTURES
# =============================================================================

class CategoryScore(BaseModel):
    """
    Raw 0-100 result of one category scorer, before weighting.
    Used between dimension scoring and aggregation.
    """
    category: WeightCategory
    score: int = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)
