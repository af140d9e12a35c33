"""
Matching Engine Constants

Defines the category enum, default weights, keyword tables, rule tables and
tier cutoffs used by the trainer matching engine.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# SCORE FLOOR
# =============================================================================

# No trainer is ever shown below this match percentage.
MINIMUM_BASELINE_SCORE = 45


# =============================================================================
# WEIGHT CATEGORIES
# =============================================================================

class WeightCategory(str, Enum):
    """Keys of the weights block of a MatchingAlgorithmConfig."""
    GOALS_SPECIALTIES = "goals_specialties"
    LOCATION_FORMAT = "location_format"
    COACHING_STYLE = "coaching_style"
    SCHEDULE_FREQUENCY = "schedule_frequency"
    BUDGET_FIT = "budget_fit"
    EXPERIENCE_LEVEL = "experience_level"
    IDEAL_CLIENT_TYPE = "ideal_client_type"
    PACKAGE_ALIGNMENT = "package_alignment"
    DISCOVERY_CALL = "discovery_call"   # multiplicative adjustment, never a weighted sum term


# Default weight set used when no live version exists: (value, min, max)
DEFAULT_CATEGORY_WEIGHTS: Dict[WeightCategory, Tuple[int, int, int]] = {
    WeightCategory.GOALS_SPECIALTIES: (25, 10, 40),
    WeightCategory.LOCATION_FORMAT: (20, 5, 30),
    WeightCategory.COACHING_STYLE: (20, 5, 30),
    WeightCategory.SCHEDULE_FREQUENCY: (15, 5, 25),
    WeightCategory.BUDGET_FIT: (5, 0, 20),
    WeightCategory.EXPERIENCE_LEVEL: (5, 0, 15),
    WeightCategory.IDEAL_CLIENT_TYPE: (5, 0, 15),
    WeightCategory.PACKAGE_ALIGNMENT: (3, 0, 10),
    WeightCategory.DISCOVERY_CALL: (2, 0, 10),
}

# Presentation metadata per scored category: (label, icon, color)
CATEGORY_DISPLAY: Dict[WeightCategory, Tuple[str, str, str]] = {
    WeightCategory.GOALS_SPECIALTIES: ("Goals", "target", "text-blue-500"),
    WeightCategory.LOCATION_FORMAT: ("Location", "map-pin", "text-green-500"),
    WeightCategory.COACHING_STYLE: ("Style", "heart", "text-purple-500"),
    WeightCategory.SCHEDULE_FREQUENCY: ("Schedule", "calendar", "text-cyan-500"),
    WeightCategory.BUDGET_FIT: ("Budget", "dollar-sign", "text-orange-500"),
    WeightCategory.EXPERIENCE_LEVEL: ("Experience", "users", "text-red-500"),
    WeightCategory.IDEAL_CLIENT_TYPE: ("Ideal Client", "user-check", "text-pink-500"),
    WeightCategory.PACKAGE_ALIGNMENT: ("Packages", "package", "text-amber-500"),
}


# =============================================================================
# GOAL -> SPECIALTY MAPPINGS
# =============================================================================

class MappingType(str, Enum):
    """How strongly a specialty relates to a client goal."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    OPTIONAL = "optional"


MAPPING_TYPE_DEFAULT_WEIGHTS: Dict[str, int] = {
    MappingType.PRIMARY: 100,
    MappingType.SECONDARY: 60,
    MappingType.OPTIONAL: 30,
}

# Max contribution of a goal that has no configured mappings
UNMAPPED_GOAL_MAX_WEIGHT = 100

# Keyword fallback for goals with no configured mappings
GOAL_KEYWORD_FALLBACK: Dict[str, List[str]] = {
    "weight_loss": ["Weight Loss", "Fat Loss", "Body Composition", "Nutrition"],
    "strength_training": ["Strength Training", "Powerlifting", "Muscle Building", "Bodybuilding"],
    "fitness_health": ["General Fitness", "Health & Wellness", "Functional Training"],
    "energy_confidence": ["Lifestyle Coaching", "Motivation", "Confidence Building"],
    "injury_prevention": ["Rehabilitation", "Corrective Exercise", "Injury Prevention", "Mobility"],
    "specific_sport": ["Sports Performance", "Athletic Training", "Sport-Specific"],
    "muscle_gain": ["Muscle Building", "Strength Training", "Bodybuilding"],
    "endurance": ["Endurance", "Cardio", "Marathon Training"],
    "flexibility": ["Yoga", "Pilates", "Flexibility", "Mobility"],
    "general_fitness": ["Functional Training", "HIIT", "CrossFit"],
    "rehabilitation": ["Rehabilitation", "Corrective Exercise", "Physical Therapy"],
}


# =============================================================================
# COACHING STYLE KEYWORDS
# =============================================================================

STYLE_KEYWORDS: Dict[str, List[str]] = {
    "nurturing": ["supportive", "patient", "encouraging", "nurturing"],
    "tough_love": ["challenging", "direct", "accountability", "strict"],
    "high_energy": ["energetic", "motivating", "enthusiastic", "dynamic"],
    "analytical": ["technical", "data-driven", "precise", "scientific"],
    "social": ["fun", "social", "interactive", "group"],
    "calm": ["calm", "mindful", "peaceful", "balanced"],
    "motivational": ["motivational", "encouraging", "positive"],
    "structured": ["structured", "methodical", "data-driven"],
    "flexible": ["adaptive", "flexible", "personalized"],
}


# =============================================================================
# FORMAT KEYWORDS
# =============================================================================

# Substrings used by the exclusion rule
IN_PERSON_EXCLUSION_KEYWORDS = ["person", "gym", "studio"]
ONLINE_EXCLUSION_KEYWORDS = ["online", "virtual", "remote"]

# Substrings used by the location/format score
IN_PERSON_SCORE_KEYWORDS = ["person", "gym"]
ONLINE_SCORE_KEYWORDS = ["online", "virtual"]

# Legacy quiz session_preference -> survey location preference
SESSION_PREFERENCE_MAP: Dict[str, str] = {
    "in_person": "in-person",
    "in-person": "in-person",
    "online": "online",
    "hybrid": "hybrid",
}

LOCATION_FULL_MATCH = 100
LOCATION_VIRTUAL_OPEN = 70


# =============================================================================
# SCHEDULE
# =============================================================================

SCHEDULE_BASELINE_SCORE = 85
SCHEDULE_FLEXIBLE_SCORE = 100

# Legacy quiz workout_frequency -> sessions per week
WORKOUT_FREQUENCY_MAP: Dict[str, int] = {
    "daily": 7,
    "4-6_times": 5,
    "2-3_times": 3,
}
DEFAULT_SESSIONS_PER_WEEK = 2


# =============================================================================
# BUDGET
# =============================================================================

# Legacy quiz budget buckets (hourly rate)
BUDGET_BUCKETS: Dict[str, Tuple[float, float]] = {
    "30-50": (30, 50),
    "50-75": (50, 75),
    "75-100": (75, 100),
    "100+": (100, 999),
}
DEFAULT_BUDGET_BUCKET: Tuple[float, float] = (0, 999)

BUDGET_NEGOTIABLE_SCORE = 60
DEFAULT_SOFT_TOLERANCE_PERCENT = 20
DEFAULT_HARD_EXCLUSION_PERCENT = 40


# =============================================================================
# EXPERIENCE FIT
# =============================================================================

# client level -> (min trainer rating, min trainer years)
EXPERIENCE_RULES: Dict[str, Tuple[float, int]] = {
    "beginner": (4.7, 0),
    "intermediate": (4.5, 0),
    "advanced": (4.5, 5),
}
EXPERIENCE_MATCH_SCORE = 100
EXPERIENCE_MISMATCH_SCORE = 70


# =============================================================================
# ADJUSTMENTS
# =============================================================================

GENDER_MISMATCH_MULTIPLIER = 0.3
DISCOVERY_CALL_MISSING_MULTIPLIER = 0.8
DISCOVERY_CALL_OFFERED_MULTIPLIER = 1.1
MAX_SCORE = 100

NO_GENDER_PREFERENCE = "no_preference"


# =============================================================================
# NO-PREFERENCE FALLBACK
# =============================================================================

# Score range [low, high) used when a client has given no preferences
FALLBACK_SCORE_RANGE: Tuple[int, int] = (50, 70)

# Synthetic category ranges [low, high): (label, low, high, icon, color)
FALLBACK_CATEGORY_RANGES: List[Tuple[str, int, int, str, str]] = [
    ("Goals", 60, 90, "target", "text-blue-500"),
    ("Location", 70, 100, "map-pin", "text-green-500"),
    ("Availability", 65, 95, "clock", "text-cyan-500"),
    ("Budget", 55, 85, "dollar-sign", "text-orange-500"),
]


# =============================================================================
# DIVERSITY TIERS
# =============================================================================

HIGH_TIER_MIN_SCORE = 75
MEDIUM_TIER_MIN_SCORE = 60

# Scores closer than this are ordered by rating instead
SCORE_TIE_WINDOW = 3


# =============================================================================
# PRESENTATION BUCKETS
# =============================================================================

DEFAULT_TOP_MATCH_LABEL = 70
DEFAULT_GOOD_MATCH_LABEL = 50
DEFAULT_MIN_MATCH_TO_SHOW = 0
