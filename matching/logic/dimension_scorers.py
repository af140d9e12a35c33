"""
Dimension Scorers

One scoring routine per weight category. Each scorer returns a raw score
between 0 and 100, or None when the inputs it needs are missing, in which case
the category is skipped entirely (no weight, no detail, no reason).
All logic is deterministic - no AI/ML components.
"""

from typing import Callable, Dict, List, Optional

from .contracts import (
    Trainer,
    ClientPreferences,
    MatchingAlgorithmConfig,
    CategoryScore,
    LocationPreference,
    BudgetFlexibility,
)
from .goal_mappings import GoalMappingLookup
from .pricing import get_trainer_min_price, classify_package
from .constants import (
    WeightCategory,
    GOAL_KEYWORD_FALLBACK,
    UNMAPPED_GOAL_MAX_WEIGHT,
    STYLE_KEYWORDS,
    SESSION_PREFERENCE_MAP,
    IN_PERSON_SCORE_KEYWORDS,
    ONLINE_SCORE_KEYWORDS,
    LOCATION_FULL_MATCH,
    LOCATION_VIRTUAL_OPEN,
    SCHEDULE_BASELINE_SCORE,
    SCHEDULE_FLEXIBLE_SCORE,
    WORKOUT_FREQUENCY_MAP,
    DEFAULT_SESSIONS_PER_WEEK,
    BUDGET_BUCKETS,
    DEFAULT_BUDGET_BUCKET,
    BUDGET_NEGOTIABLE_SCORE,
    DEFAULT_SOFT_TOLERANCE_PERCENT,
    EXPERIENCE_RULES,
    EXPERIENCE_MATCH_SCORE,
    EXPERIENCE_MISMATCH_SCORE,
)

Scorer = Callable[
    [Trainer, ClientPreferences, MatchingAlgorithmConfig, GoalMappingLookup],
    Optional[CategoryScore]
]


def _specialty_matches(specialty: str, candidate: str) -> bool:
    """Case-insensitive containment in either direction."""
    a, b = specialty.lower(), candidate.lower()
    return a in b or b in a


def score_goals(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """
    Score how well the trainer's specialties serve the client's primary goals.

    Each goal contributes its best matching mapping weight against the best
    weight it could have earned. Goals with no mappings still count fully in the
    denominator and can only score through the keyword fallback table.
    """
    goals: List[str] = []
    if preferences.survey and preferences.survey.primary_goals:
        goals = preferences.survey.primary_goals
    elif preferences.quiz:
        goals = preferences.quiz.fitness_goals
    if not goals:
        return None

    earned = 0
    possible = 0
    matched_goals = 0

    for goal in goals:
        mappings = goal_lookup.for_goal(goal)
        if mappings:
            best = max(
                (
                    m.weight for m in mappings
                    if any(_specialty_matches(s, m.specialty) for s in trainer.specialties)
                ),
                default=0,
            )
            possible += goal_lookup.max_weight(goal)
        else:
            keywords = GOAL_KEYWORD_FALLBACK.get(goal, [])
            hit = any(
                _specialty_matches(s, keyword)
                for s in trainer.specialties
                for keyword in keywords
            )
            best = UNMAPPED_GOAL_MAX_WEIGHT if hit else 0
            possible += UNMAPPED_GOAL_MAX_WEIGHT

        earned += best
        if best > 0:
            matched_goals += 1

    score = round(earned / possible * 100) if possible else 0
    reasons = []
    if matched_goals > 0:
        reasons.append(f"{matched_goals}/{len(goals)} goals align with expertise")

    return CategoryScore(
        category=WeightCategory.GOALS_SPECIALTIES,
        score=min(score, 100),
        reasons=reasons,
    )


def _location_preference(preferences: ClientPreferences) -> Optional[str]:
    if preferences.survey and preferences.survey.training_location_preference:
        return LocationPreference(preferences.survey.training_location_preference).value
    if preferences.quiz and preferences.quiz.session_preference:
        return SESSION_PREFERENCE_MAP.get(preferences.quiz.session_preference)
    return None


def score_location(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """Hybrid clients match anyone; otherwise match formats by keyword."""
    preference = _location_preference(preferences)
    if not preference:
        return None

    if preference == LocationPreference.HYBRID.value:
        return CategoryScore(
            category=WeightCategory.LOCATION_FORMAT,
            score=LOCATION_FULL_MATCH,
            reasons=["Training format matches your preference"],
        )

    formats = [f.lower() for f in trainer.formats]
    if not formats:
        return None

    keywords = ONLINE_SCORE_KEYWORDS if preference == LocationPreference.ONLINE.value else IN_PERSON_SCORE_KEYWORDS
    format_match = any(k in f for f in formats for k in keywords)

    open_to_virtual = bool(preferences.survey and preferences.survey.open_to_virtual_coaching)
    if format_match:
        score = LOCATION_FULL_MATCH
    elif open_to_virtual:
        score = LOCATION_VIRTUAL_OPEN
    else:
        score = 0

    reasons = ["Training format matches your preference"] if format_match else []
    return CategoryScore(category=WeightCategory.LOCATION_FORMAT, score=score, reasons=reasons)


def score_coaching_style(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """Share of preferred styles whose synonyms appear in the trainer's vibe text."""
    styles: List[str] = []
    if preferences.survey and preferences.survey.preferred_coaching_style:
        styles = preferences.survey.preferred_coaching_style
    elif preferences.quiz:
        styles = preferences.quiz.coaching_style
    if not styles:
        return None

    trainer_text = f"{trainer.training_vibe or ''} {trainer.communication_style or ''}".lower()

    matched = [
        style for style in styles
        if any(keyword in trainer_text for keyword in STYLE_KEYWORDS.get(style, []))
    ]
    score = round(len(matched) / len(styles) * 100)

    reasons = ["Coaching style matches your preferences"] if matched else []
    return CategoryScore(category=WeightCategory.COACHING_STYLE, score=score, reasons=reasons)


def score_schedule(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """
    Coarse availability fit. Trainer calendars are not modelled, so any stated
    frequency gets the baseline and flexible clients get full marks.
    """
    survey = preferences.survey
    frequency: Optional[int] = None
    if survey and survey.preferred_training_frequency:
        frequency = survey.preferred_training_frequency
    elif preferences.quiz and preferences.quiz.workout_frequency:
        frequency = WORKOUT_FREQUENCY_MAP.get(
            preferences.quiz.workout_frequency, DEFAULT_SESSIONS_PER_WEEK
        )
    flexible = bool(survey and survey.flexible_scheduling)

    if not frequency and not flexible:
        return None

    score = SCHEDULE_FLEXIBLE_SCORE if flexible else SCHEDULE_BASELINE_SCORE
    if frequency:
        reason = f"Can accommodate {frequency}x/week training"
    else:
        reason = "Flexible scheduling available"

    return CategoryScore(category=WeightCategory.SCHEDULE_FREQUENCY, score=score, reasons=[reason])


def score_budget(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """
    Compare the trainer's minimum price to the client's budget.

    Survey ranges honour the budget flexibility tier; the legacy quiz uses
    fixed hourly buckets.
    """
    survey = preferences.survey
    budget_min = survey.budget_range_min if survey else None
    budget_max = survey.budget_range_max if survey else None
    flexibility = survey.budget_flexibility if survey else None
    bucket = preferences.quiz.budget_range if preferences.quiz else None

    if not (budget_min or budget_max or bucket):
        return None

    price = get_trainer_min_price(trainer)
    if price is None:
        return None

    if budget_min or budget_max:
        within_budget = True
        if budget_min and price < budget_min:
            within_budget = False
        if budget_max and price > budget_max:
            within_budget = False

        if not within_budget and flexibility == BudgetFlexibility.FLEXIBLE:
            percent = config.budget.soft_tolerance_percent or DEFAULT_SOFT_TOLERANCE_PERCENT
            anchor = budget_max or budget_min
            tolerance = anchor * percent / 100
            within_budget = abs(price - anchor) <= tolerance
    else:
        low, high = BUDGET_BUCKETS.get(bucket, DEFAULT_BUDGET_BUCKET)
        within_budget = low <= price <= high

    reasons: List[str] = []
    if within_budget:
        score = 100
        reasons.append("Within your budget range")
    elif flexibility == BudgetFlexibility.NEGOTIABLE:
        score = BUDGET_NEGOTIABLE_SCORE
        reasons.append("May negotiate on pricing")
    else:
        score = 0

    return CategoryScore(category=WeightCategory.BUDGET_FIT, score=score, reasons=reasons)


def score_experience(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """Soft signal only: a mismatch still scores 70."""
    level: Optional[str] = None
    if preferences.survey and preferences.survey.experience_level:
        level = preferences.survey.experience_level
    elif preferences.quiz and preferences.quiz.experience_level:
        level = preferences.quiz.experience_level
    if not level:
        return None

    level = level.lower()
    rule = EXPERIENCE_RULES.get(level)
    matched = False
    if rule:
        min_rating, min_years = rule
        matched = (trainer.rating or 0) >= min_rating and (trainer.experience_years or 0) >= min_years

    if matched:
        return CategoryScore(
            category=WeightCategory.EXPERIENCE_LEVEL,
            score=EXPERIENCE_MATCH_SCORE,
            reasons=[f"Perfect fit for {level} level"],
        )
    return CategoryScore(category=WeightCategory.EXPERIENCE_LEVEL, score=EXPERIENCE_MISMATCH_SCORE)


def score_ideal_client(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """Share of the client's personality tags the trainer lists as ideal clients."""
    if not config.feature_flags.enable_ideal_client_bonus:
        return None
    if not preferences.survey or not preferences.survey.client_personality_type:
        return None
    if not trainer.ideal_client_types:
        return None

    ideal = {t.lower() for t in trainer.ideal_client_types}
    tags = preferences.survey.client_personality_type
    matched = [t for t in tags if t.lower() in ideal]
    score = round(len(matched) / len(tags) * 100)

    reasons = ["You match this coach's ideal client profile"] if matched else []
    return CategoryScore(category=WeightCategory.IDEAL_CLIENT_TYPE, score=score, reasons=reasons)


def score_package_alignment(
    trainer: Trainer,
    preferences: ClientPreferences,
    config: MatchingAlgorithmConfig,
    goal_lookup: GoalMappingLookup
) -> Optional[CategoryScore]:
    """Full marks when any package falls in the client's preferred package type."""
    if not preferences.survey or not preferences.survey.preferred_package_type:
        return None
    if not trainer.package_options:
        return None

    wanted = preferences.survey.preferred_package_type
    offered = {
        classify_package(pkg, config.package_boundaries)
        for pkg in trainer.package_options
    }
    if wanted in offered:
        label = wanted.value.replace("_", " ")
        return CategoryScore(
            category=WeightCategory.PACKAGE_ALIGNMENT,
            score=100,
            reasons=[f"Offers {label} packages"],
        )
    return CategoryScore(category=WeightCategory.PACKAGE_ALIGNMENT, score=0)


# Every weighted category has exactly one scorer; discovery_call is a multiplier.
CATEGORY_SCORERS: Dict[WeightCategory, Scorer] = {
    WeightCategory.GOALS_SPECIALTIES: score_goals,
    WeightCategory.LOCATION_FORMAT: score_location,
    WeightCategory.COACHING_STYLE: score_coaching_style,
    WeightCategory.SCHEDULE_FREQUENCY: score_schedule,
    WeightCategory.BUDGET_FIT: score_budget,
    WeightCategory.EXPERIENCE_LEVEL: score_experience,
    WeightCategory.IDEAL_CLIENT_TYPE: score_ideal_client,
    WeightCategory.PACKAGE_ALIGNMENT: score_package_alignment,
}

ADJUSTMENT_CATEGORIES = {WeightCategory.DISCOVERY_CALL}

_unhandled = set(WeightCategory) - set(CATEGORY_SCORERS) - ADJUSTMENT_CATEGORIES
if _unhandled:
    raise RuntimeError(f"No scorer registered for categories: {sorted(c.value for c in _unhandled)}")
