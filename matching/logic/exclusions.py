"""
Hard Exclusions

Removes trainers a client can never book before any scoring happens.
Rules run in a fixed order (gender -> format -> budget -> availability) and the
first rule that fires decides the exclusion type for that trainer.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .contracts import (
    Trainer,
    ClientSurveyData,
    MatchingAlgorithmConfig,
    ExcludedTrainer,
    ExclusionSummary,
    ExclusionType,
    HardExclusionResult,
    LocationPreference,
)
from .constants import (
    NO_GENDER_PREFERENCE,
    IN_PERSON_EXCLUSION_KEYWORDS,
    ONLINE_EXCLUSION_KEYWORDS,
    DEFAULT_HARD_EXCLUSION_PERCENT,
)
from .pricing import get_trainer_min_price

logger = logging.getLogger(__name__)

Exclusion = Tuple[ExclusionType, str]

# Rule catalogue for the admin panel, in evaluation order
HARD_EXCLUSION_RULES: List[Dict[str, Any]] = [
    {
        "id": ExclusionType.GENDER.value,
        "name": "Trainer Gender Mismatch",
        "description": "If client specifies a male or female trainer preference, trainers of other genders are excluded.",
        "icon": "user",
        "configurable": False,
        "config_key": None,
    },
    {
        "id": ExclusionType.FORMAT.value,
        "name": "Training Format Incompatibility",
        "description": "If client requires in-person only and trainer only offers online (or vice versa), trainer is excluded.",
        "icon": "map-pin",
        "configurable": False,
        "config_key": None,
    },
    {
        "id": ExclusionType.BUDGET.value,
        "name": "Budget Hard Ceiling",
        "description": "If trainer's minimum price exceeds client's max budget by more than the configured threshold, trainer is excluded.",
        "icon": "dollar-sign",
        "configurable": True,
        "config_key": "budget.hard_exclusion_percent",
    },
    {
        "id": ExclusionType.AVAILABILITY.value,
        "name": "Availability Mismatch",
        "description": "If client timeline is ASAP and trainer is not accepting new clients, trainer is excluded.",
        "icon": "clock",
        "configurable": True,
        "config_key": "availability_rules.asap_timelines",
    },
]


def apply_hard_exclusions(
    trainers: List[Trainer],
    client_data: Optional[ClientSurveyData],
    config: Optional[MatchingAlgorithmConfig]
) -> HardExclusionResult:
    """
    Split the trainer pool into included and excluded trainers.

    Args:
        trainers: Candidate pool, order preserved in the included list
        client_data: Client survey answers; None disables exclusions
        config: Active algorithm config; None or a disabled flag disables exclusions

    Returns:
        HardExclusionResult with a per-type summary
    """
    if config is None or not config.feature_flags.enable_hard_exclusions or client_data is None:
        return HardExclusionResult(included_trainers=list(trainers))

    included: List[Trainer] = []
    excluded: List[ExcludedTrainer] = []

    for trainer in trainers:
        exclusion = check_exclusion(trainer, client_data, config)
        if exclusion:
            exclusion_type, reason = exclusion
            excluded.append(ExcludedTrainer(
                trainer=trainer,
                reason=reason,
                exclusion_type=exclusion_type,
            ))
        else:
            included.append(trainer)

    summary = summarize_exclusions(excluded)
    if summary.total:
        logger.info(
            f"🚫 Hard exclusions removed {summary.total}/{len(trainers)} trainers "
            f"(gender={summary.gender}, format={summary.format}, "
            f"budget={summary.budget}, availability={summary.availability})"
        )

    return HardExclusionResult(
        included_trainers=included,
        excluded_trainers=excluded,
        exclusion_summary=summary,
    )


def summarize_exclusions(excluded: List[ExcludedTrainer]) -> ExclusionSummary:
    counts = {exclusion_type: 0 for exclusion_type in ExclusionType}
    for item in excluded:
        counts[item.exclusion_type] += 1

    return ExclusionSummary(
        gender=counts[ExclusionType.GENDER],
        format=counts[ExclusionType.FORMAT],
        budget=counts[ExclusionType.BUDGET],
        availability=counts[ExclusionType.AVAILABILITY],
        total=len(excluded),
    )


def check_exclusion(
    trainer: Trainer,
    client_data: ClientSurveyData,
    config: MatchingAlgorithmConfig
) -> Optional[Exclusion]:
    """First matching rule wins; later rules are not evaluated."""
    rules: List[Callable[[Trainer, ClientSurveyData, MatchingAlgorithmConfig], Optional[Exclusion]]] = [
        check_gender_exclusion,
        check_format_exclusion,
        check_budget_exclusion,
        check_availability_exclusion,
    ]
    for rule in rules:
        exclusion = rule(trainer, client_data, config)
        if exclusion:
            return exclusion
    return None


def check_gender_exclusion(
    trainer: Trainer,
    client_data: ClientSurveyData,
    config: MatchingAlgorithmConfig
) -> Optional[Exclusion]:
    preference = client_data.trainer_gender_preference
    if not preference or preference == NO_GENDER_PREFERENCE:
        return None

    # Unknown trainer gender never excludes
    if not trainer.gender:
        return None

    if trainer.gender.lower() != preference.lower():
        return (
            ExclusionType.GENDER,
            f"Client prefers {preference} trainer, trainer is {trainer.gender}",
        )
    return None


def check_format_exclusion(
    trainer: Trainer,
    client_data: ClientSurveyData,
    config: MatchingAlgorithmConfig
) -> Optional[Exclusion]:
    preference = client_data.training_location_preference
    if not preference or preference == LocationPreference.HYBRID:
        return None

    formats = [f.lower() for f in trainer.formats]
    if not formats:
        return None

    if preference == LocationPreference.IN_PERSON:
        has_in_person = any(k in f for f in formats for k in IN_PERSON_EXCLUSION_KEYWORDS)
        if not has_in_person and not client_data.open_to_virtual_coaching:
            return (
                ExclusionType.FORMAT,
                "Client requires in-person training, trainer only offers online",
            )
    elif preference == LocationPreference.ONLINE:
        has_online = any(k in f for f in formats for k in ONLINE_EXCLUSION_KEYWORDS)
        if not has_online:
            return (
                ExclusionType.FORMAT,
                "Client requires online training, trainer only offers in-person",
            )
    return None


def check_budget_exclusion(
    trainer: Trainer,
    client_data: ClientSurveyData,
    config: MatchingAlgorithmConfig
) -> Optional[Exclusion]:
    client_max = client_data.budget_range_max
    if not client_max:
        return None

    min_price = get_trainer_min_price(trainer)
    if not min_price:
        return None

    hard_percent = config.budget.hard_exclusion_percent or DEFAULT_HARD_EXCLUSION_PERCENT
    hard_ceiling = client_max * (1 + hard_percent / 100)

    if min_price > hard_ceiling:
        return (
            ExclusionType.BUDGET,
            f"Trainer's minimum rate (${min_price:g}) exceeds client's budget ceiling (${round(hard_ceiling)})",
        )
    return None


def check_availability_exclusion(
    trainer: Trainer,
    client_data: ClientSurveyData,
    config: MatchingAlgorithmConfig
) -> Optional[Exclusion]:
    if client_data.start_timeline not in config.availability_rules.asap_timelines:
        return None

    # Only an explicit "not accepting" excludes; unknown is fine
    if trainer.accepting_new_clients is False:
        return (
            ExclusionType.AVAILABILITY,
            "Client needs to start ASAP, trainer is not accepting new clients",
        )
    return None
