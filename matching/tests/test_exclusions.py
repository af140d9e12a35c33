"""
Tests for the hard exclusion rules.
"""

from matching.logic.contracts import ClientSurveyData, ExclusionType, PackageOption, DEFAULT_MATCHING_CONFIG
from matching.logic.exclusions import apply_hard_exclusions, check_exclusion, HARD_EXCLUSION_RULES

from .factories import make_trainer, config_with


def test_gender_preference_excludes_mismatched_trainer():
    trainer = make_trainer("m1", gender="male")
    survey = ClientSurveyData(trainer_gender_preference="female")

    result = apply_hard_exclusions([trainer], survey, DEFAULT_MATCHING_CONFIG)

    assert result.included_trainers == []
    assert len(result.excluded_trainers) == 1
    assert result.excluded_trainers[0].exclusion_type == ExclusionType.GENDER
    assert result.exclusion_summary.gender == 1
    assert result.exclusion_summary.total == 1


def test_unknown_gender_and_no_preference_never_exclude():
    survey = ClientSurveyData(trainer_gender_preference="female")
    assert check_exclusion(make_trainer(gender=None), survey, DEFAULT_MATCHING_CONFIG) is None

    survey = ClientSurveyData(trainer_gender_preference="no_preference")
    assert check_exclusion(make_trainer(gender="male"), survey, DEFAULT_MATCHING_CONFIG) is None


def test_gender_comparison_is_case_insensitive():
    survey = ClientSurveyData(trainer_gender_preference="Female")
    assert check_exclusion(make_trainer(gender="female"), survey, DEFAULT_MATCHING_CONFIG) is None


def test_budget_ceiling_uses_hard_exclusion_percent():
    survey = ClientSurveyData(budget_range_max=100)
    too_expensive = make_trainer("t145", hourly_rate=145)
    within_ceiling = make_trainer("t135", hourly_rate=135)

    result = apply_hard_exclusions([too_expensive, within_ceiling], survey, DEFAULT_MATCHING_CONFIG)

    assert [t.id for t in result.included_trainers] == ["t135"]
    assert result.excluded_trainers[0].trainer.id == "t145"
    assert result.excluded_trainers[0].exclusion_type == ExclusionType.BUDGET
    assert "($140)" in result.excluded_trainers[0].reason


def test_budget_uses_cheapest_package_over_hourly_rate():
    survey = ClientSurveyData(budget_range_max=100)
    trainer = make_trainer(
        hourly_rate=200,
        package_options=[PackageOption(name="Block", sessions=10, price=120)],
    )
    assert check_exclusion(trainer, survey, DEFAULT_MATCHING_CONFIG) is None


def test_unknown_price_is_never_excluded():
    survey = ClientSurveyData(budget_range_max=50)
    assert check_exclusion(make_trainer(hourly_rate=None), survey, DEFAULT_MATCHING_CONFIG) is None


def test_first_failing_rule_decides_the_type():
    # Fails gender and budget; only gender is reported
    trainer = make_trainer(gender="male", hourly_rate=500)
    survey = ClientSurveyData(trainer_gender_preference="female", budget_range_max=50)

    result = apply_hard_exclusions([trainer], survey, DEFAULT_MATCHING_CONFIG)

    assert result.excluded_trainers[0].exclusion_type == ExclusionType.GENDER
    assert result.exclusion_summary.budget == 0
    assert result.exclusion_summary.total == 1


def test_in_person_client_excludes_online_only_trainer_unless_open_to_virtual():
    trainer = make_trainer(delivery_format=["Online coaching"])

    strict = ClientSurveyData(training_location_preference="in-person")
    exclusion = check_exclusion(trainer, strict, DEFAULT_MATCHING_CONFIG)
    assert exclusion[0] == ExclusionType.FORMAT

    open_client = ClientSurveyData(training_location_preference="in-person", open_to_virtual_coaching=True)
    assert check_exclusion(trainer, open_client, DEFAULT_MATCHING_CONFIG) is None


def test_online_client_excludes_in_person_only_trainer():
    trainer = make_trainer(delivery_format=["In-Person", "Gym"])
    survey = ClientSurveyData(training_location_preference="online", open_to_virtual_coaching=True)

    exclusion = check_exclusion(trainer, survey, DEFAULT_MATCHING_CONFIG)

    assert exclusion[0] == ExclusionType.FORMAT


def test_format_rule_falls_back_to_training_types_and_skips_unknown():
    survey = ClientSurveyData(training_location_preference="online")

    legacy = make_trainer(delivery_format=[], training_types=["Virtual sessions"])
    assert check_exclusion(legacy, survey, DEFAULT_MATCHING_CONFIG) is None

    unknown = make_trainer(delivery_format=[], training_types=[])
    assert check_exclusion(unknown, survey, DEFAULT_MATCHING_CONFIG) is None


def test_hybrid_client_never_excluded_on_format():
    survey = ClientSurveyData(training_location_preference="hybrid")
    trainer = make_trainer(delivery_format=["studio"])
    assert check_exclusion(trainer, survey, DEFAULT_MATCHING_CONFIG) is None


def test_asap_client_excludes_trainer_not_accepting_clients():
    survey = ClientSurveyData(start_timeline="asap")

    closed = make_trainer("closed", accepting_new_clients=False)
    unknown = make_trainer("unknown", accepting_new_clients=None)
    result = apply_hard_exclusions([closed, unknown], survey, DEFAULT_MATCHING_CONFIG)

    assert [t.id for t in result.included_trainers] == ["unknown"]
    assert result.exclusion_summary.availability == 1

    later = ClientSurveyData(start_timeline="within_month")
    assert check_exclusion(closed, later, DEFAULT_MATCHING_CONFIG) is None


def test_exclusions_disabled_by_flag_missing_config_or_missing_survey():
    trainers = [make_trainer("a", gender="male"), make_trainer("b", gender="female")]
    survey = ClientSurveyData(trainer_gender_preference="female")

    for result in (
        apply_hard_exclusions(trainers, survey, config_with(hard_exclusions=False)),
        apply_hard_exclusions(trainers, survey, None),
        apply_hard_exclusions(trainers, None, DEFAULT_MATCHING_CONFIG),
    ):
        assert [t.id for t in result.included_trainers] == ["a", "b"]
        assert result.excluded_trainers == []
        assert result.exclusion_summary.total == 0


def test_included_order_is_preserved():
    trainers = [make_trainer(str(i), gender="female" if i % 2 else "male") for i in range(6)]
    survey = ClientSurveyData(trainer_gender_preference="female")

    result = apply_hard_exclusions(trainers, survey, DEFAULT_MATCHING_CONFIG)

    assert [t.id for t in result.included_trainers] == ["1", "3", "5"]
    assert len(result.included_trainers) + len(result.excluded_trainers) == len(trainers)


def test_rule_catalogue_matches_evaluation_order():
    assert [rule["id"] for rule in HARD_EXCLUSION_RULES] == ["gender", "format", "budget", "availability"]

    # A trainer failing every rule is reported under the first catalogued rule
    trainer = make_trainer(gender="male", delivery_format=["gym"], hourly_rate=500, accepting_new_clients=False)
    survey = ClientSurveyData(
        trainer_gender_preference="female",
        training_location_preference="online",
        budget_range_max=50,
        start_timeline="asap",
    )
    exclusion_type, _ = check_exclusion(trainer, survey, DEFAULT_MATCHING_CONFIG)
    assert exclusion_type.value == HARD_EXCLUSION_RULES[0]["id"]


def test_configurable_rules_point_at_real_config_fields():
    for rule in HARD_EXCLUSION_RULES:
        if not rule["configurable"]:
            assert rule["config_key"] is None
            continue
        section, field = rule["config_key"].split(".")
        assert hasattr(getattr(DEFAULT_MATCHING_CONFIG, section), field)
