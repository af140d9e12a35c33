"""
Tests for the config version lifecycle and the cached config provider.
"""

import pytest

from matching.logic.config_provider import ConfigProvider
from matching.logic.constants import WeightCategory
from matching.logic.contracts import (
    MatchingAlgorithmConfig,
    WeightConfig,
    VersionStatus,
    DEFAULT_MATCHING_CONFIG,
)
from matching.logic.exceptions import VersionNotFoundError, VersionStateError
from matching.logic.versioning import InMemoryVersionStore, ensure_draft


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _config(goals_weight):
    return MatchingAlgorithmConfig(weights={WeightCategory.GOALS_SPECIALTIES: WeightConfig(value=goals_weight)})


# =============================================================================
# LIFECYCLE
# =============================================================================

def test_publish_archives_previous_live_version():
    store = InMemoryVersionStore()
    v1 = store.create_draft("Launch")
    store.publish(v1.id)
    v2 = store.create_draft("Tweak")

    published = store.publish(v2.id)

    assert published.status == VersionStatus.LIVE
    assert published.published_at is not None
    assert store.get(v1.id).status == VersionStatus.ARCHIVED
    assert store.get_live().id == v2.id
    assert [v.status for v in store.list_versions()].count(VersionStatus.LIVE) == 1


def test_only_drafts_can_change():
    store = InMemoryVersionStore()
    v1 = store.create_draft("Launch")
    store.publish(v1.id)

    with pytest.raises(VersionStateError):
        store.update_draft(v1.id, name="Renamed")
    with pytest.raises(VersionStateError):
        store.publish(v1.id)
    with pytest.raises(VersionStateError):
        store.delete_draft(v1.id)


def test_update_and_delete_draft():
    store = InMemoryVersionStore()
    draft = store.create_draft("Draft", notes="first pass")

    updated = store.update_draft(draft.id, config=_config(40), notes="goals up")
    assert updated.config.weight_of(WeightCategory.GOALS_SPECIALTIES) == 40
    assert updated.notes == "goals up"
    assert updated.name == "Draft"

    store.delete_draft(draft.id)
    with pytest.raises(VersionNotFoundError):
        store.get(draft.id)


def test_clone_creates_next_draft():
    store = InMemoryVersionStore()
    v1 = store.create_draft("Launch", config=_config(30))
    store.publish(v1.id)

    clone = store.clone(v1.id)

    assert clone.status == VersionStatus.DRAFT
    assert clone.version_number == 2
    assert clone.notes == "Cloned from v1"
    assert clone.config.weight_of(WeightCategory.GOALS_SPECIALTIES) == 30
    assert [v.version_number for v in store.list_versions()] == [2, 1]


def test_unknown_version():
    with pytest.raises(VersionNotFoundError):
        InMemoryVersionStore().publish(99)


def test_ensure_draft():
    ensure_draft(1, "draft", "publish")
    with pytest.raises(VersionStateError) as excinfo:
        ensure_draft(1, "archived", "update")
    assert excinfo.value.status == "archived"
    assert excinfo.value.action == "update"


# =============================================================================
# CONFIG PROVIDER
# =============================================================================

def test_defaults_without_live_version():
    provider = ConfigProvider(store=InMemoryVersionStore())
    assert provider.get_active_config() == DEFAULT_MATCHING_CONFIG
    assert provider.get_live_version_weights()[WeightCategory.GOALS_SPECIALTIES].value == 25


def test_live_weights_fill_missing_categories():
    store = InMemoryVersionStore()
    store.publish(store.create_draft("Partial", config=_config(50)).id)

    weights = ConfigProvider(store=store).get_live_version_weights()

    assert set(weights) == set(WeightCategory)
    assert weights[WeightCategory.GOALS_SPECIALTIES].value == 50
    assert weights[WeightCategory.LOCATION_FORMAT].value == 20


def test_live_config_cached_until_ttl():
    clock = FakeClock()
    store = InMemoryVersionStore()
    store.publish(store.create_draft("v1", config=_config(30)).id)
    provider = ConfigProvider(store=store, cache_ttl_seconds=300, clock=clock)

    assert provider.get_active_config().weight_of(WeightCategory.GOALS_SPECIALTIES) == 30

    store.publish(store.create_draft("v2", config=_config(35)).id)
    clock.now = 299
    assert provider.get_active_config().weight_of(WeightCategory.GOALS_SPECIALTIES) == 30

    clock.now = 301
    assert provider.get_active_config().weight_of(WeightCategory.GOALS_SPECIALTIES) == 35


def test_invalidate_drops_cache():
    store = InMemoryVersionStore()
    store.publish(store.create_draft("v1", config=_config(30)).id)
    provider = ConfigProvider(store=store)
    provider.get_active_config()

    store.publish(store.create_draft("v2", config=_config(35)).id)
    provider.invalidate()

    assert provider.get_active_config().weight_of(WeightCategory.GOALS_SPECIALTIES) == 35


def test_draft_config_read_directly():
    store = InMemoryVersionStore()
    draft = store.create_draft("Editing", config=_config(33))
    provider = ConfigProvider(store=store)

    assert provider.get_draft_config(draft.id).weight_of(WeightCategory.GOALS_SPECIALTIES) == 33
    assert provider.get_active_config() == DEFAULT_MATCHING_CONFIG


def test_total_weight_is_advisory_and_serialized():
    assert DEFAULT_MATCHING_CONFIG.total_weight == 100
    assert _config(50).total_weight == 50
    assert DEFAULT_MATCHING_CONFIG.model_dump()["total_weight"] == 100

    # Round-trips through the stored form without tripping validation
    restored = MatchingAlgorithmConfig.model_validate(_config(50).model_dump(mode="json"))
    assert restored.weight_of(WeightCategory.GOALS_SPECIALTIES) == 50
