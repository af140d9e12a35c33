"""
Config Provider

Supplies the effective algorithm configuration to the engine: the live version
when one exists, otherwise the documented defaults. Admin screens can also read
a draft under edit.
"""

import logging
import time
from typing import Callable, Dict, Optional

from .contracts import (
    MatchingAlgorithmConfig,
    WeightConfig,
    DEFAULT_MATCHING_CONFIG,
)
from .constants import WeightCategory
from .versioning import InMemoryVersionStore

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300


class ConfigProvider:
    """
    Reads config versions from a store and caches the live config briefly.

    Args:
        store: Any object with get(id) and get_live() (in-memory or SQL repository)
        cache_ttl_seconds: How long the live config is reused; 0 disables caching
        clock: Monotonic clock, injectable for tests
    """

    def __init__(
        self,
        store=None,
        cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.store = store if store is not None else InMemoryVersionStore()
        self.cache_ttl_seconds = cache_ttl_seconds
        self._clock = clock
        self._cached: Optional[MatchingAlgorithmConfig] = None
        self._cached_at: Optional[float] = None

    def invalidate(self) -> None:
        """Drop the cached live config (call after publishing)."""
        self._cached = None
        self._cached_at = None

    def get_active_config(self) -> MatchingAlgorithmConfig:
        now = self._clock()
        if (
            self._cached is not None
            and self._cached_at is not None
            and now - self._cached_at < self.cache_ttl_seconds
        ):
            return self._cached

        live = self.store.get_live()
        if live is None:
            logger.info("No live matching version, using default config")
            config = DEFAULT_MATCHING_CONFIG
        else:
            logger.info(f"Using live matching version v{live.version_number} ({live.name})")
            config = live.config

        self._cached = config
        self._cached_at = now
        return config

    def get_live_version_weights(self) -> Dict[WeightCategory, WeightConfig]:
        """Live weights, with documented defaults filled in for any missing category."""
        weights = dict(DEFAULT_MATCHING_CONFIG.weights)
        weights.update(self.get_active_config().weights)
        return weights

    def get_draft_config(self, version_id: int) -> MatchingAlgorithmConfig:
        """Config of a specific version, e.g. a draft open in the editor. Never cached."""
        return self.store.get(version_id).config
