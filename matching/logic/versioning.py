"""
Config Version Lifecycle

A config version moves draft -> live -> archived. Exactly one version is live;
publishing a draft archives the previous live version in the same step. Only
drafts may be edited or deleted.

InMemoryVersionStore implements these rules without a database. The SQL-backed
store in matching.repository shares the same guards.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from .contracts import MatchingAlgorithmConfig, MatchingVersion, VersionStatus, DEFAULT_MATCHING_CONFIG
from .exceptions import VersionNotFoundError, VersionStateError


def ensure_draft(version_id: int, status: str, action: str) -> None:
    """Raise VersionStateError unless the version is still a draft."""
    if VersionStatus(status) != VersionStatus.DRAFT:
        raise VersionStateError(version_id, VersionStatus(status).value, action)


def clone_notes(source_version_number: int, notes: Optional[str]) -> str:
    return notes or f"Cloned from v{source_version_number}"


class InMemoryVersionStore:
    """Config versions held in a dict, for tests and single-process use."""

    def __init__(self, versions: Optional[List[MatchingVersion]] = None):
        self._versions: Dict[int, MatchingVersion] = {v.id: v for v in versions or []}
        self._next_id = max(self._versions, default=0) + 1

    # ------------------------------------------------------------------ reads

    def list_versions(self) -> List[MatchingVersion]:
        """Newest version number first."""
        return sorted(self._versions.values(), key=lambda v: v.version_number, reverse=True)

    def get(self, version_id: int) -> MatchingVersion:
        version = self._versions.get(version_id)
        if version is None:
            raise VersionNotFoundError(version_id)
        return version

    def get_live(self) -> Optional[MatchingVersion]:
        return next((v for v in self._versions.values() if v.status == VersionStatus.LIVE), None)

    # ----------------------------------------------------------------- writes

    def _next_version_number(self) -> int:
        return max((v.version_number for v in self._versions.values()), default=0) + 1

    def create_draft(
        self,
        name: str,
        notes: Optional[str] = None,
        config: Optional[MatchingAlgorithmConfig] = None
    ) -> MatchingVersion:
        version = MatchingVersion(
            id=self._next_id,
            name=name,
            version_number=self._next_version_number(),
            config=(config or DEFAULT_MATCHING_CONFIG).model_copy(deep=True),
            status=VersionStatus.DRAFT,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
        self._versions[version.id] = version
        self._next_id += 1
        return version

    def clone(self, source_id: int, notes: Optional[str] = None) -> MatchingVersion:
        source = self.get(source_id)
        return self.create_draft(
            name=source.name,
            notes=clone_notes(source.version_number, notes),
            config=source.config,
        )

    def update_draft(
        self,
        version_id: int,
        config: Optional[MatchingAlgorithmConfig] = None,
        name: Optional[str] = None,
        notes: Optional[str] = None
    ) -> MatchingVersion:
        version = self.get(version_id)
        ensure_draft(version_id, version.status, "update")

        updates = {}
        if config is not None:
            updates["config"] = config
        if name is not None:
            updates["name"] = name
        if notes is not None:
            updates["notes"] = notes

        updated = version.model_copy(update=updates)
        self._versions[version_id] = updated
        return updated

    def publish(self, version_id: int) -> MatchingVersion:
        version = self.get(version_id)
        ensure_draft(version_id, version.status, "publish")

        current = self.get_live()
        if current is not None:
            self._versions[current.id] = current.model_copy(update={"status": VersionStatus.ARCHIVED})

        published = version.model_copy(update={
            "status": VersionStatus.LIVE,
            "published_at": datetime.now(timezone.utc),
        })
        self._versions[version_id] = published
        return published

    def delete_draft(self, version_id: int) -> None:
        version = self.get(version_id)
        ensure_draft(version_id, version.status, "delete")
        del self._versions[version_id]
