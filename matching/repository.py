"""
SQL-backed store for matching config versions.

Same operations and lifecycle guards as InMemoryVersionStore. Writes only
flush; the caller's session scope (db.get_db) commits or rolls back, so a
publish archives the old live version and promotes the draft together.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from matching.models import MatchingAlgorithmVersion
from matching.logic.adapter import version_from_row, config_to_json
from matching.logic.contracts import MatchingAlgorithmConfig, MatchingVersion, VersionStatus, DEFAULT_MATCHING_CONFIG
from matching.logic.exceptions import VersionNotFoundError
from matching.logic.versioning import ensure_draft, clone_notes

logger = logging.getLogger(__name__)


class MatchingVersionRepository:
    def __init__(self, db: Session):
        self.db = db

    def _row(self, version_id: int) -> MatchingAlgorithmVersion:
        row = self.db.get(MatchingAlgorithmVersion, version_id)
        if row is None:
            raise VersionNotFoundError(version_id)
        return row

    def _live_row(self) -> Optional[MatchingAlgorithmVersion]:
        return (
            self.db.query(MatchingAlgorithmVersion)
            .filter(MatchingAlgorithmVersion.status == VersionStatus.LIVE.value)
            .first()
        )

    # ------------------------------------------------------------------ reads

    def list_versions(self) -> List[MatchingVersion]:
        rows = (
            self.db.query(MatchingAlgorithmVersion)
            .order_by(MatchingAlgorithmVersion.version_number.desc())
            .all()
        )
        return [version_from_row(r) for r in rows]

    def get(self, version_id: int) -> MatchingVersion:
        return version_from_row(self._row(version_id))

    def get_live(self) -> Optional[MatchingVersion]:
        row = self._live_row()
        return version_from_row(row) if row else None

    # ----------------------------------------------------------------- writes

    def create_draft(
        self,
        name: str,
        notes: Optional[str] = None,
        config: Optional[MatchingAlgorithmConfig] = None
    ) -> MatchingVersion:
        current_max = self.db.query(func.max(MatchingAlgorithmVersion.version_number)).scalar()
        row = MatchingAlgorithmVersion(
            version_number=(current_max or 0) + 1,
            name=name,
            status=VersionStatus.DRAFT.value,
            config=config_to_json(config or DEFAULT_MATCHING_CONFIG),
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(row)
        self.db.flush()
        logger.info(f"📝 Created draft matching version v{row.version_number} ({name})")
        return version_from_row(row)

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
        row = self._row(version_id)
        ensure_draft(version_id, row.status, "update")

        if config is not None:
            row.config = config_to_json(config)
        if name is not None:
            row.name = name
        if notes is not None:
            row.notes = notes
        self.db.flush()
        return version_from_row(row)

    def publish(self, version_id: int) -> MatchingVersion:
        row = self._row(version_id)
        ensure_draft(version_id, row.status, "publish")

        current = self._live_row()
        if current is not None:
            current.status = VersionStatus.ARCHIVED.value
            # At most one live row at any flush
            self.db.flush()

        row.status = VersionStatus.LIVE.value
        row.published_at = datetime.now(timezone.utc)
        self.db.flush()
        logger.info(f"🚀 Published matching version v{row.version_number}")
        return version_from_row(row)

    def delete_draft(self, version_id: int) -> None:
        row = self._row(version_id)
        ensure_draft(version_id, row.status, "delete")
        self.db.delete(row)
        self.db.flush()


class DatabaseVersionStore:
    """
    Read-only store that opens a short session per read, so a long-lived
    ConfigProvider can sit on top of it.
    """

    def __init__(self, session_scope: Callable):
        self.session_scope = session_scope

    def get(self, version_id: int) -> MatchingVersion:
        with self.session_scope() as db:
            return MatchingVersionRepository(db).get(version_id)

    def get_live(self) -> Optional[MatchingVersion]:
        with self.session_scope() as db:
            return MatchingVersionRepository(db).get_live()
