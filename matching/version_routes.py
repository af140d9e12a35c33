"""
Matching Config Version Routes

Admin surface for the versioned algorithm config:
draft -> live -> archived, one live version at a time.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import get_session
from .logic.config_provider import ConfigProvider
from .logic.contracts import MatchingAlgorithmConfig, MatchingVersion
from .logic.exceptions import VersionNotFoundError, VersionStateError
from .logic.runner import get_config_provider
from .repository import MatchingVersionRepository


router = APIRouter(prefix="/matching-versions", tags=["matching-versions"])


class CreateVersionRequest(BaseModel):
    name: str = Field(..., min_length=1)
    notes: Optional[str] = None
    config: Optional[MatchingAlgorithmConfig] = None


class CloneVersionRequest(BaseModel):
    notes: Optional[str] = None


class UpdateVersionRequest(BaseModel):
    name: Optional[str] = None
    notes: Optional[str] = None
    config: Optional[MatchingAlgorithmConfig] = None


def _raise_http(error: Exception):
    if isinstance(error, VersionNotFoundError):
        raise HTTPException(status_code=404, detail=str(error))
    if isinstance(error, VersionStateError):
        raise HTTPException(status_code=409, detail=str(error))
    raise error


@router.get("", response_model=List[MatchingVersion], summary="List config versions")
def list_versions(db: Session = Depends(get_session)):
    return MatchingVersionRepository(db).list_versions()


@router.get("/live", response_model=MatchingVersion, summary="Current live version")
def get_live_version(db: Session = Depends(get_session)):
    live = MatchingVersionRepository(db).get_live()
    if live is None:
        raise HTTPException(status_code=404, detail="No live matching version")
    return live


@router.get("/{version_id}", response_model=MatchingVersion)
def get_version(version_id: int, db: Session = Depends(get_session)):
    try:
        return MatchingVersionRepository(db).get(version_id)
    except VersionNotFoundError as e:
        _raise_http(e)


@router.post("", response_model=MatchingVersion, status_code=201, summary="Create a draft")
def create_version(request: CreateVersionRequest, db: Session = Depends(get_session)):
    created = MatchingVersionRepository(db).create_draft(
        name=request.name,
        notes=request.notes,
        config=request.config,
    )
    db.commit()
    return created


@router.post("/{version_id}/clone", response_model=MatchingVersion, status_code=201)
def clone_version(
    version_id: int,
    request: Optional[CloneVersionRequest] = None,
    db: Session = Depends(get_session)
):
    try:
        cloned = MatchingVersionRepository(db).clone(
            version_id,
            notes=request.notes if request else None,
        )
        db.commit()
        return cloned
    except VersionNotFoundError as e:
        _raise_http(e)


@router.patch("/{version_id}", response_model=MatchingVersion, summary="Edit a draft")
def update_version(version_id: int, request: UpdateVersionRequest, db: Session = Depends(get_session)):
    try:
        updated = MatchingVersionRepository(db).update_draft(
            version_id,
            config=request.config,
            name=request.name,
            notes=request.notes,
        )
        db.commit()
        return updated
    except (VersionNotFoundError, VersionStateError) as e:
        _raise_http(e)


@router.post("/{version_id}/publish", response_model=MatchingVersion, summary="Make a draft live")
def publish_version(
    version_id: int,
    db: Session = Depends(get_session),
    config_provider: ConfigProvider = Depends(get_config_provider)
):
    try:
        published = MatchingVersionRepository(db).publish(version_id)
        db.commit()
    except (VersionNotFoundError, VersionStateError) as e:
        _raise_http(e)

    # Only after commit, so the next read sees the new live version
    config_provider.invalidate()
    return published


@router.delete("/{version_id}", status_code=204, summary="Delete a draft")
def delete_version(version_id: int, db: Session = Depends(get_session)):
    try:
        MatchingVersionRepository(db).delete_draft(version_id)
        db.commit()
    except (VersionNotFoundError, VersionStateError) as e:
        _raise_http(e)
