"""
Pytest fixtures shared by the matching tests.

Database tests run against an in-memory SQLite database that lives for one test.
"""

from contextlib import contextmanager

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import db as db_module
import matching.logic.runner as runner
from db import Base, get_session
import matching.models  # noqa: F401
from matching.logic.config_provider import ConfigProvider
from matching.logic.runner import get_config_provider
from matching.repository import DatabaseVersionStore
from matching.routes import router as matching_router
from matching.version_routes import router as version_router


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_scope(session_factory):
    """Same commit/rollback contract as db.get_db, bound to the test database."""

    @contextmanager
    def scope():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    return scope


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def config_provider(session_scope):
    return ConfigProvider(store=DatabaseVersionStore(session_scope), cache_ttl_seconds=0)


def _build_app():
    app = FastAPI()
    app.include_router(matching_router)
    app.include_router(version_router)
    return app


@pytest.fixture
def client(session_scope, config_provider):
    app = _build_app()

    def override_get_session():
        with session_scope() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_config_provider] = lambda: config_provider
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def wired_client(session_factory, monkeypatch):
    """
    App with no dependency overrides: requests go through db.get_session,
    db.get_db and the process-wide config provider, bound to the test database.
    """
    monkeypatch.setattr(db_module, "SessionLocal", session_factory)
    monkeypatch.setattr(runner, "_config_provider", None)
    with TestClient(_build_app()) as test_client:
        yield test_client
