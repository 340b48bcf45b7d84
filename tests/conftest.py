from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from habit_tracker.api.dependencies import get_habit_repository
from habit_tracker.core.config import settings
from habit_tracker.db.repositories.habit import InMemoryHabitRepository
from habit_tracker.db.session import get_db
from habit_tracker.main import create_app
from habit_tracker.rules.validator import HabitRuleValidator


@pytest.fixture
def validator() -> HabitRuleValidator:
    return HabitRuleValidator()


@pytest.fixture
def memory_repository() -> InMemoryHabitRepository:
    return InMemoryHabitRepository()


@pytest.fixture
def engine():
    # One shared in-memory SQLite connection per test
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    from habit_tracker.models import habit  # noqa: F401
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_app(engine, monkeypatch) -> Iterator[FastAPI]:
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "database")

    def _override_get_db():
        with Session(engine) as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    return TestClient(test_app)


@pytest.fixture
def memory_client(memory_repository, monkeypatch) -> Iterator[TestClient]:
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "memory")
    app = create_app()
    app.dependency_overrides[get_habit_repository] = lambda: memory_repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
