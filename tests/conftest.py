"""
Shared fixtures: an in-memory SQLite database per test, a repository
bound to it, record factories, and an API client wired to the same
session.
"""
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agency_crm.core.dependencies import get_db
from agency_crm.database.models import Base
from agency_crm.main import app
from agency_crm.repositories.crm_repository import CRMRepository


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def repository(db):
    return CRMRepository(db)


@pytest.fixture
def make_user(repository):
    counter = {"n": 0}

    def _make(role: str = "agent", **overrides: Any):
        counter["n"] += 1
        data: Dict[str, Any] = {
            "username": f"user{counter['n']}",
            "full_name": f"User {counter['n']}",
            "role": role,
        }
        data.update(overrides)
        return repository.create_user(data)

    return _make


@pytest.fixture
def make_agent(repository):
    def _make(**overrides: Any):
        data: Dict[str, Any] = {"first_name": "Alex", "last_name": "Agent"}
        data.update(overrides)
        return repository.create_agent(data)

    return _make


@pytest.fixture
def make_lead(repository):
    def _make(**overrides: Any):
        data: Dict[str, Any] = {
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane@example.com",
            "phone_number": "555-0100",
        }
        data.update(overrides)
        return repository.create_lead(data)

    return _make


@pytest.fixture
def make_client(repository):
    def _make(**overrides: Any):
        data: Dict[str, Any] = {"name": "JANE DOE", "email": "jane@example.com"}
        data.update(overrides)
        return repository.create_client(data)

    return _make


@pytest.fixture
def make_policy(repository, make_agent):
    def _make(**overrides: Any):
        data: Dict[str, Any] = {"policy_number": "POL-1", "carrier": "Acme Life"}
        data.update(overrides)
        if "agent_id" not in data:
            data["agent_id"] = make_agent().id
        return repository.create_policy(data)

    return _make


@pytest.fixture
def api_client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin(make_user):
    return make_user(role="admin")


@pytest.fixture
def auth():
    def _headers(user) -> Dict[str, str]:
        return {"X-User-Id": str(user.id)}

    return _headers
