"""
Pytest configuration and fixtures for typerace tests.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from typerace import models  # noqa: F401
from typerace.app import create_app
from typerace.core import get_session


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    app = create_app()

    def _override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    return TestClient(app)


@pytest.fixture
def login(client):
    """Log a user in through the API and return its id"""

    def _login(name, training_number="T-100"):
        response = client.post(
            "/users/login", json={"name": name, "training_number": training_number}
        )
        assert response.status_code == 200, response.text
        return response.json()["id"]

    return _login
