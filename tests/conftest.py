"""Pytest fixtures for the Outreach CRM API tests.

Each test gets a fresh in-memory SQLite database (foreign keys enforced, so
ON DELETE CASCADE behaves as in production) and a test client whose session
and authentication dependencies are overridden.
"""

import os

# Configure before the application modules read the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.pop("SENTRY_DSN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from outreach_crm.auth.deps import require_user
from outreach_crm.db import models  # noqa: F401  registers the mappers
from outreach_crm.db.base import Base
from outreach_crm.db.deps import get_db
from outreach_crm.db.session import build_engine
from outreach_crm.main import app

TEST_USER = {"id": "5b8a6f8e-test-user", "email": "tester@example.org"}


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection in a test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """A session for arranging and inspecting rows directly."""
    session = session_factory()
    yield session
    session.close()


def _override_get_db(session_factory):
    def override():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    return override


@pytest.fixture
def client(session_factory):
    """Create a test client backed by the test database.

    Returns:
        TestClient: A test client authenticated as TEST_USER.
    """
    app.dependency_overrides[get_db] = _override_get_db(session_factory)
    app.dependency_overrides[require_user] = lambda: TEST_USER
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def unauthenticated_client(session_factory):
    """Test client that keeps the real bearer-token check."""
    app.dependency_overrides[get_db] = _override_get_db(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_company_data():
    """Sample company data for testing creation.

    Returns:
        dict: Valid company creation payload in the wrapped request shape.
    """
    return {
        "company": {
            "name": "Greater Manchester Robotics Ltd",
            "industry": "Manufacturing",
            "location": "Manchester",
            "contactName": "Priya Shah",
            "contactRole": "Head of L&D",
            "email": "priya.shah@gmrobotics.example",
            "phone": "0161 555 0100",
            "website": "https://gmrobotics.example",
            "sector": "Advanced Manufacturing",
            "aiToolsDelivered": ["ChatGPT", "Copilot"],
            "additionalSignUps": ["Bootcamp"],
            "valueToCollege": 2500.5,
            "engagementNotes": "Met at the spring employer forum",
        },
        "tagIds": [],
    }


@pytest.fixture
def create_company(client):
    """Factory creating a company through the API and returning its JSON."""

    def _create(name: str = "Acme Training Co", tag_ids: list | None = None, **fields):
        payload = {"company": {"name": name, **fields}, "tagIds": tag_ids or []}
        response = client.post("/api/companies", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_tag(client):
    """Factory creating a tag through the API and returning its JSON."""

    def _create(name: str, tag_type: str = "Sector"):
        response = client.post("/api/tags", json={"name": name, "type": tag_type})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_resource(client):
    """Factory creating a resource through the API and returning its JSON."""

    def _create(title: str = "Intro to AI slide deck", resource_type: str = "Slide Deck"):
        response = client.post(
            "/api/resources",
            json={
                "title": title,
                "type": resource_type,
                "link": "https://resources.example/ai-intro",
                "description": "Starter deck for employer sessions",
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
