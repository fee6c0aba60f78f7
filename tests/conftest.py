import os

# Must be set before anything imports app.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LLM_PROVIDER"] = "none"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_SUBMISSIONS"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.seed import seed_catalog


@pytest.fixture
def db_session():
    """Fresh schema with the built-in catalog for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    seed_catalog(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    yield TestClient(app)
    app.dependency_overrides.clear()


STRONG_PASSWORD = "Sup3r$ecret"


@pytest.fixture
def register_user(client):
    """Register through the API and return (user_json, token)"""

    def _register(email="ada@example.com", username="ada", password=STRONG_PASSWORD):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "username": username},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], body["token"]

    return _register
