import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from config import Settings
from database import create_db_and_tables
from main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture()
def settings() -> Settings:
    """Isolated configuration: fresh in-memory database per test"""
    return Settings(database_url="sqlite://", jwt_secret=TEST_SECRET)


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    # entering the context runs the startup hook that creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def session(app):
    create_db_and_tables(app.state.engine)
    with Session(app.state.engine) as db_session:
        yield db_session


def _login(client, username: str, password: str = "secret123") -> dict:
    """Register (if needed) and log in; returns the Authorization header"""
    client.post("/register", json={"username": username, "password": password})
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def alice(client) -> dict:
    return _login(client, "alice")


@pytest.fixture()
def bob(client) -> dict:
    return _login(client, "bob")


@pytest.fixture()
def login_as(client):
    def _login_as(username: str, password: str = "secret123") -> dict:
        return _login(client, username, password)

    return _login_as
