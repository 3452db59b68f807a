import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from cantera_backend import models  # noqa: F401
from cantera_backend.core.database import get_session
from cantera_backend.main import app


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    # Not used as a context manager: startup (file database + seeding) stays off
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def team(client):
    response = client.post("/teams", json={"name": "Infantil A", "category": "Infantil"})
    assert response.status_code == 200
    return response.json()


@pytest.fixture()
def squad(client, team):
    """Eleven players numbered 1..11 plus three substitutes."""
    players = []
    for number in range(1, 15):
        response = client.post(
            "/players",
            json={"name": f"Jugador {number}", "jersey_number": number, "team_id": team["id"]},
        )
        assert response.status_code == 200
        players.append(response.json())
    return players
