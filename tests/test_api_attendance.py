import pytest


@pytest.fixture()
def training(client, team):
    response = client.post("/training-sessions", json={
        "equipoId": team["id"],
        "startDate": "2025-01-06",
        "daysOfWeek": [1],
        "startTime": "18:00",
        "endTime": "19:30",
    })
    return response.json()[0]


def _entries(squad, *attended):
    return [
        {"jugadorId": player["id"], "asistio": value}
        for player, value in zip(squad, attended)
    ]


def test_save_attendance_for_session(client, team, squad, training):
    response = client.post("/attendance", json={
        "equipoId": team["id"],
        "entrenamientoId": training["id"],
        "registros": _entries(squad, True, True, False, False),
    })
    assert response.status_code == 200
    saved = response.json()
    assert len(saved) == 4
    assert saved[0]["fecha"] == "2025-01-06"

    summary = client.get("/attendance/summary", params={"equipoId": team["id"]}).json()
    assert summary["percentage"] == 50


def test_save_replaces_previous_records(client, team, squad, training):
    body = {"equipoId": team["id"], "entrenamientoId": training["id"]}
    client.post("/attendance", json={**body, "registros": _entries(squad, True, True, True)})
    client.post("/attendance", json={**body, "registros": _entries(squad, False)})

    records = client.get("/attendance", params={"entrenamientoId": training["id"]}).json()
    assert len(records) == 1
    assert records[0]["asistio"] is False


def test_attendance_by_date(client, team, squad):
    response = client.post("/attendance", json={
        "equipoId": team["id"],
        "fecha": "2025-01-10",
        "registros": [{"jugadorId": squad[0]["id"], "asistio": False, "motivo": "Lesión"}],
    })
    assert response.status_code == 200

    records = client.get("/attendance", params={"equipoId": team["id"], "fecha": "2025-01-10"}).json()
    assert records[0]["motivo"] == "Lesión"
    assert client.get("/attendance", params={"equipoId": team["id"], "fecha": "2025-01-11"}).json() == []

    history = client.get("/attendance", params={"jugadorId": squad[0]["id"]}).json()
    assert len(history) == 1

    response = client.delete("/attendance", params={"equipoId": team["id"], "fecha": "2025-01-10"})
    assert response.json() == {"ok": True}
    assert client.get("/attendance", params={"jugadorId": squad[0]["id"]}).json() == []


def test_attendance_needs_session_or_date(client, team, squad):
    response = client.post("/attendance", json={"equipoId": team["id"], "registros": []})
    assert response.status_code == 400
    assert response.json() == {"error": "Datos inválidos"}

    response = client.delete("/attendance", params={"equipoId": team["id"]})
    assert response.status_code == 400


def test_session_must_belong_to_team(client, team, training):
    other = client.post("/teams", json={"name": "Cadete B"}).json()
    response = client.post("/attendance", json={
        "equipoId": other["id"], "entrenamientoId": training["id"], "registros": [],
    })
    assert response.status_code == 400
    assert response.json() == {"error": "El entrenamiento no pertenece al equipo"}


def test_deleting_session_drops_its_attendance(client, team, squad, training):
    client.post("/attendance", json={
        "equipoId": team["id"],
        "entrenamientoId": training["id"],
        "registros": _entries(squad, True),
    })
    response = client.delete("/training-sessions", params={"id": training["id"]})
    assert response.json() == {"ok": True}
    assert client.get("/attendance", params={"jugadorId": squad[0]["id"]}).json() == []


def test_empty_summary(client, team):
    summary = client.get("/attendance/summary", params={"equipoId": team["id"]}).json()
    assert summary["percentage"] == 0
