from cantera_backend.models.match_model import MatchEvent
from cantera_backend.routes import match_routes


def _create_match(client, team):
    response = client.post("/matches", json={"team_id": team["id"], "competition": "liga", "matchday": 3})
    assert response.status_code == 201
    return response.json()


def _lineup_body(match, squad, **overrides):
    ids = [player["id"] for player in squad]
    body = {
        "match_id": match["id"],
        "formation": "4-4-2",
        "starters": ids[:11],
        "bench": ids[11:13],
        "unavailable": ids[13:],
        "assignments": [],
    }
    body.update(overrides)
    return body


def test_new_match_defaults(client, team):
    match = _create_match(client, team)
    assert match["home_team_id"] == team["id"]
    assert match["is_home"] is True
    assert match["formation"] == "4-3-3"
    assert match["lineup"] == []
    assert (match["goals_for"], match["goals_against"]) == (0, 0)


def test_save_lineup(client, team, squad):
    match = _create_match(client, team)
    ids = [player["id"] for player in squad]

    response = client.put(
        "/matches/lineup",
        json=_lineup_body(match, squad, assignments=[f"LS:{ids[0]}"]),
    )
    assert response.status_code == 200
    data = response.json()

    assert data["formation"] == "4-4-2"
    field = {slot["position"]: slot["player_id"] for slot in data["lineup"] if slot["role"] == "field"}
    assert len(field) == 11
    assert field["LS"] == ids[0]
    assert field["GK"] == ids[1]
    assert [s["player_id"] for s in data["lineup"] if s["role"] == "bench"] == ids[11:13]
    assert [s["player_id"] for s in data["lineup"] if s["role"] == "unavailable"] == ids[13:]
    assert data["dropped_assignments"] == []

    player_ids = [slot["player_id"] for slot in data["lineup"]]
    assert len(player_ids) == len(set(player_ids))


def test_lineup_resave_keeps_minutes(client, team, squad):
    match = _create_match(client, team)
    ids = [player["id"] for player in squad]
    client.put("/matches/lineup", json=_lineup_body(match, squad))

    response = client.put("/matches/minutes", json={
        "match_id": match["id"],
        "slots": [{"player_id": ids[0], "minutes": 70}, {"player_id": ids[11], "minutes": 10}],
    })
    assert response.status_code == 200

    # Swap a starter with a substitute; recorded minutes follow the players
    starters = ids[1:11] + [ids[11]]
    bench = [ids[0], ids[12]]
    response = client.put(
        "/matches/lineup",
        json=_lineup_body(match, squad, starters=starters, bench=bench),
    )
    minutes = {slot["player_id"]: slot["minutes"] for slot in response.json()["lineup"]}
    assert minutes[ids[0]] == 70
    assert minutes[ids[11]] == 10


def test_permissive_lineup_reports_dropped_assignments(client, team, squad):
    match = _create_match(client, team)
    response = client.put(
        "/matches/lineup",
        json=_lineup_body(match, squad, assignments=["GK:9999", "ZZ:1"]),
    )
    assert response.status_code == 200
    assert len(response.json()["dropped_assignments"]) == 2


def test_strict_lineup_rejects_dropped_assignments(client, team, squad, monkeypatch):
    monkeypatch.setattr(match_routes, "LINEUP_STRICT_VALIDATION", True)
    match = _create_match(client, team)

    response = client.put(
        "/matches/lineup",
        json=_lineup_body(match, squad, assignments=["GK:9999"]),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Asignaciones de posición inválidas"
    assert response.json()["problems"]


def test_players_from_other_teams_are_ignored(client, team, squad):
    other = client.post("/teams", json={"name": "Rival"}).json()
    stranger = client.post("/players", json={"name": "Ajeno", "team_id": other["id"]}).json()
    match = _create_match(client, team)

    response = client.put(
        "/matches/lineup",
        json=_lineup_body(match, squad, starters=[stranger["id"]], bench=[], unavailable=[]),
    )
    assert response.json()["lineup"] == []


def test_finished_match_lineup_is_locked(client, team, squad):
    match = _create_match(client, team)
    response = client.put("/matches", json={"id": match["id"], "finished": True})
    assert response.json()["finished"] is True

    response = client.put("/matches/lineup", json=_lineup_body(match, squad))
    assert response.status_code == 400
    assert response.json() == {"error": "El partido ya ha finalizado"}


def test_minutes_for_player_outside_lineup(client, team, squad):
    match = _create_match(client, team)
    response = client.put("/matches/minutes", json={
        "match_id": match["id"],
        "slots": [{"player_id": squad[0]["id"], "minutes": 10}],
    })
    assert response.status_code == 400
    assert response.json() == {"error": "El jugador no está en la convocatoria"}


def test_negative_minutes_are_invalid(client, team, squad):
    match = _create_match(client, team)
    response = client.put("/matches/minutes", json={
        "match_id": match["id"],
        "slots": [{"player_id": squad[0]["id"], "minutes": -5}],
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Datos inválidos"}


def test_event_timeline(client, team, squad):
    match = _create_match(client, team)
    scorer = squad[9]["id"]

    response = client.post("/matches/events", json={
        "match_id": match["id"], "type": "gol", "period": "second",
        "relative_minute": 12, "player_id": scorer,
    })
    assert response.status_code == 201
    goal = response.json()
    assert goal["minute"] == 52
    assert goal["team_id"] == team["id"]
    assert goal["minute_label"] == "52' · 2ª parte"
    assert goal["data"] == {"period": "second", "relativeMinute": 12}

    client.post("/matches/events", json={
        "match_id": match["id"], "type": "amarilla", "period": "first", "relative_minute": 30,
        "player_id": scorer,
    })

    detail = client.get("/matches", params={"id": match["id"]}).json()
    assert detail["goals_for"] == 1
    assert [e["type"] for e in detail["events"]] == ["amarilla", "gol"]

    response = client.put("/matches/events", json={"id": goal["id"], "period": "first"})
    assert response.json()["minute"] == 12
    assert response.json()["minute_label"] == "12'"

    events = client.get("/matches/events", params={"partidoId": match["id"]}).json()
    assert [e["type"] for e in events] == ["gol", "amarilla"]

    assert client.delete("/matches/events", params={"id": goal["id"]}).json() == {"ok": True}
    assert client.get("/matches", params={"id": match["id"]}).json()["goals_for"] == 0


def test_unknown_event_type_is_invalid(client, team):
    match = _create_match(client, team)
    response = client.post("/matches/events", json={"match_id": match["id"], "type": "penalti"})
    assert response.status_code == 400


def test_list_and_delete_matches(client, team, squad):
    match = _create_match(client, team)
    client.put("/matches/lineup", json=_lineup_body(match, squad))

    listed = client.get("/matches", params={"equipoId": team["id"]}).json()
    assert [row["id"] for row in listed] == [match["id"]]
    assert listed[0]["formation"] == "4-4-2"

    assert client.delete("/matches", params={"id": match["id"]}).json() == {"ok": True}
    response = client.get("/matches", params={"id": match["id"]})
    assert response.status_code == 404
    assert response.json() == {"error": "Partido no encontrado"}


def test_finished_match_minutes_are_locked(client, team, squad):
    match = _create_match(client, team)
    client.put("/matches/lineup", json=_lineup_body(match, squad))
    client.put("/matches", json={"id": match["id"], "finished": True})

    response = client.put("/matches/minutes", json={
        "match_id": match["id"],
        "slots": [{"player_id": squad[0]["id"], "minutes": 80}],
    })
    assert response.status_code == 400
    assert response.json() == {"error": "El partido ya ha finalizado"}

    # Reopening the match allows edits again
    client.put("/matches", json={"id": match["id"], "finished": False})
    response = client.put("/matches/minutes", json={
        "match_id": match["id"],
        "slots": [{"player_id": squad[0]["id"], "minutes": 80}],
    })
    assert response.status_code == 200


def test_kickoff_is_stored_as_club_wall_time(client, team):
    late = client.post("/matches", json={"team_id": team["id"], "kickoff": "2025-03-08T11:30:00"})
    assert late.status_code == 201
    assert late.json()["kickoff"] == "2025-03-08T11:30:00"

    early = client.post("/matches", json={"team_id": team["id"]}).json()
    updated = client.put("/matches", json={"id": early["id"], "kickoff": "2025-03-01T10:00:00"})
    assert updated.json()["kickoff"] == "2025-03-01T10:00:00"

    listed = client.get("/matches", params={"equipoId": team["id"]}).json()
    assert [row["id"] for row in listed] == [early["id"], late.json()["id"]]


def test_kickoff_with_utc_offset_is_invalid(client, team):
    response = client.post("/matches", json={"team_id": team["id"], "kickoff": "2025-03-08T11:30:00+01:00"})
    assert response.status_code == 400
    assert response.json() == {"error": "Datos inválidos"}


def test_events_get_a_creation_time(client, team, session):
    match = _create_match(client, team)
    response = client.post("/matches/events", json={"match_id": match["id"], "type": "otro"})
    assert response.status_code == 201

    event = session.get(MatchEvent, response.json()["id"])
    assert event.created_at is not None
    assert event.created_at.tzinfo is None
