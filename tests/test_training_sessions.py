from datetime import datetime

from cantera_backend.services.training import (
    expand_sessions, js_weekday, normalize_weekdays, parse_clock_time,
)


def test_weekly_recurrence_generates_requested_days():
    sessions = expand_sessions("2025-01-06", "2025-01-12", [1, 3], "18:00")
    assert [s.starts_at for s in sessions] == [
        datetime(2025, 1, 6, 18, 0),
        datetime(2025, 1, 8, 18, 0),
    ]
    assert all(s.ends_at is None for s in sessions)


def test_end_time_kept_only_when_after_start():
    sessions = expand_sessions("2025-01-06", "2025-01-06", [1], "18:00", "19:30")
    assert sessions[0].ends_at == datetime(2025, 1, 6, 19, 30)

    sessions = expand_sessions("2025-01-06", "2025-01-06", [1], "18:00", "17:00")
    assert sessions[0].ends_at is None


def test_missing_end_date_uses_start_date():
    sessions = expand_sessions("2025-01-06", None, [1, 2, 3], "18:00")
    assert len(sessions) == 1


def test_nothing_generated_for_bad_input():
    assert expand_sessions("2025-01-06", "2025-01-12", [], "18:00") == []
    assert expand_sessions("2025-01-12", "2025-01-06", [1], "18:00") == []
    assert expand_sessions("not-a-date", "2025-01-12", [1], "18:00") == []
    assert expand_sessions("2025-01-06", "2025-01-12", [1], "") == []
    assert expand_sessions("2025-01-06", "2025-01-12", [7, -1], "18:00") == []


def test_sessions_stay_inside_range_and_weekdays():
    sessions = expand_sessions("2025-02-01", "2025-03-31", [0, 5], "10:00")
    assert sessions
    for session in sessions:
        assert datetime(2025, 2, 1) <= session.starts_at < datetime(2025, 4, 1)
        assert js_weekday(session.starts_at.date()) in (0, 5)


def test_timezone_offset_converts_to_club_time():
    # Browser in UTC+1 (offset -60) matches Madrid in winter
    sessions = expand_sessions("2025-01-06", None, [1], "18:00", timezone_offset=-60)
    assert sessions[0].starts_at == datetime(2025, 1, 6, 18, 0)

    # Browser in UTC: 18:00 UTC is 19:00 in Madrid
    sessions = expand_sessions("2025-01-06", None, [1], "18:00", timezone_offset=0)
    assert sessions[0].starts_at == datetime(2025, 1, 6, 19, 0)


def test_helpers():
    assert js_weekday(datetime(2025, 1, 5).date()) == 0
    assert normalize_weekdays([3, 1, 3, 9]) == [3, 1]
    assert parse_clock_time("18:30:00").minute == 30
    assert parse_clock_time("18") is None


def test_create_and_list_training_sessions(client, team):
    response = client.post("/training-sessions", json={
        "equipoId": team["id"],
        "startDate": "2025-01-06",
        "endDate": "2025-01-12",
        "daysOfWeek": [1, 3],
        "startTime": "18:00",
    })
    assert response.status_code == 200
    created = response.json()
    assert [s["inicio"] for s in created] == ["2025-01-06T18:00:00", "2025-01-08T18:00:00"]
    assert created[0]["fin"] is None
    assert created[0]["equipoId"] == team["id"]

    response = client.get(
        "/training-sessions",
        params={"equipoId": team["id"], "from": "2025-01-07", "to": "2025-01-31"},
    )
    assert [s["inicio"] for s in response.json()] == ["2025-01-08T18:00:00"]


def test_empty_recurrence_is_rejected(client, team):
    response = client.post("/training-sessions", json={
        "equipoId": team["id"],
        "startDate": "2025-01-06",
        "daysOfWeek": [],
        "startTime": "18:00",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "No se generaron entrenamientos con los datos proporcionados"}


def test_recurrence_for_unknown_team(client):
    response = client.post("/training-sessions", json={
        "equipoId": 999,
        "startDate": "2025-01-06",
        "daysOfWeek": [1],
        "startTime": "18:00",
    })
    assert response.status_code == 404


def test_list_without_team_is_empty(client):
    assert client.get("/training-sessions").json() == []


def test_sessions_with_timezone_offset_are_stored_as_club_time(client, team):
    response = client.post("/training-sessions", json={
        "equipoId": team["id"],
        "startDate": "2025-01-06",
        "daysOfWeek": [1],
        "startTime": "18:00",
        "endTime": "19:30",
        "timezoneOffset": -60,
    })
    assert response.status_code == 200
    created = response.json()
    assert created[0]["inicio"] == "2025-01-06T18:00:00"
    assert created[0]["fin"] == "2025-01-06T19:30:00"


def test_out_of_range_timezone_offset_is_rejected(client, team):
    response = client.post("/training-sessions", json={
        "equipoId": team["id"],
        "startDate": "2025-01-06",
        "daysOfWeek": [1],
        "startTime": "18:00",
        "timezoneOffset": 10 ** 9,
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Datos inválidos"}
