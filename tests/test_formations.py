from types import SimpleNamespace

from cantera_backend.core.formations import (
    DEFAULT_FORMATION_KEY, FORMATIONS, detect_formation, get_formation_positions,
    list_formations, resolve_formation_key,
)


def _slot(position, role="field"):
    return SimpleNamespace(position=position, role=role)


def test_every_formation_has_eleven_unique_positions():
    for key, data in FORMATIONS.items():
        positions = data["positions"]
        assert len(positions) == 11, key
        assert len(set(positions)) == 11, key
        assert positions[0] == "GK"


def test_catalog_uses_central_midfield_vocabulary():
    assert get_formation_positions("4-3-3") == (
        "GK", "LB", "LCB", "RCB", "RB", "LCM", "CM", "RCM", "LW", "ST", "RW"
    )


def test_unknown_key_falls_back_to_default():
    assert DEFAULT_FORMATION_KEY == "4-3-3"
    assert get_formation_positions("9-9-9") == get_formation_positions("4-3-3")
    assert get_formation_positions(None) == get_formation_positions("4-3-3")
    assert resolve_formation_key("9-9-9") == "4-3-3"
    assert resolve_formation_key("3-5-2") == "3-5-2"


def test_positions_are_immutable():
    assert isinstance(get_formation_positions("4-4-2"), tuple)


def test_list_formations():
    listed = {item["key"]: item for item in list_formations()}
    assert set(listed) == {"4-3-3", "4-4-2", "3-5-2", "4-2-3-1"}
    assert listed["4-4-2"]["positions"][-2:] == ["LS", "RS"]


def test_detect_formation_from_full_lineup():
    slots = [_slot(p) for p in FORMATIONS["3-5-2"]["positions"]]
    slots.append(_slot(None, role="bench"))
    assert detect_formation(slots) == "3-5-2"


def test_detect_formation_defaults_when_incomplete_or_empty():
    assert detect_formation([]) == DEFAULT_FORMATION_KEY
    assert detect_formation([_slot("GK"), _slot("LS")]) == DEFAULT_FORMATION_KEY


def test_formation_endpoints(client):
    response = client.get("/formations")
    assert response.status_code == 200
    assert len(response.json()) == 4

    response = client.get("/formations/4-2-3-1")
    assert response.status_code == 200
    assert "CAM" in response.json()["positions"]

    response = client.get("/formations/1-1-1")
    assert response.status_code == 404
    assert response.json() == {"error": "Formación no encontrada"}
