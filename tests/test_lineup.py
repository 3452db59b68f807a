from types import SimpleNamespace

import pytest

from cantera_backend.core.errors import LineupValidationError
from cantera_backend.core.formations import get_formation_positions
from cantera_backend.models.match_model import SlotRole
from cantera_backend.services.lineup import build_lineup, dedupe, parse_assignments


def _roster(count=16):
    return [SimpleNamespace(id=i, jersey_number=i + 10) for i in range(1, count + 1)]


def _assert_no_conflicts(result):
    player_ids = [slot.player_id for slot in result.slots]
    assert len(player_ids) == len(set(player_ids))
    positions = [slot.position for slot in result.by_role(SlotRole.FIELD)]
    assert len(positions) == len(set(positions))


def test_starters_fill_positions_in_order():
    result = build_lineup(_roster(), ["GK", "LB", "RB"], starters=[1, 2, 3])
    assert [(s.player_id, s.position) for s in result.slots] == [(1, "GK"), (2, "LB"), (3, "RB")]
    assert result.actual_starters == [1, 2, 3]
    assert result.slots[0].jersey_number == 11


def test_duplicates_are_dropped():
    assert dedupe([4, 2, 4, 1, 2]) == [4, 2, 1]

    result = build_lineup(_roster(), ["GK", "LB", "RB"], starters=[1, 1, 2], bench=[5, 5])
    assert result.actual_starters == [1, 2]
    assert [s.player_id for s in result.by_role(SlotRole.BENCH)] == [5]
    _assert_no_conflicts(result)


def test_explicit_assignment_wins_over_order():
    result = build_lineup(
        _roster(), ["GK", "LB", "RB"],
        starters=[1, 2, 3],
        assignments=["RB:1"],
    )
    placed = {s.position: s.player_id for s in result.by_role(SlotRole.FIELD)}
    assert placed == {"GK": 2, "LB": 3, "RB": 1}
    _assert_no_conflicts(result)


def test_first_assignment_claims_the_position():
    assigned, dropped = parse_assignments(["GK:1", "GK:2", "LB:x", ":3", "RB:9"], starters=[1, 2, 3])
    assert assigned == {"GK": 1}
    assert [pair for pair, _ in dropped] == ["GK:2", "LB:x", ":3", "RB:9"]


def test_whole_number_ids_accepted_in_assignments():
    assigned, dropped = parse_assignments(["GK:2.0", "LB:2.5"], starters=[2])
    assert assigned == {"GK": 2}
    assert len(dropped) == 1


def test_extra_starters_fall_back_to_bench():
    positions = get_formation_positions("4-3-3")
    starters = list(range(1, 14))
    result = build_lineup(_roster(), positions, starters=starters, bench=[12, 14])

    assert len(result.actual_starters) == len(positions)
    assert [s.player_id for s in result.by_role(SlotRole.BENCH)] == [12, 14]
    # Starter 13 was not submitted anywhere else
    assert 13 not in [s.player_id for s in result.slots]
    _assert_no_conflicts(result)


def test_unavailable_excludes_field_and_bench():
    result = build_lineup(
        _roster(), ["GK", "LB"],
        starters=[1, 2], bench=[3], unavailable=[1, 3, 4],
    )
    assert [s.player_id for s in result.by_role(SlotRole.UNAVAILABLE)] == [4]


def test_players_outside_roster_are_ignored():
    result = build_lineup(_roster(3), ["GK", "LB"], starters=[1, 99], bench=[42])
    assert [s.player_id for s in result.slots] == [1]
    assert len(result.slots) <= 3


def test_previous_minutes_are_kept():
    result = build_lineup(
        _roster(), ["GK"],
        starters=[1], bench=[2], unavailable=[3],
        previous_minutes={1: 80, 2: 15, 3: 30},
    )
    minutes = {s.player_id: s.minutes for s in result.slots}
    assert minutes == {1: 80, 2: 15, 3: 0}


def test_assignment_outside_formation_is_dropped():
    result = build_lineup(_roster(), ["GK", "LB"], starters=[1, 2], assignments=["ST:2"])
    assert [(s.player_id, s.position) for s in result.slots] == [(1, "GK"), (2, "LB")]
    assert result.dropped_assignments == [("ST:2", "posición fuera de la formación")]


def test_strict_mode_rejects_bad_assignments():
    with pytest.raises(LineupValidationError) as excinfo:
        build_lineup(_roster(), ["GK", "LB"], starters=[1, 2], assignments=["GK:7"], strict=True)
    assert excinfo.value.problems


def test_strict_mode_accepts_valid_assignments():
    result = build_lineup(_roster(), ["GK", "LB"], starters=[1, 2], assignments=["LB:1"], strict=True)
    assert result.actual_starters == [2, 1]


def test_player_holds_only_one_assigned_position():
    result = build_lineup(
        _roster(), ["GK", "LB", "RB"],
        starters=[1, 2, 3],
        assignments=["GK:1", "LB:1"],
    )
    placed = {s.position: s.player_id for s in result.by_role(SlotRole.FIELD)}
    assert placed == {"GK": 1, "LB": 2, "RB": 3}
    assert result.dropped_assignments == [("LB:1", "jugador ya asignado")]
    _assert_no_conflicts(result)


def test_strict_mode_rejects_player_assigned_twice():
    with pytest.raises(LineupValidationError) as excinfo:
        build_lineup(
            _roster(), ["GK", "LB", "RB"],
            starters=[1, 2, 3],
            assignments=["GK:1", "LB:1"],
            strict=True,
        )
    assert excinfo.value.problems == ["LB:1 (jugador ya asignado)"]
