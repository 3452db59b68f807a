# cantera_backend/services/lineup.py
# Lineup assignment engine: turns the starters / bench / unavailable buckets
# submitted by the lineup editor into a conflict-free list of player slots.

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from cantera_backend.core.errors import LineupValidationError
from cantera_backend.models.match_model import SlotRole

logger = logging.getLogger(__name__)


@dataclass
class SlotDraft:
    """A lineup row ready to be persisted as a MatchPlayerSlot."""
    player_id: int
    role: SlotRole
    position: Optional[str] = None
    jersey_number: Optional[int] = None
    minutes: int = 0


@dataclass
class LineupResult:
    slots: List[SlotDraft]
    actual_starters: List[int]
    # Raw "POSITION:playerId" pairs that were ignored, with the reason
    dropped_assignments: List[Tuple[str, str]] = field(default_factory=list)

    def by_role(self, role: SlotRole) -> List[SlotDraft]:
        return [slot for slot in self.slots if slot.role == role]


def dedupe(ids: Iterable[int]) -> List[int]:
    """Drop repeated ids, keeping the first occurrence order."""
    seen: Set[int] = set()
    unique = []
    for player_id in ids:
        if player_id in seen:
            continue
        seen.add(player_id)
        unique.append(player_id)
    return unique


def _parse_player_id(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value != int(value):
        return None
    return int(value)


def parse_assignments(
    pairs: Iterable[str],
    starters: Sequence[int],
    positions: Optional[Sequence[str]] = None,
) -> Tuple[Dict[str, int], List[Tuple[str, str]]]:
    """
    Build the position -> player map from explicit "POSITION:playerId" pairs.

    A pair is kept only when the position is non-empty, the id is a whole
    number, the player is one of the starters, and no earlier pair claimed
    the position (first writer wins). A player can hold only one position, and
    when `positions` is given the position must belong to that formation.
    Returns (assignments, dropped) where dropped holds (pair, reason).
    """
    starter_set = set(starters)
    formation_set = set(positions) if positions is not None else None
    assignments: Dict[str, int] = {}
    dropped: List[Tuple[str, str]] = []

    for pair in pairs:
        position, sep, raw_id = pair.partition(":")
        position = position.strip()
        if not sep or not position:
            dropped.append((pair, "posición vacía"))
            continue
        if formation_set is not None and position not in formation_set:
            dropped.append((pair, "posición fuera de la formación"))
            continue

        player_id = _parse_player_id(raw_id)
        if player_id is None:
            dropped.append((pair, "identificador de jugador inválido"))
            continue
        if player_id not in starter_set:
            dropped.append((pair, "el jugador no está entre los titulares"))
            continue
        if position in assignments:
            dropped.append((pair, "posición ya asignada"))
            continue
        if player_id in assignments.values():
            dropped.append((pair, "jugador ya asignado"))
            continue

        assignments[position] = player_id

    return assignments, dropped


def build_lineup(
    roster: Iterable,
    positions: Sequence[str],
    starters: Iterable[int] = (),
    bench: Iterable[int] = (),
    unavailable: Iterable[int] = (),
    assignments: Iterable[str] = (),
    previous_minutes: Optional[Mapping[int, int]] = None,
    strict: bool = False,
) -> LineupResult:
    """
    Resolve a lineup submission against the team roster and a formation.

    roster:            players of the team (objects with `id` and `jersey_number`)
    positions:         ordered formation positions
    previous_minutes:  minutes already recorded for this match, kept on edit
    strict:            raise LineupValidationError instead of dropping bad assignments
    """
    jerseys = {player.id: player.jersey_number for player in roster}
    previous_minutes = previous_minutes or {}

    # 1. Deduplicate buckets; ids outside the roster can't be slotted
    unique_starters = [pid for pid in dedupe(starters) if pid in jerseys]
    unique_bench = [pid for pid in dedupe(bench) if pid in jerseys]
    unique_unavailable = [pid for pid in dedupe(unavailable) if pid in jerseys]

    # 2. Explicit position assignments
    assigned, dropped = parse_assignments(assignments, unique_starters, positions)

    if dropped:
        if strict:
            raise LineupValidationError(
                "Asignaciones de posición inválidas",
                problems=[f"{pair} ({reason})" for pair, reason in dropped],
            )
        for pair, reason in dropped:
            logger.warning("Ignoring lineup assignment %r: %s", pair, reason)

    # 3. Walk the formation: explicit assignment first, then first unused starter
    explicitly_placed = set(assigned.values())
    used: Set[int] = set()
    slots: List[SlotDraft] = []
    actual_starters: List[int] = []
    queue = iter(pid for pid in unique_starters if pid not in explicitly_placed)

    for position in positions:
        player_id = assigned.get(position)
        if player_id is None or player_id in used:
            player_id = next(queue, None)
        if player_id is None:
            continue

        # 4. Mark as used
        used.add(player_id)
        actual_starters.append(player_id)
        slots.append(SlotDraft(
            player_id=player_id,
            role=SlotRole.FIELD,
            position=position,
            jersey_number=jerseys.get(player_id),
            minutes=previous_minutes.get(player_id, 0),
        ))

    # 5. Bench: everyone submitted who didn't make the starting positions
    bench_ids = [pid for pid in unique_bench if pid not in used]
    for player_id in bench_ids:
        slots.append(SlotDraft(
            player_id=player_id,
            role=SlotRole.BENCH,
            jersey_number=jerseys.get(player_id),
            minutes=previous_minutes.get(player_id, 0),
        ))

    # 6. Unavailable: not on the field, not on the bench
    bench_set = set(bench_ids)
    for player_id in unique_unavailable:
        if player_id in used or player_id in bench_set:
            continue
        slots.append(SlotDraft(
            player_id=player_id,
            role=SlotRole.UNAVAILABLE,
            jersey_number=jerseys.get(player_id),
            minutes=0,
        ))

    return LineupResult(slots=slots, actual_starters=actual_starters, dropped_assignments=dropped)
