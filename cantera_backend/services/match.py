# cantera_backend/services/match.py
# Loading, decoding and saving match data on top of the SQLModel session.

import logging
from typing import Dict, List, Sequence

from sqlmodel import Session, select

from cantera_backend.core.formations import detect_formation
from cantera_backend.core.match_minutes import decode_event
from cantera_backend.models.match_model import (
    Match, MatchEvent, MatchPlayerSlot, MatchEventRead, MatchRead, PlayerSlotRead
)
from cantera_backend.services.lineup import LineupResult
from cantera_backend.services.stats import MatchSheet, match_score

logger = logging.getLogger(__name__)


def load_lineup(session: Session, match_id: int) -> List[MatchPlayerSlot]:
    return session.exec(
        select(MatchPlayerSlot)
        .where(MatchPlayerSlot.match_id == match_id)
        .order_by(MatchPlayerSlot.sort_order, MatchPlayerSlot.id)
    ).all()


def load_events(session: Session, match_id: int) -> List[MatchEvent]:
    events = session.exec(select(MatchEvent).where(MatchEvent.match_id == match_id)).all()
    # Timeline order uses the decoded minute so old and new events interleave correctly
    return sorted(events, key=lambda e: (decode_event(e.minute, e.data).absolute_minute, e.id))


def load_sheet(session: Session, match: Match) -> MatchSheet:
    return MatchSheet(
        match=match,
        lineup=load_lineup(session, match.id),
        events=load_events(session, match.id),
    )


def load_team_sheets(session: Session, team_id: int, finished_only: bool = False) -> List[MatchSheet]:
    statement = select(Match).where(Match.team_id == team_id)
    if finished_only:
        statement = statement.where(Match.finished == True)  # noqa: E712
    matches = session.exec(statement.order_by(Match.kickoff, Match.id)).all()
    return [load_sheet(session, match) for match in matches]


def event_to_read(event: MatchEvent) -> MatchEventRead:
    decoded = decode_event(event.minute, event.data)
    return MatchEventRead(
        id=event.id,
        match_id=event.match_id,
        type=event.type,
        minute=decoded.absolute_minute,
        period=decoded.period,
        relative_minute=decoded.relative_minute,
        minute_label=decoded.label,
        player_id=event.player_id,
        team_id=event.team_id,
        description=event.description,
        data=event.data,
    )


def sheet_to_read(sheet: MatchSheet) -> MatchRead:
    match = sheet.match
    score = match_score(sheet)
    return MatchRead(
        id=match.id,
        team_id=match.team_id,
        home_team_id=match.home_team_id,
        away_team_id=match.away_team_id,
        is_home=match.is_home,
        kickoff=match.kickoff,
        competition=match.competition,
        matchday=match.matchday,
        opponent_notes=match.opponent_notes,
        finished=match.finished,
        formation=detect_formation(sheet.lineup),
        goals_for=score["goals_for"],
        goals_against=score["goals_against"],
        lineup=[PlayerSlotRead.model_validate(slot) for slot in sheet.lineup],
        events=[event_to_read(event) for event in sheet.events],
    )


def previous_minutes(slots: Sequence[MatchPlayerSlot]) -> Dict[int, int]:
    return {slot.player_id: slot.minutes or 0 for slot in slots}


def replace_lineup(session: Session, match: Match, result: LineupResult) -> List[MatchPlayerSlot]:
    """Whole-lineup replacement: the stored rows are dropped and rebuilt in order."""
    for slot in load_lineup(session, match.id):
        session.delete(slot)
    # Deletes must hit the table before the inserts (unique match/player pair)
    session.flush()

    new_slots = [
        MatchPlayerSlot(
            match_id=match.id,
            player_id=draft.player_id,
            role=draft.role,
            position=draft.position,
            jersey_number=draft.jersey_number,
            minutes=draft.minutes,
            sort_order=index,
        )
        for index, draft in enumerate(result.slots)
    ]
    session.add_all(new_slots)
    session.commit()

    logger.info(
        "Saved lineup for match %s: %d field, %d bench, %d unavailable",
        match.id,
        len(result.actual_starters),
        sum(1 for s in result.slots if s.role == "bench"),
        sum(1 for s in result.slots if s.role == "unavailable"),
    )
    return new_slots
