# cantera_backend/routes/match_routes.py
# Matches: fixture details, the lineup editor, minutes played and the event timeline.

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from cantera_backend.core.config import LINEUP_STRICT_VALIDATION
from cantera_backend.core.crud import apply_update, delete, get_or_404, save
from cantera_backend.core.database import get_session
from cantera_backend.core.errors import MatchFinishedError
from cantera_backend.core.formations import detect_formation, get_formation_positions
from cantera_backend.core.match_minutes import (
    build_event_metadata, decode_event, to_absolute_minute
)
from cantera_backend.models.match_model import (
    Match, MatchCreate, MatchUpdate, MatchEvent,
    MatchEventCreate, MatchEventUpdate, LineupRequest, MinutesRequest,
)
from cantera_backend.models.player_model import Player
from cantera_backend.models.team_model import Team
from cantera_backend.services.lineup import build_lineup
from cantera_backend.services.match import (
    event_to_read, load_events, load_lineup, load_sheet, previous_minutes,
    replace_lineup, sheet_to_read,
)
from cantera_backend.services.stats import match_score

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Partido no encontrado"
EVENT_NOT_FOUND = "Evento no encontrado"


def ensure_editable(match: Match):
    if match.finished:
        raise MatchFinishedError("El partido ya ha finalizado")


# ==========================================
# READ MATCHES
# ==========================================
@router.get("")
def get_matches(
    match_id: Optional[int] = Query(default=None, alias="id"),
    team_id: Optional[int] = Query(default=None, alias="equipoId"),
    session: Session = Depends(get_session),
):
    """
    ?id=        full match sheet (lineup, formation, events, score)
    ?equipoId=  matches of a team
    no params   every match
    """
    if match_id is not None:
        match = get_or_404(session, Match, match_id, NOT_FOUND)
        return sheet_to_read(load_sheet(session, match))

    statement = select(Match)
    if team_id is not None:
        statement = statement.where(Match.team_id == team_id)
    matches = session.exec(statement.order_by(Match.kickoff, Match.id)).all()

    # List rows carry the score but not the full lineup
    rows = []
    for match in matches:
        sheet = load_sheet(session, match)
        rows.append({
            **match.model_dump(),
            "is_home": match.is_home,
            "formation": detect_formation(sheet.lineup),
            **match_score(sheet),
        })
    return rows


# ==========================================
# CREATE / UPDATE / DELETE MATCH
# ==========================================
@router.post("", status_code=201)
def create_match(data: MatchCreate, session: Session = Depends(get_session)):
    get_or_404(session, Team, data.team_id, "Equipo no encontrado")

    match = Match(**data.model_dump())
    # Without explicit sides the own team plays at home
    if match.home_team_id is None and match.away_team_id is None:
        match.home_team_id = data.team_id
    match = save(session, match)

    logger.info("Created match %s for team %s", match.id, match.team_id)
    return sheet_to_read(load_sheet(session, match))


@router.put("")
def update_match(data: MatchUpdate, session: Session = Depends(get_session)):
    match = get_or_404(session, Match, data.id, NOT_FOUND)
    apply_update(match, data)
    match = save(session, match)
    return sheet_to_read(load_sheet(session, match))


@router.delete("")
def delete_match(match_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    match = get_or_404(session, Match, match_id, NOT_FOUND)

    # Lineup and events belong to the match
    for slot in load_lineup(session, match_id):
        session.delete(slot)
    for event in load_events(session, match_id):
        session.delete(event)

    return delete(session, match)


# ==========================================
# LINEUP (WHOLE REPLACEMENT)
# ==========================================
@router.put("/lineup")
def update_lineup(data: LineupRequest, session: Session = Depends(get_session)):
    """
    Replace the lineup of a match with the submitted starters / bench / unavailable
    buckets. Starters are placed on the formation positions in order unless an
    explicit "POSITION:playerId" assignment says otherwise.
    """
    # 1. Load match and check it can still be edited
    match = get_or_404(session, Match, data.match_id, NOT_FOUND)
    ensure_editable(match)

    # 2. Roster of the own team and minutes already recorded
    roster = session.exec(select(Player).where(Player.team_id == match.team_id)).all()
    current = load_lineup(session, match.id)
    formation_key = data.formation or detect_formation(current)

    # 3. Resolve the lineup (strict mode raises LineupValidationError)
    result = build_lineup(
        roster=roster,
        positions=get_formation_positions(formation_key),
        starters=data.starters,
        bench=data.bench,
        unavailable=data.unavailable,
        assignments=data.assignments,
        previous_minutes=previous_minutes(current),
        strict=LINEUP_STRICT_VALIDATION,
    )

    # 4. Persist
    replace_lineup(session, match, result)

    response = sheet_to_read(load_sheet(session, match)).model_dump()
    response["dropped_assignments"] = [
        {"assignment": pair, "reason": reason} for pair, reason in result.dropped_assignments
    ]
    return response


# ==========================================
# MINUTES PLAYED
# ==========================================
@router.put("/minutes")
def update_minutes(data: MinutesRequest, session: Session = Depends(get_session)):
    """Minutes and goalkeeper numbers, filled in before the match is closed."""
    match = get_or_404(session, Match, data.match_id, NOT_FOUND)
    ensure_editable(match)
    slots = {slot.player_id: slot for slot in load_lineup(session, match.id)}

    for entry in data.slots:
        slot = slots.get(entry.player_id)
        if slot is None:
            raise HTTPException(status_code=400, detail="El jugador no está en la convocatoria")
        slot.minutes = entry.minutes
        if entry.clean_sheet is not None:
            slot.clean_sheet = entry.clean_sheet
        if entry.goals_conceded is not None:
            slot.goals_conceded = entry.goals_conceded
        session.add(slot)

    session.commit()
    return sheet_to_read(load_sheet(session, match))


# ==========================================
# EVENTS
# ==========================================
@router.get("/events")
def get_events(match_id: int = Query(alias="partidoId"), session: Session = Depends(get_session)):
    get_or_404(session, Match, match_id, NOT_FOUND)
    return [event_to_read(event) for event in load_events(session, match_id)]


@router.post("/events", status_code=201)
def create_event(data: MatchEventCreate, session: Session = Depends(get_session)):
    match = get_or_404(session, Match, data.match_id, NOT_FOUND)
    if data.player_id is not None:
        get_or_404(session, Player, data.player_id, "Jugador no encontrado")

    team_id = data.team_id
    if team_id is None and data.player_id is not None:
        team_id = match.team_id

    event = MatchEvent(
        match_id=match.id,
        type=data.type.value,
        minute=to_absolute_minute(data.period.value, data.relative_minute),
        player_id=data.player_id,
        team_id=team_id,
        description=data.description,
        data=build_event_metadata(data.period.value, data.relative_minute),
    )
    return event_to_read(save(session, event))


@router.put("/events")
def update_event(data: MatchEventUpdate, session: Session = Depends(get_session)):
    event = get_or_404(session, MatchEvent, data.id, EVENT_NOT_FOUND)
    decoded = decode_event(event.minute, event.data)

    period = data.period.value if data.period is not None else decoded.period
    relative = data.relative_minute if data.relative_minute is not None else decoded.relative_minute

    apply_update(event, data, exclude=("id", "type", "period", "relative_minute"))
    if data.type is not None:
        event.type = data.type.value
    event.minute = to_absolute_minute(period, relative)
    event.data = build_event_metadata(period, relative, base=event.data)
    return event_to_read(save(session, event))


@router.delete("/events")
def delete_event(event_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    event = get_or_404(session, MatchEvent, event_id, EVENT_NOT_FOUND)
    return delete(session, event)
