# cantera_backend/routes/attendance_routes.py
# Attendance per training session or per calendar date.
# A save always replaces the whole set of records for that key.

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import get_or_404
from cantera_backend.core.database import get_session
from cantera_backend.models.attendance_model import (
    AttendanceRecord, AttendanceSaveRequest, AttendanceRecordRead
)
from cantera_backend.models.team_model import Team
from cantera_backend.models.training_model import TrainingSession
from cantera_backend.services.stats import attendance_percentage
from cantera_backend.services.training import parse_date_only

logger = logging.getLogger(__name__)

router = APIRouter()


def to_read(record: AttendanceRecord) -> AttendanceRecordRead:
    return AttendanceRecordRead(
        id=record.id,
        team_id=record.team_id,
        player_id=record.player_id,
        session_id=record.session_id,
        session_date=record.session_date,
        attended=record.attended,
        reason=record.reason,
    )


def _keyed_statement(team_id: Optional[int], session_date, session_id: Optional[int]):
    """Records for a training session, or for team + date."""
    statement = select(AttendanceRecord)
    if session_id is not None:
        return statement.where(AttendanceRecord.session_id == session_id)
    return statement.where(
        AttendanceRecord.team_id == team_id,
        AttendanceRecord.session_date == session_date,
        AttendanceRecord.session_id.is_(None),
    )


# ==========================================
# READ ATTENDANCE
# ==========================================
@router.get("", response_model=List[AttendanceRecordRead])
def get_attendance(
    team_id: Optional[int] = Query(default=None, alias="equipoId"),
    fecha: Optional[str] = Query(default=None),
    session_id: Optional[int] = Query(default=None, alias="entrenamientoId"),
    player_id: Optional[int] = Query(default=None, alias="jugadorId"),
    session: Session = Depends(get_session),
):
    """
    ?entrenamientoId=  records of a session
    ?equipoId=&fecha=  records of a team on a date
    ?jugadorId=        full history of a player
    Anything else returns an empty list.
    """
    if player_id is not None:
        statement = select(AttendanceRecord).where(AttendanceRecord.player_id == player_id)
    elif session_id is not None:
        statement = _keyed_statement(None, None, session_id)
    else:
        session_date = parse_date_only(fecha)
        if team_id is None or session_date is None:
            return []
        statement = _keyed_statement(team_id, session_date, None)

    records = session.exec(statement.order_by(AttendanceRecord.id)).all()
    return [to_read(record) for record in records]


@router.get("/summary")
def get_attendance_summary(
    team_id: int = Query(alias="equipoId"),
    player_id: Optional[int] = Query(default=None, alias="jugadorId"),
    session: Session = Depends(get_session),
):
    """Attendance percentage of a team (or one of its players)."""
    statement = select(AttendanceRecord).where(AttendanceRecord.team_id == team_id)
    if player_id is not None:
        statement = statement.where(AttendanceRecord.player_id == player_id)
    records = session.exec(statement).all()
    return {
        "team_id": team_id,
        "player_id": player_id,
        "records": len(records),
        "percentage": attendance_percentage(records),
    }


# ==========================================
# SAVE (REPLACE) ATTENDANCE
# ==========================================
@router.post("", response_model=List[AttendanceRecordRead])
def save_attendance(data: AttendanceSaveRequest, session: Session = Depends(get_session)):
    # 1. Verify team (and session) exist
    get_or_404(session, Team, data.team_id, "Equipo no encontrado")
    session_date = data.session_date
    if data.session_id is not None:
        training = get_or_404(session, TrainingSession, data.session_id, "Entrenamiento no encontrado")
        if training.team_id != data.team_id:
            raise HTTPException(status_code=400, detail="El entrenamiento no pertenece al equipo")
        session_date = training.starts_at.date()

    # 2. Drop whatever was stored for this key
    for record in session.exec(_keyed_statement(data.team_id, data.session_date, data.session_id)).all():
        session.delete(record)

    # 3. Insert the new set (last entry wins for repeated players)
    entries = {entry.player_id: entry for entry in data.records}
    created = [
        AttendanceRecord(
            team_id=data.team_id,
            player_id=entry.player_id,
            session_id=data.session_id,
            session_date=session_date,
            attended=entry.attended,
            reason=entry.reason,
        )
        for entry in entries.values()
    ]
    session.add_all(created)
    session.commit()
    for record in created:
        session.refresh(record)

    logger.info("Saved %d attendance records for team %s", len(created), data.team_id)
    return [to_read(record) for record in created]


# ==========================================
# DELETE ATTENDANCE
# ==========================================
@router.delete("")
def delete_attendance(
    team_id: Optional[int] = Query(default=None, alias="equipoId"),
    fecha: Optional[str] = Query(default=None),
    session_id: Optional[int] = Query(default=None, alias="entrenamientoId"),
    session: Session = Depends(get_session),
):
    session_date = parse_date_only(fecha)
    if session_id is None and (team_id is None or session_date is None):
        raise HTTPException(status_code=400, detail="Datos inválidos")

    for record in session.exec(_keyed_statement(team_id, session_date, session_id)).all():
        session.delete(record)
    session.commit()
    return {"ok": True}
